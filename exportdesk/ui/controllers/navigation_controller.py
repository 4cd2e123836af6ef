from __future__ import annotations

import logging
from typing import Any

from exportdesk.utils.i18n import strings

logger = logging.getLogger(__name__)


class NavigationController:
    PAGE_INDICES = {
        "dashboards": 0,
        "alerts": 1,
        "export": 2,
    }

    PAGE_LABEL_KEYS = {
        "dashboards": "nav_dashboards",
        "alerts": "nav_alerts",
        "export": "nav_export",
    }

    def on_page_changed(self, host: Any, page_name: str) -> None:
        try:
            if page_name not in self.PAGE_INDICES:
                return

            host.page_stack.setCurrentIndex(self.PAGE_INDICES[page_name])
            if page_name == "export":
                host.refresh_export_page()

            label = strings.tr(self.PAGE_LABEL_KEYS.get(page_name, ""))
            is_loading = bool(getattr(host, "loader", None) and host.loader.is_loading)
            if label and not is_loading:
                host.status_label.setText(label)
        except Exception:
            logger.exception("Navigation error: %s", page_name)

    def navigate_to(self, host: Any, page_name: str) -> None:
        if hasattr(host, "sidebar"):
            host.sidebar.set_page(page_name)
        self.on_page_changed(host, page_name)
