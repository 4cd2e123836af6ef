"""
Page switcher for the main window.

Each catalog button carries the number of items currently checked on that
page; the export button carries the combined total.
"""
from PySide6.QtWidgets import QVBoxLayout, QPushButton, QButtonGroup, QFrame, QLabel
from PySide6.QtCore import Qt, Signal

from exportdesk.core.models import KIND_ALERTS, KIND_DASHBOARDS
from exportdesk.utils.i18n import strings


class Sidebar(QFrame):
    page_changed = Signal(str)

    WIDTH = 168

    PAGES = [
        ("dashboards", "nav_dashboards"),
        ("alerts", "nav_alerts"),
        ("export", "nav_export"),
    ]

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("sidebar")
        self.setFixedWidth(self.WIDTH)
        self.current_page = "dashboards"
        self.counts = {name: 0 for name, _ in self.PAGES}

        layout = QVBoxLayout(self)
        layout.setContentsMargins(10, 18, 10, 14)
        layout.setSpacing(6)

        title = QLabel(strings.tr("app_title"))
        title.setObjectName("sidebar_title")
        title.setWordWrap(True)
        layout.addWidget(title)
        layout.addSpacing(10)

        self.button_group = QButtonGroup(self)
        self.button_group.setExclusive(True)
        self.buttons = {}
        for name, key in self.PAGES:
            if name == "export":
                layout.addStretch()
            btn = QPushButton()
            btn.setObjectName("sidebar_btn")
            btn.setCheckable(True)
            btn.setCursor(Qt.PointingHandCursor)
            btn.clicked.connect(lambda _checked=False, n=name: self._on_nav_clicked(n))
            self.button_group.addButton(btn)
            self.buttons[name] = btn
            layout.addWidget(btn)

        self.buttons[self.current_page].setChecked(True)
        self._refresh_labels()

    def set_selection_counts(self, dashboards: int, alerts: int):
        self.counts[KIND_DASHBOARDS] = int(dashboards)
        self.counts[KIND_ALERTS] = int(alerts)
        self.counts["export"] = int(dashboards) + int(alerts)
        self._refresh_labels()

    def label_for(self, name: str) -> str:
        return self.buttons[name].text()

    def _refresh_labels(self):
        for name, key in self.PAGES:
            count = self.counts.get(name, 0)
            label = strings.tr(key)
            self.buttons[name].setText(f"{label}  ({count})" if count else label)

    def _on_nav_clicked(self, name: str):
        if name != self.current_page:
            self.current_page = name
            self.page_changed.emit(name)

    def set_page(self, name: str):
        if name in self.buttons:
            self.buttons[name].setChecked(True)
            self.current_page = name
