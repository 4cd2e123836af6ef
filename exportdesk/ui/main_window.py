import logging

from PySide6.QtWidgets import (
    QMainWindow,
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QLabel,
    QStackedWidget,
    QScrollArea,
    QFileDialog,
)
from PySide6.QtCore import QSettings

from exportdesk.core.api_client import ApiClient
from exportdesk.core.config import ClientSettings
from exportdesk.core.export_negotiator import ExportDownload, ExportNegotiator, ExportSummary
from exportdesk.core.models import COLLECTION_KINDS, KIND_ALERTS, KIND_DASHBOARDS
from exportdesk.ui.app_state import CatalogSession
from exportdesk.ui.components.loading_overlay import LoadingOverlay
from exportdesk.ui.components.sidebar import Sidebar
from exportdesk.ui.components.toast import ToastManager
from exportdesk.ui.controllers import ExportController, LoadController, NavigationController
from exportdesk.ui.controllers.export_controller import download_lines, summary_lines
from exportdesk.ui.pages.catalog_page import build_catalog_page
from exportdesk.ui.pages.export_page import build_export_page
from exportdesk.ui.theme import ModernTheme
from exportdesk.utils.i18n import strings

logger = logging.getLogger(__name__)


class ExportDeskWindow(QMainWindow):
    def __init__(
        self,
        client_settings=None,
        *,
        client=None,
        settings=None,
        load_executor=None,
        export_executor=None,
        autostart=True,
    ):
        super().__init__()
        self.setWindowTitle(strings.tr("app_title"))
        self.resize(1200, 820)

        self.client_settings = client_settings or ClientSettings.from_env()
        self.settings = settings or QSettings("ExportDesk", "ExportDesk")
        self.client = client or ApiClient(
            self.client_settings.base_url,
            timeout_s=self.client_settings.timeout_s,
        )

        self.session = CatalogSession(self)
        self.negotiator = ExportNegotiator(self.client, download_dir=self.client_settings.download_dir)
        self.loader = LoadController(self.session, self.client, self, executor=load_executor)
        self.exporter = ExportController(self.session, self.negotiator, self, executor=export_executor)
        self.navigation = NavigationController()

        self.init_ui()
        self.setStyleSheet(ModernTheme.get_stylesheet())

        self.toast_manager = ToastManager(self)
        self.overlay = LoadingOverlay(self.centralWidget())

        self._connect_signals()
        self.load_settings()

        for kind in COLLECTION_KINDS:
            self._render_folder_tree(kind)
            self._render_items(kind)
        self.refresh_export_page()

        if autostart:
            self.loader.start()

    def init_ui(self):
        central_widget = QWidget()
        self.setCentralWidget(central_widget)

        main_h_layout = QHBoxLayout(central_widget)
        main_h_layout.setSpacing(0)
        main_h_layout.setContentsMargins(0, 0, 0, 0)

        self.sidebar = Sidebar(self)
        self.sidebar.page_changed.connect(self._on_page_changed)
        main_h_layout.addWidget(self.sidebar)

        content_widget = QWidget()
        content_layout = QVBoxLayout(content_widget)
        content_layout.setSpacing(0)
        content_layout.setContentsMargins(0, 0, 0, 0)
        main_h_layout.addWidget(content_widget, 1)

        self.page_stack = QStackedWidget()
        content_layout.addWidget(self.page_stack, 1)

        # Page order must match NavigationController.PAGE_INDICES.
        self.dashboards_page = build_catalog_page(self, KIND_DASHBOARDS)
        self.page_stack.addWidget(self.dashboards_page)

        self.alerts_page = build_catalog_page(self, KIND_ALERTS)
        self.page_stack.addWidget(self.alerts_page)

        self.export_page = build_export_page(self)
        export_scroll = QScrollArea()
        export_scroll.setWidgetResizable(True)
        export_scroll.setFrameShape(QScrollArea.NoFrame)
        export_scroll.setWidget(self.export_page)
        self.page_stack.addWidget(export_scroll)

        status_container = QHBoxLayout()
        status_container.setContentsMargins(16, 8, 16, 8)
        self.status_label = QLabel(strings.tr("status_ready"))
        self.status_label.setObjectName("muted")
        status_container.addWidget(self.status_label, 1)
        content_layout.addLayout(status_container)

    def _connect_signals(self):
        self.session.folders_changed.connect(self._on_folders_changed)
        self.session.items_changed.connect(self._render_items)
        self.session.selection_changed.connect(self._on_selection_changed)
        self.session.affordance_changed.connect(self._update_export_affordance)
        self.session.config_changed.connect(self._on_config_changed)

        self.loader.stage_changed.connect(self._on_stage_changed)
        self.loader.loading_finished.connect(self._on_loading_finished)
        self.loader.notice.connect(self.toast_manager.notify)

        self.exporter.stage_changed.connect(self._on_stage_changed)
        self.exporter.export_finished.connect(self._on_export_finished)
        self.exporter.export_failed.connect(self._on_export_failed)

    def closeEvent(self, event):
        self.save_settings()
        self.toast_manager.dismiss_all()
        self.loader.close()
        self.exporter.close()
        self.client.close()
        event.accept()

    # ----- settings -----

    def save_settings(self):
        self.settings.setValue("app/geometry", self.saveGeometry())
        self.settings.setValue("export/include_alerts", self.chk_include_alerts.isChecked())
        if self.chk_export_zip.isEnabled():
            self.settings.setValue("export/as_zip", self.chk_export_zip.isChecked())
        self.settings.setValue("export/download_dir", self.negotiator.download_dir)

    def load_settings(self):
        geo = self.settings.value("app/geometry")
        if geo:
            self.restoreGeometry(geo)

        self.chk_include_alerts.setChecked(
            str(self.settings.value("export/include_alerts", True)).lower() == "true"
        )
        self.chk_export_zip.setChecked(str(self.settings.value("export/as_zip", False)).lower() == "true")

        saved_dir = str(self.settings.value("export/download_dir", "") or "").strip()
        if saved_dir:
            self.negotiator.download_dir = saved_dir
        self.txt_download_dir.setText(self.negotiator.download_dir)

    # ----- navigation -----

    def _on_page_changed(self, page_name: str):
        self.navigation.on_page_changed(self, page_name)

    def _navigate_to(self, page_name: str):
        self.navigation.navigate_to(self, page_name)

    # ----- catalog pages -----

    def on_folder_clicked(self, kind: str, folder_id: str):
        if not self.loader.on_folder_clicked(kind, folder_id):
            # Dropped click: put the highlight back on the session's folder.
            self._render_folder_tree(kind)

    def on_search_changed(self, kind: str, text: str):
        self.session.set_search_query(kind, text)

    def reload_catalogs(self):
        self.loader.reload()

    def _on_folders_changed(self):
        for kind in COLLECTION_KINDS:
            self._render_folder_tree(kind)

    def _render_folder_tree(self, kind: str):
        view = self.catalog_views[kind]
        view.folder_tree.render(self.session.folder_tree(kind))

    def _render_items(self, kind: str):
        view = self.catalog_views[kind]
        visible = self.session.filtered(kind)
        view.item_list.render(visible, self.session.selected(kind))
        view.lbl_visible.setText(
            strings.tr("msg_visible_count").format(visible=len(visible), total=len(self.session.items(kind)))
        )
        view.lbl_selected.setText(strings.tr("msg_selected_count").format(count=self.session.selected_count(kind)))

    def _on_selection_changed(self, kind: str):
        view = self.catalog_views[kind]
        view.item_list.sync_checks(self.session.selected(kind))
        view.lbl_selected.setText(strings.tr("msg_selected_count").format(count=self.session.selected_count(kind)))
        self._update_selection_summary()

    # ----- loading -----

    def _on_stage_changed(self, message: str, debug: str):
        self.overlay.show_stage(message, debug)
        self.status_label.setText(message)

    def _on_loading_finished(self):
        if self.exporter.is_running:
            return
        self.overlay.hide_overlay()
        self.status_label.setText(strings.tr("status_ready"))

    # ----- export page -----

    def refresh_export_page(self):
        self._update_selection_summary()
        self._update_export_affordance(self.session.affordance())

    def _update_selection_summary(self):
        dashboards = self.session.selected_count(KIND_DASHBOARDS)
        alerts = self.session.selected_count(KIND_ALERTS)
        self.lbl_export_selection.setText(
            strings.tr("msg_export_selection").format(
                dashboards=dashboards,
                alerts=alerts,
                total=self.session.total_selected,
            )
        )
        self.sidebar.set_selection_counts(dashboards, alerts)

    def _update_export_affordance(self, affordance):
        self.btn_export.setText(affordance.label)
        self.btn_export.setEnabled(bool(affordance.enabled) and not self.exporter.is_running)

    def _on_config_changed(self, config):
        forced = bool(config.force_enable_zip_export)
        if forced:
            self.chk_export_zip.setChecked(True)
        self.chk_export_zip.setEnabled(not forced)
        self.chk_export_zip.setText(strings.tr("chk_export_zip_forced" if forced else "chk_export_zip"))

    def choose_download_dir(self):
        path = QFileDialog.getExistingDirectory(self, strings.tr("lbl_download_dir"), self.negotiator.download_dir)
        if path:
            self.negotiator.download_dir = path
            self.txt_download_dir.setText(path)

    def start_export(self):
        if self.exporter.is_running:
            return
        # Completion (or refusal) re-enables the button through _finish_export_ui.
        self.btn_export.setEnabled(False)
        self.export_result_card.hide()
        self.exporter.run_export(
            include_alerts=self.chk_include_alerts.isChecked(),
            export_as_zip=self.chk_export_zip.isChecked(),
        )

    def _finish_export_ui(self):
        if not self.loader.is_loading:
            self.overlay.hide_overlay()
            self.status_label.setText(strings.tr("status_ready"))
        self._update_export_affordance(self.session.affordance())

    def _on_export_finished(self, outcome):
        self._finish_export_ui()
        warnings = []
        if isinstance(outcome, ExportDownload):
            lines = download_lines(outcome)
        elif isinstance(outcome, ExportSummary):
            lines = summary_lines(outcome)
            if outcome.has_warnings:
                warnings = list(outcome.errors)
        else:
            lines = []

        self.lbl_export_result.setText("\n".join(lines))
        self.txt_export_warnings.setPlainText("\n".join(warnings))
        self.lbl_export_warnings.setVisible(bool(warnings))
        self.txt_export_warnings.setVisible(bool(warnings))
        self.export_result_card.show()

        if lines:
            self.toast_manager.success(lines[0])
        if warnings:
            self.toast_manager.warning(strings.tr("export_result_warnings") + f": {len(warnings)}")

    def _on_export_failed(self, level: str, message: str):
        self._finish_export_ui()
        self.toast_manager.notify(level, message)
