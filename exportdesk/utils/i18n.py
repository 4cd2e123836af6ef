from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

_EN = {
    "app_title": "Export Desk",
    "status_ready": "Ready",
    "err_critical_title": "Critical Error",
    "err_unexpected": "An unexpected error occurred",
    # Navigation
    "nav_dashboards": "Dashboards",
    "nav_alerts": "Alerts",
    "nav_export": "Export",
    # Folder tree
    "folder_all": "All Folders",
    "folder_general": "General",
    "folder_level_badge": "L{level}",
    # Catalog pages
    "ph_search_dashboards": "Search dashboards by title or tag",
    "ph_search_alerts": "Search alerts by title or folder",
    "btn_select_all": "Select All",
    "btn_clear_selection": "Clear Selection",
    "btn_reload": "Reload",
    "msg_no_dashboards": "No dashboards found matching your criteria",
    "msg_no_alerts": "No alerts found matching your criteria",
    "msg_item_folder": "Folder: {folder}",
    "msg_selected_count": "Selected: {count}",
    "msg_visible_count": "{visible} of {total} shown",
    # Export page
    "chk_include_alerts": "Include alerts",
    "chk_export_zip": "Download as ZIP archive",
    "chk_export_zip_forced": "Download as ZIP archive (enforced by server)",
    "lbl_download_dir": "Save archives to:",
    "btn_browse": "Browse...",
    "btn_export_selected": "Export Selected",
    "btn_export_dashboards": "Export {dashboards} Dashboards",
    "btn_export_alerts": "Export {alerts} Alerts",
    "btn_export_both": "Export {dashboards} Dashboards & {alerts} Alerts",
    "msg_export_selection": "Dashboards: {dashboards}  |  Alerts: {alerts}  |  Total: {total}",
    "export_result_title": "Export Completed",
    "export_result_counts": "Successfully exported {dashboards} dashboards, {alerts} alerts and {libraries} linked library panels.",
    "export_result_path": "Export path: {path}",
    "export_result_warnings": "Warnings/Errors",
    "export_download_done": "Archive saved: {path}",
    "export_download_default_name": "The server did not name the archive; saved as {name}",
    # Loading stages
    "stage_config": "Loading configuration...",
    "stage_folders": "Loading folders...",
    "stage_dashboards": "Loading dashboards...",
    "stage_alerts": "Loading alerts...",
    "stage_fetching": "Fetching from API...",
    "stage_processing": "Processing {kind} data...",
    "stage_rendering": "Found {count} {kind}. Rendering...",
    "stage_filtering_dashboards": "Filtering dashboards...",
    "stage_filtering_alerts": "Filtering alerts...",
    "stage_filter_debug": "Filtering by folder ID: {folder}",
    "stage_exporting": "Exporting dashboards, alerts and linked libraries...",
    # Notifications
    "err_load_folders": "Error loading folders: {error}",
    "err_load_dashboards": "Error loading dashboards: {error}",
    "err_load_alerts": "Error loading alerts: {error}",
    "err_export_failed": "Export failed: {error}",
    "warn_select_something": "Please select at least one dashboard or alert to export",
    "warn_backend_config": "Backend configuration problem: {message}",
    "info_folder_debug": "Folder info: {debug}",
}

_LANGS = {"en": _EN}


class Strings:
    def __init__(self, language: str = "en"):
        self.language = "en"
        self.set_language(language)

    def set_language(self, language: str) -> None:
        lang = str(language or "en").lower()
        if lang not in _LANGS:
            logger.debug("Unsupported language %r, falling back to en", language)
            lang = "en"
        self.language = lang

    def tr(self, key: str) -> str:
        table = _LANGS.get(self.language, _EN)
        return table.get(key) or _EN.get(key) or key

    def has(self, key: str) -> bool:
        return key in _EN


strings = Strings()
