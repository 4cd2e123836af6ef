from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, Optional

from PySide6.QtCore import QObject, Signal

from exportdesk.core.config import AppConfig
from exportdesk.core.debounce import ClickDebouncer
from exportdesk.core.folder_tree import count_reachable
from exportdesk.core.models import KIND_ALERTS, KIND_DASHBOARDS, FolderListing
from exportdesk.utils.i18n import strings

logger = logging.getLogger(__name__)

FETCH_CONFIG = "config"
FETCH_FOLDERS = "folders"
CATALOG_FETCHES = (FETCH_FOLDERS, KIND_DASHBOARDS, KIND_ALERTS)
STARTUP_FETCHES = (FETCH_CONFIG,) + CATALOG_FETCHES

_STAGE_KEYS = {
    FETCH_CONFIG: "stage_config",
    FETCH_FOLDERS: "stage_folders",
    KIND_DASHBOARDS: "stage_dashboards",
    KIND_ALERTS: "stage_alerts",
}

_ERROR_KEYS = {
    FETCH_FOLDERS: "err_load_folders",
    KIND_DASHBOARDS: "err_load_dashboards",
    KIND_ALERTS: "err_load_alerts",
}

_SINGULAR = {KIND_DASHBOARDS: "dashboard", KIND_ALERTS: "alert"}


class LoadController(QObject):
    """
    Runs the startup fetches off the GUI thread and applies results to the session.

    Each fetch kind is sequenced: a response is applied only if no newer request of
    the same kind was issued meanwhile. Completion is marshalled back through
    `_fetch_done`, so session mutation always happens on the receiver's thread.
    """

    stage_changed = Signal(str, str)  # message, debug
    loading_finished = Signal()
    notice = Signal(str, str)  # level, message
    _fetch_done = Signal(str, int, object, str)  # kind, seq, payload, error

    def __init__(self, session, client, parent=None, *, executor=None, debouncer: Optional[ClickDebouncer] = None):
        super().__init__(parent)
        self.session = session
        self.client = client
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(max_workers=4, thread_name_prefix="fetch")
        self.debouncer = debouncer or ClickDebouncer()
        self._seq: Dict[str, int] = {kind: 0 for kind in STARTUP_FETCHES}
        self._pending: set[str] = set()
        self._fetch_done.connect(self._on_fetch_done)

    def close(self) -> None:
        if not self._owns_executor:
            return
        try:
            self._executor.shutdown(wait=False, cancel_futures=True)
        except Exception:
            logger.debug("Fetch executor shutdown failed", exc_info=True)

    @property
    def is_loading(self) -> bool:
        return bool(self._pending)

    def start(self) -> None:
        for kind in STARTUP_FETCHES:
            self.request(kind)

    def reload(self) -> None:
        for kind in CATALOG_FETCHES:
            self.request(kind)

    def _fetcher(self, kind: str) -> Callable[[], Any]:
        return {
            FETCH_CONFIG: self.client.get_config_status,
            FETCH_FOLDERS: self.client.get_folders,
            KIND_DASHBOARDS: self.client.get_dashboards,
            KIND_ALERTS: self.client.get_alerts,
        }[kind]

    def request(self, kind: str) -> int:
        fetch = self._fetcher(kind)
        self._seq[kind] += 1
        seq = self._seq[kind]
        self._pending.add(kind)
        self.stage_changed.emit(strings.tr(_STAGE_KEYS[kind]), strings.tr("stage_fetching"))

        fut = self._executor.submit(fetch)

        def _done(f, kind=kind, seq=seq):
            try:
                payload = f.result()
                error = ""
            except Exception as e:
                payload = None
                error = str(e) or type(e).__name__
            self._fetch_done.emit(kind, seq, payload, error)

        fut.add_done_callback(_done)
        return seq

    def _on_fetch_done(self, kind: str, seq: int, payload: object, error: str) -> None:
        if seq != self._seq.get(kind):
            logger.debug("Dropping stale %s response (seq=%d, latest=%d)", kind, seq, self._seq.get(kind, 0))
            return
        try:
            if error:
                self._apply_failure(kind, error)
            elif kind == FETCH_CONFIG:
                self._apply_config(payload)
            elif kind == FETCH_FOLDERS:
                self._apply_folders(payload)
            else:
                self._apply_items(kind, payload)
        except Exception as e:
            logger.exception("Failed to apply %s response", kind)
            self._apply_failure(kind, str(e))
        finally:
            self._pending.discard(kind)
            if not self._pending:
                self.loading_finished.emit()

    def _apply_failure(self, kind: str, error: str) -> None:
        if kind == FETCH_CONFIG:
            logger.warning("Config status unavailable, using defaults: %s", error)
            self.session.set_config(AppConfig())
            return
        logger.error("Loading %s failed: %s", kind, error)
        if kind == FETCH_FOLDERS:
            self.session.replace_folders([])
        else:
            self.session.replace_items(kind, [])
        self.notice.emit("error", strings.tr(_ERROR_KEYS[kind]).format(error=error))

    def _apply_config(self, config: AppConfig) -> None:
        config = config if isinstance(config, AppConfig) else AppConfig()
        logger.info("Config status: forceEnableZipExport=%s", config.force_enable_zip_export)
        self.session.set_config(config)
        if config.backend_misconfigured:
            self.notice.emit("warning", strings.tr("warn_backend_config").format(message=config.error_message or "-"))

    def _apply_folders(self, listing: FolderListing) -> None:
        if not isinstance(listing, FolderListing):
            raise TypeError("folders response was not parsed into a FolderListing")
        folders = listing.folders
        logger.info("Loaded folders: %d", len(folders))
        if listing.debug is not None:
            logger.info("Has nested structure: %s", listing.has_nested_structure)
            logger.info("Debug info: %s", listing.debug)
            level = "info" if listing.has_nested_structure else "warning"
            self.notice.emit(level, strings.tr("info_folder_debug").format(debug=listing.debug))

        logger.info("Folders with parentUid: %d", listing.nested_count)
        unreachable = len(folders) - count_reachable(folders)
        if unreachable > 0:
            logger.info("Folders unreachable from any root: %d", unreachable)

        self.session.replace_folders(folders)

    def _apply_items(self, kind: str, items: Any) -> None:
        items = list(items or [])
        singular = _SINGULAR[kind]
        stage = strings.tr(_STAGE_KEYS[kind])
        self.stage_changed.emit(stage, strings.tr("stage_processing").format(kind=singular))

        logger.info("Loaded %s: %d", kind, len(items))
        if items:
            logger.debug("Sample %s: %r", singular, items[0])
        else:
            logger.info("No %s found", kind)

        self.stage_changed.emit(stage, strings.tr("stage_rendering").format(count=len(items), kind=kind))
        self.session.replace_items(kind, items)

    def on_folder_clicked(self, kind: str, folder_id: str) -> bool:
        """Apply a folder click unless it falls inside the debounce window."""
        if not self.debouncer.accept():
            logger.debug("Folder click on %s dropped by debounce", folder_id)
            return False
        stage_key = "stage_filtering_alerts" if kind == KIND_ALERTS else "stage_filtering_dashboards"
        self.stage_changed.emit(strings.tr(stage_key), strings.tr("stage_filter_debug").format(folder=folder_id))
        self.session.set_selected_folder(kind, str(folder_id))
        if not self._pending:
            self.loading_finished.emit()
        return True
