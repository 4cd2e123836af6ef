from __future__ import annotations

import logging
from typing import Dict, List, Sequence, Union

from PySide6.QtCore import QObject, Signal

from exportdesk.core.config import AppConfig
from exportdesk.core.filtering import FilterState, filter_items
from exportdesk.core.folder_tree import (
    FolderNode,
    alert_count_for,
    build_folder_tree,
    dashboard_count_for,
)
from exportdesk.core.models import COLLECTION_KINDS, KIND_ALERTS, Alert, Dashboard, Folder
from exportdesk.core.selection import ExportAffordance, SelectionState
from exportdesk.utils.i18n import strings

logger = logging.getLogger(__name__)

Item = Union[Dashboard, Alert]


class CatalogSession(QObject):
    """
    Single owner of the client session: folders, both collections, their filter
    states and selection sets, and the server configuration.

    Only the methods below mutate state. Each mutation emits change signals that
    views subscribe to; views never keep their own copy of selection truth.
    """

    folders_changed = Signal()
    items_changed = Signal(str)  # kind; raw or filtered list replaced
    selection_changed = Signal(str)  # kind
    affordance_changed = Signal(object)  # ExportAffordance
    config_changed = Signal(object)  # AppConfig

    def __init__(self, parent=None):
        super().__init__(parent)
        self._config = AppConfig()
        self._folders: List[Folder] = []
        self._raw: Dict[str, List[Item]] = {kind: [] for kind in COLLECTION_KINDS}
        self._filtered: Dict[str, List[Item]] = {kind: [] for kind in COLLECTION_KINDS}
        self._filters: Dict[str, FilterState] = {kind: FilterState() for kind in COLLECTION_KINDS}
        self._selection = SelectionState()

    # ----- read side -----

    @property
    def config(self) -> AppConfig:
        return self._config

    @property
    def folders(self) -> List[Folder]:
        return list(self._folders)

    def items(self, kind: str) -> List[Item]:
        return list(self._raw[kind])

    def filtered(self, kind: str) -> List[Item]:
        return list(self._filtered[kind])

    def filter_state(self, kind: str) -> FilterState:
        return self._filters[kind]

    def selected(self, kind: str) -> frozenset:
        return self._selection.selected(kind)

    def is_selected(self, kind: str, uid: str) -> bool:
        return self._selection.is_selected(kind, uid)

    def selected_count(self, kind: str) -> int:
        return self._selection.count(kind)

    @property
    def total_selected(self) -> int:
        return self._selection.total

    def affordance(self) -> ExportAffordance:
        return self._selection.affordance(force_enabled=self._config.force_enable_zip_export)

    def folder_tree(self, kind: str) -> List[FolderNode]:
        if kind == KIND_ALERTS:
            count_for = alert_count_for(self._raw[KIND_ALERTS])
        else:
            count_for = dashboard_count_for
        return build_folder_tree(
            self._folders,
            count_for=count_for,
            selected_folder=self._filters[kind].selected_folder,
            all_title=strings.tr("folder_all"),
            general_title=strings.tr("folder_general"),
        )

    # ----- write side -----

    def set_config(self, config: AppConfig) -> None:
        self._config = config or AppConfig()
        self.config_changed.emit(self._config)
        self.affordance_changed.emit(self.affordance())

    def replace_folders(self, folders: Sequence[Folder]) -> None:
        self._folders = list(folders or [])
        self.folders_changed.emit()

    def replace_items(self, kind: str, items: Sequence[Item]) -> None:
        self._check_kind(kind)
        self._raw[kind] = list(items or [])
        self._refilter(kind)
        if kind == KIND_ALERTS:
            # Alert folder counts are tallied from the collection.
            self.folders_changed.emit()

    def set_selected_folder(self, kind: str, folder_id: str) -> None:
        self._check_kind(kind)
        self._filters[kind] = self._filters[kind].with_folder(folder_id)
        self._refilter(kind)
        self.folders_changed.emit()

    def set_search_query(self, kind: str, query: str) -> None:
        self._check_kind(kind)
        self._filters[kind] = self._filters[kind].with_query(str(query or "").strip())
        self._refilter(kind)

    def toggle(self, kind: str, uid: str, selected: bool) -> None:
        if self._selection.toggle(kind, uid, selected):
            self._selection_mutated(kind)

    def select_all(self, kind: str) -> int:
        added = self._selection.select_all(kind, (it.uid for it in self._filtered[kind]))
        self._selection_mutated(kind)
        return added

    def clear(self, kind: str) -> int:
        removed = self._selection.clear(kind)
        self._selection_mutated(kind)
        return removed

    # ----- internals -----

    @staticmethod
    def _check_kind(kind: str) -> None:
        if kind not in COLLECTION_KINDS:
            raise ValueError(f"Unknown collection kind: {kind!r}")

    def _refilter(self, kind: str) -> None:
        self._filtered[kind] = filter_items(self._raw[kind], self._filters[kind])
        logger.debug(
            "Filtered %s: %d of %d (folder=%s, query=%r)",
            kind,
            len(self._filtered[kind]),
            len(self._raw[kind]),
            self._filters[kind].selected_folder,
            self._filters[kind].search_query,
        )
        self.items_changed.emit(kind)

    def _selection_mutated(self, kind: str) -> None:
        self.selection_changed.emit(kind)
        self.affordance_changed.emit(self.affordance())

