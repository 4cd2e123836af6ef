from __future__ import annotations

from typing import AbstractSet, Sequence, Union

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QListWidget, QListWidgetItem

from exportdesk.core.models import GENERAL_FOLDER_TITLE, KIND_ALERTS, Alert, Dashboard
from exportdesk.utils.i18n import strings

_ROLE_UID = int(Qt.ItemDataRole.UserRole)

Item = Union[Dashboard, Alert]


class ItemListWidget(QListWidget):
    """
    Checkable list of dashboards or alerts.

    Check marks are written only by `render`/`sync_checks` from the session's
    selection set; user clicks are reported through `item_toggled` and come back
    as a selection_changed notification.
    """

    item_toggled = Signal(str, bool)  # uid, checked

    def __init__(self, kind: str, parent=None):
        super().__init__(parent)
        self.kind = kind
        self.setAlternatingRowColors(True)
        self.setSelectionMode(QListWidget.SelectionMode.NoSelection)
        self._suppress_item_changed = False
        self._rows: dict[str, QListWidgetItem] = {}
        self.itemChanged.connect(self._on_item_changed)

    def rendered_uids(self) -> list[str]:
        return list(self._rows.keys())

    def checked_uids(self) -> set[str]:
        return {uid for uid, item in self._rows.items() if item.checkState() == Qt.CheckState.Checked}

    def render(self, items: Sequence[Item], selected: AbstractSet[str]) -> None:
        self._suppress_item_changed = True
        try:
            self.clear()
            self._rows = {}
            if not items:
                key = "msg_no_alerts" if self.kind == KIND_ALERTS else "msg_no_dashboards"
                placeholder = QListWidgetItem(strings.tr(key))
                placeholder.setFlags(Qt.ItemFlag.NoItemFlags)
                placeholder.setTextAlignment(Qt.AlignmentFlag.AlignCenter)
                self.addItem(placeholder)
                return

            for it in items:
                row = QListWidgetItem(self._row_text(it))
                row.setData(_ROLE_UID, it.uid)
                row.setFlags(Qt.ItemFlag.ItemIsEnabled | Qt.ItemFlag.ItemIsUserCheckable)
                row.setCheckState(Qt.CheckState.Checked if it.uid in selected else Qt.CheckState.Unchecked)
                if isinstance(it, Dashboard) and it.tags:
                    row.setToolTip(", ".join(it.tags))
                self.addItem(row)
                self._rows[it.uid] = row
        finally:
            self._suppress_item_changed = False

    def sync_checks(self, selected: AbstractSet[str]) -> None:
        """Re-derive check marks without rebuilding rows; uids not rendered are ignored."""
        self._suppress_item_changed = True
        try:
            for uid, row in self._rows.items():
                want = Qt.CheckState.Checked if uid in selected else Qt.CheckState.Unchecked
                if row.checkState() != want:
                    row.setCheckState(want)
        finally:
            self._suppress_item_changed = False

    @staticmethod
    def _row_text(it: Item) -> str:
        folder = strings.tr("msg_item_folder").format(folder=it.folder_title or GENERAL_FOLDER_TITLE)
        text = f"{it.title}\n{folder}"
        if isinstance(it, Dashboard) and it.tags:
            text += "  ·  " + ", ".join(f"#{t}" for t in it.tags)
        return text

    def _on_item_changed(self, item: QListWidgetItem) -> None:
        if self._suppress_item_changed:
            return
        uid = item.data(_ROLE_UID)
        if uid is None:
            return
        self.item_toggled.emit(str(uid), item.checkState() == Qt.CheckState.Checked)
