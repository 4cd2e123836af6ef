from __future__ import annotations

from typing import Sequence

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QHBoxLayout, QLabel, QListWidget, QListWidgetItem, QWidget

from exportdesk.core.folder_tree import FolderNode
from exportdesk.ui.theme import ModernTheme
from exportdesk.utils.i18n import strings

_ROLE_NODE_ID = int(Qt.ItemDataRole.UserRole)
_BASE_PADDING = 15


class FolderTreeWidget(QListWidget):
    """
    Flat list view of FolderNode rows; nesting is shown by indentation only.

    The widget holds no selection state of its own: `render` is called with nodes
    whose `selected` flag comes from the session.
    """

    folder_clicked = Signal(str)  # node_id

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setUniformItemSizes(True)
        self.setSelectionMode(QListWidget.SelectionMode.SingleSelection)
        self.itemClicked.connect(self._on_item_clicked)
        self._nodes: list[FolderNode] = []

    @property
    def nodes(self) -> list[FolderNode]:
        return list(self._nodes)

    def render(self, nodes: Sequence[FolderNode]) -> None:
        self._nodes = list(nodes or [])
        self.blockSignals(True)
        try:
            self.clear()
            for node in self._nodes:
                item = QListWidgetItem()
                item.setData(_ROLE_NODE_ID, node.node_id)
                item.setToolTip(node.title)
                self.addItem(item)
                row = self._build_row(node)
                item.setSizeHint(row.sizeHint())
                self.setItemWidget(item, row)
                if node.selected:
                    item.setSelected(True)
                    self.setCurrentItem(item)
        finally:
            self.blockSignals(False)

    def _build_row(self, node: FolderNode) -> QWidget:
        c = ModernTheme.get_palette()
        row = QWidget()
        layout = QHBoxLayout(row)
        layout.setContentsMargins(node.indent + _BASE_PADDING, 4, 8, 4)
        layout.setSpacing(6)

        if not node.synthetic:
            level = QLabel(strings.tr("folder_level_badge").format(level=node.level))
            level.setStyleSheet(
                f"background: {c['badge_level']}; color: #ffffff; border-radius: 4px; padding: 0 4px; font-size: 11px;"
            )
            layout.addWidget(level)

        title = QLabel(node.title)
        if node.synthetic:
            title.setStyleSheet("font-weight: 600;")
        layout.addWidget(title, 1)

        if node.count:
            badge = QLabel(str(node.count))
            badge.setStyleSheet(
                f"background: {c['badge_count']}; color: #ffffff; border-radius: 8px; padding: 0 6px; font-size: 11px;"
            )
            layout.addWidget(badge)
        return row

    def _on_item_clicked(self, item: QListWidgetItem) -> None:
        node_id = item.data(_ROLE_NODE_ID)
        if node_id is not None:
            self.folder_clicked.emit(str(node_id))
