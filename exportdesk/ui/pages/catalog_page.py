from types import SimpleNamespace

from PySide6.QtWidgets import (
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QPushButton,
    QLabel,
    QLineEdit,
    QSplitter,
)
from PySide6.QtCore import Qt

from exportdesk.core.models import KIND_ALERTS
from exportdesk.utils.i18n import strings
from exportdesk.ui.components.folder_tree import FolderTreeWidget
from exportdesk.ui.components.item_list import ItemListWidget


def build_catalog_page(window, kind: str) -> QWidget:
    """
    Build a catalog page (folder tree | search + checkable list) for one collection.

    Widgets are stored on `window.catalog_views[kind]` so the window can redraw
    them from session signals.
    """
    page = QWidget()
    page_layout = QVBoxLayout(page)
    page_layout.setSpacing(12)
    page_layout.setContentsMargins(16, 12, 16, 12)

    view = SimpleNamespace(kind=kind, page=page)

    splitter = QSplitter(Qt.Horizontal)
    splitter.setHandleWidth(12)
    view.splitter = splitter

    # [Left] Folder tree
    tree_card = QWidget()
    tree_card.setObjectName("card")
    tree_layout = QVBoxLayout(tree_card)
    tree_layout.setContentsMargins(12, 12, 12, 12)
    tree_layout.setSpacing(8)

    view.folder_tree = FolderTreeWidget()
    view.folder_tree.folder_clicked.connect(lambda folder_id, k=kind: window.on_folder_clicked(k, folder_id))
    tree_layout.addWidget(view.folder_tree, 1)
    splitter.addWidget(tree_card)

    # [Right] Search + list
    list_card = QWidget()
    list_card.setObjectName("card")
    list_layout = QVBoxLayout(list_card)
    list_layout.setContentsMargins(12, 12, 12, 12)
    list_layout.setSpacing(8)

    search_row = QHBoxLayout()
    view.txt_search = QLineEdit()
    ph_key = "ph_search_alerts" if kind == KIND_ALERTS else "ph_search_dashboards"
    view.txt_search.setPlaceholderText("🔍 " + strings.tr(ph_key))
    view.txt_search.setClearButtonEnabled(True)
    view.txt_search.textChanged.connect(lambda text, k=kind: window.on_search_changed(k, text))
    search_row.addWidget(view.txt_search, 1)
    view.lbl_visible = QLabel("")
    view.lbl_visible.setObjectName("muted")
    search_row.addWidget(view.lbl_visible)
    list_layout.addLayout(search_row)

    action_row = QHBoxLayout()
    action_row.setSpacing(8)
    view.btn_select_all = QPushButton(strings.tr("btn_select_all"))
    view.btn_select_all.setCursor(Qt.PointingHandCursor)
    view.btn_select_all.clicked.connect(lambda _=False, k=kind: window.session.select_all(k))
    action_row.addWidget(view.btn_select_all)

    view.btn_clear = QPushButton(strings.tr("btn_clear_selection"))
    view.btn_clear.setCursor(Qt.PointingHandCursor)
    view.btn_clear.clicked.connect(lambda _=False, k=kind: window.session.clear(k))
    action_row.addWidget(view.btn_clear)

    view.btn_reload = QPushButton(strings.tr("btn_reload"))
    view.btn_reload.setCursor(Qt.PointingHandCursor)
    view.btn_reload.clicked.connect(window.reload_catalogs)
    action_row.addWidget(view.btn_reload)

    action_row.addStretch()
    view.lbl_selected = QLabel(strings.tr("msg_selected_count").format(count=0))
    view.lbl_selected.setObjectName("muted")
    action_row.addWidget(view.lbl_selected)
    list_layout.addLayout(action_row)

    view.item_list = ItemListWidget(kind)
    view.item_list.item_toggled.connect(lambda uid, checked, k=kind: window.session.toggle(k, uid, checked))
    list_layout.addWidget(view.item_list, 1)

    splitter.addWidget(list_card)
    splitter.setStretchFactor(0, 1)
    splitter.setStretchFactor(1, 2)
    splitter.setSizes([300, 640])

    page_layout.addWidget(splitter, 1)

    if not hasattr(window, "catalog_views"):
        window.catalog_views = {}
    window.catalog_views[kind] = view
    return page
