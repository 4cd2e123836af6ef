from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from exportdesk.core.models import GENERAL_FOLDER_ID, Alert, Folder

ALL_FOLDERS_ID = "all"
GENERAL_NODE_ID = str(GENERAL_FOLDER_ID)
INDENT_UNIT = 20  # px per nesting level

CountFn = Callable[[Folder], int]


@dataclass(frozen=True)
class FolderNode:
    node_id: str  # click target: "all" | "0" | str(folder.id)
    title: str
    level: int
    indent: int
    count: Optional[int] = None
    selected: bool = False
    synthetic: bool = False
    uid: str = ""


def dashboard_count_for(folder: Folder) -> int:
    return int(folder.dashboard_count or 0)


def alert_count_for(alerts: Iterable[Alert]) -> CountFn:
    tally = Counter(int(a.folder_id or 0) for a in alerts)

    def _count(folder: Folder) -> int:
        return int(tally.get(int(folder.id), 0))

    return _count


def build_folder_tree(
    folders: Sequence[Folder],
    *,
    count_for: CountFn = dashboard_count_for,
    selected_folder: str = ALL_FOLDERS_ID,
    all_title: str = "All Folders",
    general_title: str = "General",
) -> List[FolderNode]:
    """
    Flatten a parent-pointer folder list into ordered render nodes.

    The two synthetic nodes always come first. Real folders follow depth-first,
    parent before children, siblings in input order. A folder whose parentUid is
    not a loaded uid is unreachable and never rendered.
    """
    selected = str(selected_folder)
    nodes: List[FolderNode] = [
        FolderNode(ALL_FOLDERS_ID, all_title, 0, 0, selected=(selected == ALL_FOLDERS_ID), synthetic=True),
        FolderNode(GENERAL_NODE_ID, general_title, 0, 0, selected=(selected == GENERAL_NODE_ID), synthetic=True),
    ]

    children: Dict[str, List[Folder]] = {}
    roots: List[Folder] = []
    for folder in folders or []:
        if folder.parent_uid:
            children.setdefault(folder.parent_uid, []).append(folder)
        else:
            roots.append(folder)

    visited: set[int] = set()

    def _walk(folder: Folder, level: int) -> None:
        # Guards against duplicate uids linking a subtree twice.
        if id(folder) in visited:
            return
        visited.add(id(folder))
        node_id = str(folder.id)
        nodes.append(
            FolderNode(
                node_id=node_id,
                title=folder.title,
                level=level,
                indent=level * INDENT_UNIT,
                count=int(count_for(folder) or 0),
                selected=(selected == node_id),
                uid=folder.uid,
            )
        )
        for child in children.get(folder.uid, []):
            _walk(child, level + 1)

    for root in roots:
        _walk(root, 1)
    return nodes


def count_reachable(folders: Sequence[Folder]) -> int:
    return sum(1 for n in build_folder_tree(folders) if not n.synthetic)
