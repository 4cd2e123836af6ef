from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, TypeVar, Union

from exportdesk.core.folder_tree import ALL_FOLDERS_ID
from exportdesk.core.models import Alert, Dashboard

Item = TypeVar("Item", Dashboard, Alert)


@dataclass(frozen=True)
class FilterState:
    selected_folder: str = ALL_FOLDERS_ID
    search_query: str = ""

    def with_folder(self, folder_id: Union[str, int]) -> "FilterState":
        return replace(self, selected_folder=str(folder_id))

    def with_query(self, query: str) -> "FilterState":
        return replace(self, search_query=str(query or ""))


def parse_folder_selector(selector: str) -> Optional[int]:
    """Return the folder id for a selector, or None when it cannot match anything."""
    try:
        return int(str(selector).strip())
    except (TypeError, ValueError):
        return None


def _matches_folder(item: Union[Dashboard, Alert], folder_id: Optional[int]) -> bool:
    return folder_id is not None and item.folder_id == folder_id


def _matches_query(item: Union[Dashboard, Alert], needle: str) -> bool:
    if needle in (item.title or "").lower():
        return True
    if isinstance(item, Dashboard):
        return any(needle in (tag or "").lower() for tag in item.tags)
    if isinstance(item, Alert):
        return needle in (item.folder_title or "").lower()
    return False


def filter_items(items: Sequence[Item], state: FilterState) -> List[Item]:
    selector = str(state.selected_folder)
    if selector == ALL_FOLDERS_ID:
        out = list(items or [])
    else:
        folder_id = parse_folder_selector(selector)
        out = [it for it in (items or []) if _matches_folder(it, folder_id)]

    needle = str(state.search_query or "").strip().lower()
    if needle:
        out = [it for it in out if _matches_query(it, needle)]
    return out
