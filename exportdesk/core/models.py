from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional

GENERAL_FOLDER_ID = 0
GENERAL_FOLDER_TITLE = "General"

KIND_DASHBOARDS = "dashboards"
KIND_ALERTS = "alerts"
COLLECTION_KINDS = (KIND_DASHBOARDS, KIND_ALERTS)


def _as_int(value: Any, default: Optional[int] = None) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


@dataclass(frozen=True)
class Folder:
    id: int
    uid: str
    title: str
    parent_uid: Optional[str] = None
    dashboard_count: int = 0

    @classmethod
    def from_api(cls, raw: Mapping[str, Any]) -> "Folder":
        parent = raw.get("parentUid")
        return cls(
            id=_as_int(raw.get("id"), 0),
            uid=_as_text(raw.get("uid")),
            title=_as_text(raw.get("title")),
            parent_uid=str(parent) if parent else None,
            dashboard_count=max(0, _as_int(raw.get("dashboardCount"), 0)),
        )


@dataclass(frozen=True)
class Dashboard:
    uid: str
    title: str
    folder_id: int = GENERAL_FOLDER_ID
    folder_title: Optional[str] = None
    tags: List[str] = field(default_factory=list)

    @classmethod
    def from_api(cls, raw: Mapping[str, Any]) -> "Dashboard":
        folder_id = _as_int(raw.get("folderId"), GENERAL_FOLDER_ID)
        folder_title = raw.get("folderTitle") or None
        # One-time normalization; rendering never re-applies it.
        if folder_id == GENERAL_FOLDER_ID and not folder_title:
            folder_title = GENERAL_FOLDER_TITLE
        tags = raw.get("tags") or []
        return cls(
            uid=_as_text(raw.get("uid")),
            title=_as_text(raw.get("title")),
            folder_id=folder_id,
            folder_title=folder_title,
            tags=[str(t) for t in tags if t is not None] if isinstance(tags, (list, tuple)) else [],
        )


@dataclass(frozen=True)
class Alert:
    uid: str
    title: str
    folder_id: int = GENERAL_FOLDER_ID
    folder_title: Optional[str] = None

    @classmethod
    def from_api(cls, raw: Mapping[str, Any]) -> "Alert":
        folder_id = _as_int(raw.get("folderId"), GENERAL_FOLDER_ID)
        folder_title = raw.get("folderTitle") or None
        if folder_id == GENERAL_FOLDER_ID and not folder_title:
            folder_title = GENERAL_FOLDER_TITLE
        return cls(
            uid=_as_text(raw.get("uid")),
            title=_as_text(raw.get("title")),
            folder_id=folder_id,
            folder_title=folder_title,
        )


@dataclass(frozen=True)
class FolderListing:
    folders: List[Folder] = field(default_factory=list)
    has_nested_structure: Optional[bool] = None
    debug: Optional[str] = None

    @property
    def nested_count(self) -> int:
        return sum(1 for f in self.folders if f.parent_uid)
