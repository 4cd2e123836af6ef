from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from exportdesk.core.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_S, AppConfig
from exportdesk.core.models import Alert, Dashboard, Folder, FolderListing

logger = logging.getLogger(__name__)

USER_AGENT = "ExportDesk/1.0"


class ApiError(Exception):
    def __init__(self, detail: str, status_code: Optional[int] = None):
        super().__init__(detail)
        self.detail = str(detail or "")
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code:
            return f"{self.detail} (HTTP {self.status_code})"
        return self.detail


def _error_detail(response: requests.Response, *, prefer_body: bool) -> str:
    try:
        body = (response.text or "").strip()
    except Exception:
        body = ""
    reason = str(response.reason or "").strip()
    if prefer_body:
        return body or reason or f"HTTP {response.status_code}"
    return reason or body or f"HTTP {response.status_code}"


class ApiClient:
    """Thin requests.Session wrapper over the export backend endpoints."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = str(base_url or DEFAULT_BASE_URL).rstrip("/")
        self.timeout_s = float(timeout_s or DEFAULT_TIMEOUT_S)
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json", "User-Agent": USER_AGENT})

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _get_json(self, path: str, what: str) -> Any:
        try:
            r = self.session.get(self.url(path), timeout=self.timeout_s)
        except requests.RequestException as e:
            raise ApiError(f"Failed to load {what}: {e}") from e
        if not r.ok:
            raise ApiError(f"Failed to load {what}: {_error_detail(r, prefer_body=False)}", r.status_code)
        try:
            return r.json()
        except ValueError as e:
            raise ApiError(f"Failed to load {what}: response is not valid JSON") from e

    def get_config_status(self) -> AppConfig:
        return AppConfig.from_payload(self._get_json("/api/config-status", "configuration"))

    def get_folders(self) -> FolderListing:
        data = self._get_json("/api/folders", "folders")
        if isinstance(data, dict) and "folders" in data:
            raw = data.get("folders") or []
            if not isinstance(raw, list):
                raise ApiError("Failed to load folders: 'folders' is not a list")
            has_nested = data.get("hasNestedStructure")
            return FolderListing(
                folders=[Folder.from_api(f) for f in raw if isinstance(f, dict)],
                has_nested_structure=bool(has_nested) if has_nested is not None else False,
                debug=str(data.get("debug") or ""),
            )
        if isinstance(data, list):
            # Legacy bare-array shape, no debug info.
            return FolderListing(folders=[Folder.from_api(f) for f in data if isinstance(f, dict)])
        raise ApiError("Failed to load folders: unexpected response shape")

    def get_dashboards(self) -> List[Dashboard]:
        data = self._get_json("/api/dashboards", "dashboards")
        raw = data.get("dashboards") if isinstance(data, dict) else None
        return [Dashboard.from_api(d) for d in (raw or []) if isinstance(d, dict)]

    def get_alerts(self) -> List[Alert]:
        data = self._get_json("/api/alerts", "alerts")
        raw = data.get("alerts") if isinstance(data, dict) else None
        return [Alert.from_api(a) for a in (raw or []) if isinstance(a, dict)]

    def post_export(self, payload: Dict[str, Any]) -> requests.Response:
        try:
            r = self.session.post(self.url("/api/export"), json=payload, timeout=self.timeout_s)
        except requests.RequestException as e:
            raise ApiError(str(e)) from e
        if not r.ok:
            raise ApiError(_error_detail(r, prefer_body=True), r.status_code)
        return r

    def close(self) -> None:
        try:
            self.session.close()
        except Exception:
            logger.debug("Failed to close HTTP session", exc_info=True)
