from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Union

from exportdesk.core.downloads import DEFAULT_ARCHIVE_NAME, parse_content_disposition, save_archive

logger = logging.getLogger(__name__)

ARCHIVE_CONTENT_TYPES = {
    "application/zip",
    "application/x-zip-compressed",
    "application/x-zip",
    "application/octet-stream",
}


class ExportError(Exception):
    pass


class NothingSelectedError(ExportError):
    pass


class MalformedResponseError(ExportError):
    pass


@dataclass(frozen=True)
class ExportRequest:
    dashboard_uids: List[str] = field(default_factory=list)
    alert_uids: List[str] = field(default_factory=list)
    include_alerts: bool = True
    export_as_zip: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.dashboard_uids and not self.alert_uids

    def to_payload(self) -> Dict[str, Any]:
        return {
            "dashboardUIDs": list(self.dashboard_uids),
            "alertUIDs": list(self.alert_uids),
            "includeAlerts": bool(self.include_alerts),
            "exportAsZip": bool(self.export_as_zip),
        }


@dataclass(frozen=True)
class ExportSummary:
    exported_dashboards: int = 0
    exported_alerts: int = 0
    exported_libraries: int = 0
    export_path: str = ""
    errors: List[str] = field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        return bool(self.errors)

    @classmethod
    def from_payload(cls, payload: Any) -> "ExportSummary":
        if not isinstance(payload, dict):
            raise MalformedResponseError("Export response is not a JSON object")

        def _count(key: str) -> int:
            try:
                return max(0, int(payload.get(key) or 0))
            except (TypeError, ValueError):
                return 0

        errors = payload.get("errors") or []
        if not isinstance(errors, list):
            errors = [errors]
        return cls(
            exported_dashboards=_count("exportedDashboards"),
            exported_alerts=_count("exportedAlerts"),
            exported_libraries=_count("exportedLibraries"),
            export_path=str(payload.get("exportPath") or ""),
            errors=[str(e) for e in errors if e is not None and str(e)],
        )


@dataclass(frozen=True)
class ExportDownload:
    filename: str
    saved_path: str
    size_bytes: int
    used_default_name: bool = False


ExportOutcome = Union[ExportSummary, ExportDownload]


def media_type(content_type: Optional[str]) -> str:
    return str(content_type or "").split(";", 1)[0].strip().lower()


def is_archive_response(content_type: Optional[str]) -> bool:
    return media_type(content_type) in ARCHIVE_CONTENT_TYPES


def _clean_uids(uids: Optional[Iterable[str]]) -> List[str]:
    seen: set[str] = set()
    out: List[str] = []
    for u in uids or []:
        s = str(u or "")
        if s and s not in seen:
            seen.add(s)
            out.append(s)
    return out


class ExportNegotiator:
    """
    Issues the export request and decides what the response is.

    An archive is only accepted when the request asked for one and the server
    declared an archive content type; everything else is read as the JSON summary.
    """

    def __init__(self, client, *, download_dir: str, default_filename: str = DEFAULT_ARCHIVE_NAME):
        self.client = client
        self.download_dir = download_dir
        self.default_filename = default_filename

    def build_request(
        self,
        dashboard_uids: Iterable[str],
        alert_uids: Iterable[str],
        include_alerts: bool,
        export_as_zip: bool,
    ) -> ExportRequest:
        return ExportRequest(
            dashboard_uids=sorted(_clean_uids(dashboard_uids)),
            alert_uids=sorted(_clean_uids(alert_uids)),
            include_alerts=bool(include_alerts),
            export_as_zip=bool(export_as_zip),
        )

    def export(
        self,
        dashboard_uids: Iterable[str],
        alert_uids: Iterable[str],
        include_alerts: bool,
        export_as_zip: bool,
    ) -> ExportOutcome:
        req = self.build_request(dashboard_uids, alert_uids, include_alerts, export_as_zip)
        if req.is_empty:
            raise NothingSelectedError("Please select at least one dashboard or alert to export")

        logger.info(
            "Exporting %d dashboards, %d alerts (includeAlerts=%s, zip=%s)",
            len(req.dashboard_uids),
            len(req.alert_uids),
            req.include_alerts,
            req.export_as_zip,
        )
        response = self.client.post_export(req.to_payload())
        return self.negotiate(response, req)

    def negotiate(self, response, req: ExportRequest) -> ExportOutcome:
        headers = getattr(response, "headers", None) or {}
        content_type = headers.get("Content-Type")
        if req.export_as_zip and is_archive_response(content_type):
            return self._save_download(response, headers)

        if req.export_as_zip:
            logger.info("ZIP requested but server answered %r; reading JSON summary", media_type(content_type))
        try:
            payload = response.json()
        except ValueError as e:
            raise MalformedResponseError(f"Export response is not valid JSON: {e}") from e
        summary = ExportSummary.from_payload(payload)
        if summary.errors:
            logger.warning("Export finished with %d warnings", len(summary.errors))
        return summary

    def _save_download(self, response, headers) -> ExportDownload:
        parsed = parse_content_disposition(headers.get("Content-Disposition"))
        if not parsed:
            logger.warning("Missing or malformed Content-Disposition; using %s", self.default_filename)
        filename = parsed or self.default_filename
        content = response.content or b""
        saved_path = save_archive(content, filename, self.download_dir)
        return ExportDownload(
            filename=filename,
            saved_path=saved_path,
            size_bytes=len(content),
            used_default_name=not parsed,
        )
