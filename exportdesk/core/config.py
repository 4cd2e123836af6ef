from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

DEFAULT_BASE_URL = "http://localhost:8080"
DEFAULT_TIMEOUT_S = 30.0


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class AppConfig:
    """
    Server-side configuration reported by /api/config-status.

    force_enable_zip_export is the single canonical flag: it locks ZIP export on
    and keeps the export action enabled even with nothing selected.
    """

    force_enable_zip_export: bool = False
    has_env_file: Optional[bool] = None
    error_message: str = ""

    @classmethod
    def from_payload(cls, payload: Any) -> "AppConfig":
        if not isinstance(payload, Mapping):
            return cls()
        has_env = payload.get("hasEnvFile")
        return cls(
            force_enable_zip_export=bool(payload.get("forceEnableZipExport") or False),
            has_env_file=bool(has_env) if has_env is not None else None,
            error_message=str(payload.get("errorMessage") or ""),
        )

    @property
    def backend_misconfigured(self) -> bool:
        return self.has_env_file is False


@dataclass(frozen=True)
class ClientSettings:
    base_url: str = DEFAULT_BASE_URL
    timeout_s: float = DEFAULT_TIMEOUT_S
    download_dir: str = ""
    debug: bool = False

    @classmethod
    def from_env(cls) -> "ClientSettings":
        raw_timeout = os.environ.get("EXPORTDESK_TIMEOUT", "")
        try:
            timeout = float(raw_timeout) if raw_timeout.strip() else DEFAULT_TIMEOUT_S
        except ValueError:
            timeout = DEFAULT_TIMEOUT_S
        if timeout <= 0:
            timeout = DEFAULT_TIMEOUT_S

        base_url = os.environ.get("EXPORTDESK_BASE_URL", "").strip() or DEFAULT_BASE_URL
        download_dir = os.environ.get("EXPORTDESK_DOWNLOAD_DIR", "").strip() or default_download_dir()
        return cls(
            base_url=base_url.rstrip("/"),
            timeout_s=timeout,
            download_dir=download_dir,
            debug=_env_flag("EXPORTDESK_DEBUG"),
        )


def default_download_dir() -> str:
    home = os.path.expanduser("~")
    downloads = os.path.join(home, "Downloads")
    return downloads if os.path.isdir(downloads) else home
