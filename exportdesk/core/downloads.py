from __future__ import annotations

import logging
import os
import re
from typing import Optional
from urllib.parse import unquote

logger = logging.getLogger(__name__)

DEFAULT_ARCHIVE_NAME = "grafana-export.zip"

_FILENAME_STAR_RE = re.compile(r"filename\*\s*=\s*([^;]+)", re.IGNORECASE)
_FILENAME_RE = re.compile(r'filename\s*=\s*(?:"((?:[^"\\]|\\.)*)"|([^;]+))', re.IGNORECASE)


def parse_content_disposition(header: Optional[str]) -> Optional[str]:
    """
    Extract the download name from a Content-Disposition header.

    RFC 5987 `filename*=charset'lang'value` wins over plain `filename=`. Returns None
    when the header is absent or carries no usable name.
    """
    text = str(header or "").strip()
    if not text:
        return None

    m = _FILENAME_STAR_RE.search(text)
    if m:
        value = m.group(1).strip().strip('"')
        if value.count("'") >= 2:
            # charset'language'percent-encoded; the language tag may be empty.
            charset, _lang, encoded = value.split("'", 2)
            try:
                decoded = unquote(encoded, encoding=charset or "utf-8", errors="strict")
            except (LookupError, UnicodeDecodeError):
                decoded = ""
            if decoded.strip():
                return decoded.strip()

    m = _FILENAME_RE.search(text.replace("filename*", "_skip_"))
    if m:
        value = m.group(1) if m.group(1) is not None else (m.group(2) or "")
        value = value.replace('\\"', '"').strip()
        if value:
            return value
    return None


def _safe_filename(name: str) -> str:
    # Strip any directory part the server may have sent.
    base = os.path.basename(str(name or "").replace("\\", "/"))
    keep = []
    for ch in base:
        if ch.isalnum() or ch in (" ", ".", "-", "_", "(", ")", "[", "]"):
            keep.append(ch)
        else:
            keep.append("_")
    out = "".join(keep).strip().lstrip(".")
    return out or DEFAULT_ARCHIVE_NAME


def _candidate_paths(directory: str, filename: str, max_attempts: int):
    yield os.path.join(directory, filename)
    base, ext = os.path.splitext(filename)
    for n in range(1, max(1, int(max_attempts)) + 1):
        yield os.path.join(directory, f"{base} ({n}){ext}")


def save_archive(content: bytes, filename: Optional[str], directory: str, *, max_attempts: int = 1000) -> str:
    """Write an archive into `directory` without overwriting; returns the saved path."""
    target_dir = os.path.abspath(os.path.expanduser(str(directory or ".")))
    os.makedirs(target_dir, exist_ok=True)
    safe_name = _safe_filename(filename or DEFAULT_ARCHIVE_NAME)
    data = content or b""
    for path in _candidate_paths(target_dir, safe_name, max_attempts):
        try:
            # "x" fails if the name appeared since the last attempt.
            with open(path, "xb") as f:
                f.write(data)
        except FileExistsError:
            continue
        logger.info("Saved export archive: %s (%d bytes)", path, len(data))
        return path
    raise OSError(f"No free file name for {safe_name!r} in {target_dir}")
