from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List

from PySide6.QtCore import QObject, Signal

from exportdesk.core.api_client import ApiError
from exportdesk.core.export_negotiator import (
    ExportDownload,
    ExportError,
    ExportNegotiator,
    ExportSummary,
    NothingSelectedError,
)
from exportdesk.core.models import KIND_ALERTS, KIND_DASHBOARDS
from exportdesk.utils.i18n import strings

logger = logging.getLogger(__name__)


def summary_lines(summary: ExportSummary) -> List[str]:
    lines = [
        strings.tr("export_result_counts").format(
            dashboards=summary.exported_dashboards,
            alerts=summary.exported_alerts,
            libraries=summary.exported_libraries,
        ),
        strings.tr("export_result_path").format(path=summary.export_path or "-"),
    ]
    return lines


def download_lines(download: ExportDownload) -> List[str]:
    lines = [strings.tr("export_download_done").format(path=download.saved_path)]
    if download.used_default_name:
        lines.append(strings.tr("export_download_default_name").format(name=download.filename))
    return lines


class ExportController(QObject):
    """Runs one export at a time off the GUI thread."""

    stage_changed = Signal(str, str)
    export_finished = Signal(object)  # ExportSummary | ExportDownload
    export_failed = Signal(str, str)  # level, message
    _export_done = Signal(object, str, str)  # outcome, level, error

    def __init__(self, session, negotiator: ExportNegotiator, parent=None, *, executor=None):
        super().__init__(parent)
        self.session = session
        self.negotiator = negotiator
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix="export")
        self._running = False
        self._export_done.connect(self._on_export_done)

    def close(self) -> None:
        if not self._owns_executor:
            return
        try:
            self._executor.shutdown(wait=False, cancel_futures=True)
        except Exception:
            logger.debug("Export executor shutdown failed", exc_info=True)

    @property
    def is_running(self) -> bool:
        return self._running

    def run_export(self, *, include_alerts: bool, export_as_zip: bool) -> bool:
        """Returns False when nothing was dispatched (busy or nothing selected)."""
        if self._running:
            return False

        dashboards = sorted(self.session.selected(KIND_DASHBOARDS))
        alerts = sorted(self.session.selected(KIND_ALERTS))
        if not dashboards and not alerts:
            self.export_failed.emit("warning", strings.tr("warn_select_something"))
            return False

        if self.session.config.force_enable_zip_export:
            export_as_zip = True

        self._running = True
        self.stage_changed.emit(strings.tr("stage_exporting"), "")
        fut = self._executor.submit(
            self.negotiator.export,
            dashboards,
            alerts,
            bool(include_alerts),
            bool(export_as_zip),
        )

        def _done(f):
            try:
                self._export_done.emit(f.result(), "", "")
            except NothingSelectedError as e:
                self._export_done.emit(None, "warning", str(e))
            except (ApiError, ExportError, OSError) as e:
                self._export_done.emit(None, "error", str(e))
            except Exception as e:
                logger.exception("Unexpected export failure")
                self._export_done.emit(None, "error", str(e) or type(e).__name__)

        fut.add_done_callback(_done)
        return True

    def _on_export_done(self, outcome: object, level: str, error: str) -> None:
        self._running = False
        if error:
            logger.error("Export failed: %s", error)
            message = error if level == "warning" else strings.tr("err_export_failed").format(error=error)
            self.export_failed.emit(level or "error", message)
            return
        if isinstance(outcome, ExportDownload):
            logger.info("Export archive saved to %s", outcome.saved_path)
        elif isinstance(outcome, ExportSummary):
            logger.info(
                "Export summary: %d dashboards, %d alerts, %d libraries -> %s",
                outcome.exported_dashboards,
                outcome.exported_alerts,
                outcome.exported_libraries,
                outcome.export_path,
            )
        self.export_finished.emit(outcome)
