import argparse
import json
import logging
import os
import sys
from typing import Any, Optional, Sequence

from exportdesk.core.api_client import ApiClient, ApiError
from exportdesk.core.config import AppConfig, ClientSettings
from exportdesk.core.export_negotiator import (
    ExportDownload,
    ExportError,
    ExportNegotiator,
    NothingSelectedError,
)
from exportdesk.core.filtering import FilterState, filter_items, parse_folder_selector
from exportdesk.core.folder_tree import ALL_FOLDERS_ID, build_folder_tree, dashboard_count_for
from exportdesk.core.models import KIND_ALERTS, KIND_DASHBOARDS
from exportdesk.core.selection import SelectionState
from exportdesk.ui.controllers.export_controller import download_lines, summary_lines
from exportdesk.utils.i18n import strings

logger = logging.getLogger("exportdesk.cli")


def _folder_arg(value: str) -> str:
    text = str(value or "").strip()
    if text == ALL_FOLDERS_ID or parse_folder_selector(text) is not None:
        return text
    raise argparse.ArgumentTypeError(f'folder must be "{ALL_FOLDERS_ID}" or an integer id, got {value!r}')


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    env = ClientSettings.from_env()
    p = argparse.ArgumentParser(
        prog="exportdesk-cli",
        description="Headless dashboard/alert export runner",
    )
    p.add_argument("--base-url", default=env.base_url, help="Export backend base URL")
    p.add_argument("--timeout", type=float, default=env.timeout_s, help="Request timeout in seconds")

    p.add_argument(
        "--folder",
        type=_folder_arg,
        default=ALL_FOLDERS_ID,
        help='Integer folder id to filter by, "0" for General or "all"',
    )
    p.add_argument("--search", default="", help="Case-insensitive search over titles, tags and folder titles")

    p.add_argument("--dashboard", action="append", default=[], help="Dashboard uid to export (repeatable)")
    p.add_argument("--alert", action="append", default=[], help="Alert uid to export (repeatable)")
    p.add_argument("--all-dashboards", action="store_true", help="Select every dashboard passing the filters")
    p.add_argument("--all-alerts", action="store_true", help="Select every alert passing the filters")

    p.add_argument("--zip", action="store_true", help="Ask the server for a ZIP archive")
    p.add_argument("--no-alerts", action="store_true", help="Send includeAlerts=false")
    p.add_argument("--output-dir", default=env.download_dir, help="Where downloaded archives are saved")
    p.add_argument("--output-json", default="", help="Write the export outcome as JSON to this file")

    p.add_argument("--tree", action="store_true", help="Print the dashboard folder tree")
    p.add_argument("--list", action="store_true", help="Print the filtered dashboards and alerts")
    p.add_argument("--verbose", action="store_true")
    return p.parse_args(argv)


def _configure_logging(verbose: bool) -> None:
    level = logging.WARNING
    if verbose:
        level = logging.INFO
    if ClientSettings.from_env().debug:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _print_tree(folders, selected_folder: str) -> None:
    for node in build_folder_tree(folders, count_for=dashboard_count_for, selected_folder=selected_folder):
        marker = "*" if node.selected else " "
        pad = "  " * node.level
        count = f" ({node.count})" if node.count else ""
        ident = "" if node.synthetic else f" [id={node.node_id}]"
        print(f"{marker} {pad}{node.title}{count}{ident}")


def _print_items(label: str, items) -> None:
    print(f"{label}: {len(items)}")
    for it in items:
        print(f"  {it.uid}\t{it.title}\t{it.folder_title}")


def _outcome_to_json(outcome: Any) -> dict[str, Any]:
    if isinstance(outcome, ExportDownload):
        return {
            "kind": "archive",
            "filename": outcome.filename,
            "savedPath": outcome.saved_path,
            "sizeBytes": outcome.size_bytes,
        }
    return {
        "kind": "summary",
        "exportedDashboards": outcome.exported_dashboards,
        "exportedAlerts": outcome.exported_alerts,
        "exportedLibraries": outcome.exported_libraries,
        "exportPath": outcome.export_path,
        "errors": list(outcome.errors),
    }


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    _configure_logging(args.verbose)

    client = ApiClient(args.base_url, timeout_s=args.timeout)
    try:
        try:
            config = client.get_config_status()
        except ApiError as e:
            logger.warning("Config status unavailable, using defaults: %s", e)
            config = AppConfig()
        if config.backend_misconfigured:
            print(strings.tr("warn_backend_config").format(message=config.error_message or "-"), file=sys.stderr)

        try:
            listing = client.get_folders()
            dashboards = client.get_dashboards()
            alerts = client.get_alerts()
        except ApiError as e:
            print(str(e), file=sys.stderr)
            return 1

        state = FilterState(selected_folder=str(args.folder), search_query=str(args.search or "").strip())
        visible_dashboards = filter_items(dashboards, state)
        visible_alerts = filter_items(alerts, state)

        if args.tree:
            _print_tree(listing.folders, state.selected_folder)
        if args.list:
            _print_items(strings.tr("nav_dashboards"), visible_dashboards)
            _print_items(strings.tr("nav_alerts"), visible_alerts)

        selection = SelectionState()
        for uid in args.dashboard:
            selection.toggle(KIND_DASHBOARDS, uid, True)
        for uid in args.alert:
            selection.toggle(KIND_ALERTS, uid, True)
        if args.all_dashboards:
            selection.select_all(KIND_DASHBOARDS, (d.uid for d in visible_dashboards))
        if args.all_alerts:
            selection.select_all(KIND_ALERTS, (a.uid for a in visible_alerts))

        wants_export = bool(args.dashboard or args.alert or args.all_dashboards or args.all_alerts)
        if not wants_export:
            if args.tree or args.list:
                return 0
            print(strings.tr("warn_select_something"), file=sys.stderr)
            return 2

        negotiator = ExportNegotiator(client, download_dir=os.path.abspath(args.output_dir))
        try:
            outcome = negotiator.export(
                selection.selected(KIND_DASHBOARDS),
                selection.selected(KIND_ALERTS),
                not args.no_alerts,
                bool(args.zip or config.force_enable_zip_export),
            )
        except NothingSelectedError as e:
            print(str(e), file=sys.stderr)
            return 2
        except (ApiError, ExportError, OSError) as e:
            print(strings.tr("err_export_failed").format(error=e), file=sys.stderr)
            return 1

        if isinstance(outcome, ExportDownload):
            lines = download_lines(outcome)
        else:
            lines = summary_lines(outcome)
            if outcome.errors:
                lines.append(strings.tr("export_result_warnings") + ":")
                lines.extend(f"  - {err}" for err in outcome.errors)
        for line in lines:
            print(line)

        if args.output_json:
            out_json = os.path.abspath(args.output_json)
            with open(out_json, "w", encoding="utf-8") as f:
                json.dump(_outcome_to_json(outcome), f, ensure_ascii=False, indent=2)
            print(f"Saved JSON: {out_json}")
        return 0
    finally:
        client.close()


if __name__ == "__main__":
    raise SystemExit(main())
