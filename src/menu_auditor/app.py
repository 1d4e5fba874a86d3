from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from pydantic import ValidationError
from tqdm.auto import tqdm

from menu_auditor.controllers.check_controller import CheckController
from menu_auditor.dom.errors import ParseError
from menu_auditor.dom.registry import CheckRegistry
from menu_auditor.managers.config_manager import config_manager
from menu_auditor.managers.report_manager import ReportManager
from menu_auditor.model import CheckStatus, RunReport
from menu_auditor.utils.configure_logging import configure_logger

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_FATAL = 2

_STATUS_ICONS = {
    CheckStatus.PASSED: "✅",
    CheckStatus.FAILED: "❌",
    CheckStatus.ERROR: "💥",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="menu-auditor",
        description="Validate the structural markup of the restaurant menu page."
    )
    parser.add_argument("fixture", nargs="?", default=None,
                        help="HTML document to check (defaults to the bundled menu page).")
    parser.add_argument("--workers", type=int, default=None, help="Threads used to evaluate checks.")
    parser.add_argument("--check", action="append", dest="codes", metavar="CODE",
                        help="Only run this check (repeatable).")
    parser.add_argument("--export", type=str, default=None, help="Write results to a .csv or .json file.")
    parser.add_argument("--config", type=str, default=None, help="Alternative settings.json.")
    parser.add_argument("--set", action="append", dest="overrides", default=[], metavar="KEY=VALUE",
                        help="Override a setting, e.g. runner.workers=4 (repeatable).")
    parser.add_argument("--log-level", type=str, default=None, help="Root log level (e.g. INFO, DEBUG).")
    parser.add_argument("--list", action="store_true", help="List the registered checks and exit.")
    parser.add_argument("--no-progress", action="store_true", help="Disable the progress bar.")
    return parser


def _apply_overrides(overrides: List[str]) -> bool:
    for item in overrides:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            print(f"❌ Invalid override '{item}', expected KEY=VALUE.")
            return False
        if not config_manager.set_nested(key.strip(), value.strip()):
            print(f"❌ Could not apply override '{item}'.")
            return False
    return True


def _print_checks() -> None:
    CheckRegistry.discover()
    print(f"{'REGION':<8} | {'CODE':<22} | DESCRIPTION")
    print("-" * 72)
    for check in CheckRegistry.get_all_checks():
        print(f"{check.region:<8} | {check.code:<22} | {check.description}")


def _print_summary(report: RunReport) -> None:
    print("\n" + "=" * 72)
    print(f"📊 STRUCTURE CHECKS: {report.source}")
    print("=" * 72)
    for result in report.results:
        icon = _STATUS_ICONS[result.status]
        print(f"{icon} {result.region:<7} {result.code:<22} {result.description}")
        if not result.passed:
            print(f"      └─ {result.message}")
    print("-" * 72)
    print(f"Checks Run:          {report.total}")
    print(f"Passed:              {report.passed}")
    print(f"Failed:              {report.failed}")
    print(f"Errored:             {report.errored}")
    print(f"Duration:            {report.duration:.3f} seconds")
    print("=" * 72 + "\n")


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point; returns the process exit status."""
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else EXIT_FATAL

    if args.config and not config_manager.reset(args.config):
        print(f"\nFATAL: could not load configuration from '{args.config}'.")
        return EXIT_FATAL
    if not _apply_overrides(args.overrides):
        return EXIT_FATAL

    configure_logger(
        args.log_level or config_manager.get_nested("debug.level", "WARNING"),
        module_specific_levels=config_manager.get_nested("debug.module_levels"),
        silenced_loggers=config_manager.get_nested("debug.silenced")
    )

    if args.list:
        _print_checks()
        return EXIT_OK

    try:
        controller = CheckController(config_manager)
    except ValidationError as e:
        logger.error("Invalid expectations in configuration: %s", e)
        print(f"\nFATAL: invalid expectations in configuration:\n{e}")
        return EXIT_FATAL

    show_progress = not args.no_progress and config_manager.get_nested("runner.progress", True)
    pbar = None

    def progress_update(current, total):
        nonlocal pbar
        if pbar is None:
            pbar = tqdm(total=total, desc="Checking", unit="check")
        pbar.n = current
        pbar.refresh()

    try:
        report = controller.run(
            fixture=args.fixture,
            workers=args.workers,
            codes=args.codes,
            progress_callback=progress_update if show_progress else None
        )
    except ParseError as e:
        logger.error("Fixture could not be loaded: %s", e)
        print(f"\nFATAL: {e}. No checks were run.")
        return EXIT_FATAL
    except ValueError as e:
        print(f"\nFATAL: {e}")
        return EXIT_FATAL
    finally:
        if pbar is not None:
            pbar.close()

    _print_summary(report)

    if args.export:
        try:
            out_path = ReportManager().export(report, args.export)
            print(f"✅ Report exported to: {out_path}")
        except (OSError, ValueError) as e:
            print(f"❌ Error exporting: {e}")
            return EXIT_FATAL

    return EXIT_OK if report.ok else EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())
