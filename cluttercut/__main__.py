#!/usr/bin/env python3
"""
cluttercut - CLI Entry Point
============================

Usage:
    python -m cluttercut list ~/Downloads
    python -m cluttercut preview ~/Downloads --rules rules.json
    python -m cluttercut run ~/Downloads --rules rules.json --report-out report.json
"""

import argparse
import sys
from pathlib import Path

from .config import load_settings
from .contracts import ExecuteRequest
from .engine import execute
from .errors import RuleFileError
from .preview import build_preview
from .rules import load_rules
from .scanner import list_entries
from .utils import (
    console,
    print_header,
    print_error,
    print_warning,
    print_success,
    print_listing,
    print_preview,
    print_result,
    save_json,
)


def _resolve_folder(folder: Path) -> Path | None:
    folder = folder.expanduser().resolve()
    if not folder.exists() or not folder.is_dir():
        print_error(f"Invalid directory: {folder}")
        return None
    return folder


def _load_rules_arg(args) -> list | None:
    rules_path = args.rules or args.settings.rules_path
    if rules_path is None:
        print_error("No rules file given (use --rules or set CLUTTERCUT_RULES)")
        return None
    try:
        rules = load_rules(rules_path)
    except RuleFileError as e:
        print_error(str(e))
        return None
    if not rules:
        print_warning(f"Rules file has no rules: {rules_path}")
    return rules


def cmd_list(args) -> int:
    """List command - show the visible top-level entries of a folder."""
    folder = _resolve_folder(args.folder)
    if folder is None:
        return 1
    try:
        entries = list_entries(folder)
    except OSError as e:
        print_error(f"Failed to read folder: {e}")
        return 1
    print_listing(str(folder), entries)
    return 0


def cmd_preview(args) -> int:
    """Preview command - show where files would go, without moving anything."""
    folder = _resolve_folder(args.folder)
    if folder is None:
        return 1
    rules = _load_rules_arg(args)
    if rules is None:
        return 1
    try:
        entries = list_entries(folder)
    except OSError as e:
        print_error(f"Failed to read folder: {e}")
        return 1

    print_preview(str(folder), build_preview(entries, rules))
    return 0


def cmd_run(args) -> int:
    """Run command - move matched files and report the outcome."""
    folder = _resolve_folder(args.folder)
    if folder is None:
        return 1
    rules = _load_rules_arg(args)
    if rules is None:
        return 1

    workers = args.workers if args.workers is not None else args.settings.workers
    if workers < 1:
        print_error("--workers must be at least 1")
        return 1
    report_out = args.report_out or args.settings.report_out

    print_header("cluttercut", f"Folder: {folder}\nRules: {len(rules)}\nWorkers: {workers}")

    try:
        result = execute(
            ExecuteRequest(folder_path=str(folder), rules=tuple(rules)),
            max_workers=workers,
            show_progress=not args.no_progress,
        )
    except KeyboardInterrupt:
        print("\n[ABORT] Operation cancelled by user")
        return 130

    print_result(str(folder), result)
    save_json(result.to_dict(), report_out)

    if result.success:
        print_success(f"Moved {result.moved_count} files")
        return 0
    if result.is_partial:
        print_warning(f"Partial success: moved {result.moved_count} files, {result.failed_count} failed")
    else:
        print_error(f"Nothing moved cleanly ({result.failed_count} failed)")
    console.print(f"Report:    {report_out}")
    return 1


# =============================================================================
# Main
# =============================================================================

def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="cluttercut - Sort the top level of a folder with ordered rules",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--env-file", type=str, default=None,
                        help="Load settings from this .env file")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- LIST command ---
    list_parser = subparsers.add_parser("list", help="List the top level of a folder")
    list_parser.add_argument("folder", type=Path, help="Folder to list")
    list_parser.set_defaults(func=cmd_list)

    # --- PREVIEW command ---
    preview_parser = subparsers.add_parser("preview", help="Show planned moves without touching files")
    preview_parser.add_argument("folder", type=Path, help="Folder to organize")
    preview_parser.add_argument("--rules", type=Path, help="Rules JSON file (default: $CLUTTERCUT_RULES)")
    preview_parser.set_defaults(func=cmd_preview)

    # --- RUN command ---
    run_parser = subparsers.add_parser("run", help="Move matched files into their folders")
    run_parser.add_argument("folder", type=Path, help="Folder to organize")
    run_parser.add_argument("--rules", type=Path, help="Rules JSON file (default: $CLUTTERCUT_RULES)")
    run_parser.add_argument("--workers", type=int, default=None,
                            help="Number of move threads (default: $CLUTTERCUT_WORKERS or 1)")
    run_parser.add_argument("--report-out", type=Path, default=None,
                            help="Output report file (default: $CLUTTERCUT_REPORT_OUT or report.json)")
    run_parser.add_argument("--no-progress", action="store_true",
                            help="Hide the progress bar")
    run_parser.set_defaults(func=cmd_run)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    args.settings = load_settings(args.env_file)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
