"""
Command line entry point for string-check.

Usage:
    string-check [ROOT] [--replace] [--dry-run] [--config PATH] [--verbose]
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from .config import default_config_path, load_risk_list
from .errors import StringCheckError
from .models import FileMatchEvent, FileProcessedEvent
from .scanner import scan_directory


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="string-check",
        description="Scan a directory for risk URLs and optionally remove them.",
    )
    parser.add_argument("root", nargs="?", default="./", help="Directory to scan (default: ./)")
    parser.add_argument(
        "-r", "--replace", action="store_true", help="Remove matched strings from files"
    )
    parser.add_argument(
        "-d", "--dry-run", action="store_true", help="With --replace, do not write files"
    )
    parser.add_argument(
        "-c",
        "--config",
        default=None,
        help="Risk list file (.json or .py). Defaults to $STRING_CHECK_CONFIG or ./risk-urls.json",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    root = Path(args.root).resolve()
    config_path = Path(args.config).resolve() if args.config else default_config_path()

    try:
        risk_urls = load_risk_list(config_path)
    except StringCheckError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Scanning directory: {root}")
    print(f"Using config file: {config_path}")
    if args.replace:
        if args.dry_run:
            print("Dry run: replacements are simulated, no files will be written\n")
        else:
            print("Replace mode: matched files will be rewritten\n")
    else:
        print("")

    def on_file_match(event: FileMatchEvent) -> None:
        print(f"[Match Found] {event.file_path}")
        print(f"   -> matches: {', '.join(event.matches)}")
        if not args.replace:
            print("")

    def on_file_processed(event: FileProcessedEvent) -> None:
        if event.error:
            print(f"[Skipped] {event.file_path}: {event.error}")
            return
        if args.replace:
            if event.mutated:
                print("   -> risk URLs removed\n")
            elif event.reason:
                print(f"   -> {event.reason}\n")

    try:
        stats = scan_directory(
            root,
            risk_urls,
            replace=args.replace,
            dry_run=args.dry_run,
            on_file_match=on_file_match,
            on_file_processed=on_file_processed,
        )
    except StringCheckError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print("--- Scan summary ---")
    print(f"Files scanned: {stats.files_scanned}")
    print(f"Files with matches: {stats.files_with_matches}")
    print(f"Total URL matches: {stats.total_matches}")
    if args.replace:
        if args.dry_run:
            print("Dry run: no files were modified")
        else:
            print(f"Files cleaned: {stats.files_mutated}")
    print("Scan complete.\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
