"""Matching, rewriting and directory traversal for risk strings."""

import logging
import os
from pathlib import Path
from typing import Callable, Optional

from .errors import ScanError
from .models import (
    FileMatchEvent,
    FileOutcome,
    FileProcessedEvent,
    ScanResult,
    ScanStats,
)

logger = logging.getLogger(__name__)

REASON_UNCHANGED = "content unchanged"
REASON_DRY_RUN = "dry run"

MatchCallback = Callable[[FileMatchEvent], None]
ProcessedCallback = Callable[[FileProcessedEvent], None]


def scan_content(content: str, risk_urls: list[str]) -> ScanResult:
    """Return the risk strings contained in content, in risk list order.

    Empty strings never match.
    """
    matches = [url for url in risk_urls if url and url in content]
    return ScanResult(matches=matches, has_matches=bool(matches))


def count_occurrences(content: str, urls: list[str]) -> int:
    """
    Count how many times the given strings occur in content.

    Each string is counted on its own, so a region covered by two different
    risk strings (e.g. "example.com" inside "sub.example.com") counts twice.
    """
    total = 0
    for url in urls:
        if url:
            total += len(content.split(url)) - 1
    return total


def replace_urls(content: str, matches: list[str]) -> str:
    """Remove every occurrence of each matched string, one string at a time.

    Removals can join text into a new risk string; that result is not rescanned.
    """
    result = content
    for url in matches:
        result = result.replace(url, "")
    return result


def _read_text(file_path: Path) -> str:
    with open(file_path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def _write_text(file_path: Path, content: str) -> None:
    with open(file_path, "w", encoding="utf-8", newline="") as f:
        f.write(content)


def _describe_error(exc: Exception) -> str:
    if isinstance(exc, UnicodeDecodeError):
        return f"Not valid UTF-8 text ({exc.reason} at byte {exc.start})"
    if isinstance(exc, OSError) and exc.strerror:
        return exc.strerror
    return str(exc)


class _Walker:
    """Depth-first traversal that owns the stats for a single scan."""

    def __init__(
        self,
        risk_urls: list[str],
        replace: bool,
        dry_run: bool,
        on_file_match: Optional[MatchCallback],
        on_file_processed: Optional[ProcessedCallback],
    ):
        self.risk_urls = risk_urls
        self.replace = replace
        self.dry_run = dry_run
        self.on_file_match = on_file_match or (lambda event: None)
        self.on_file_processed = on_file_processed or (lambda event: None)
        self.stats = ScanStats()

    def _processed(self, file_path: Path, outcome: FileOutcome, **kwargs) -> FileOutcome:
        self.on_file_processed(
            FileProcessedEvent(file_path=str(file_path), outcome=outcome, **kwargs)
        )
        return outcome

    def walk(self, directory: Path) -> None:
        try:
            entries = sorted(os.scandir(directory), key=lambda entry: entry.name)
        except OSError as e:
            logger.warning(f"Cannot list directory {directory}: {_describe_error(e)}")
            self._processed(directory, FileOutcome.ERROR, error=_describe_error(e))
            return

        for entry in entries:
            path = directory / entry.name
            try:
                is_dir = entry.is_dir()
            except OSError:
                is_dir = False

            if is_dir:
                self.walk(path)
            else:
                self.stats.files_scanned += 1
                self.process_file(path)

    def process_file(self, file_path: Path) -> FileOutcome:
        try:
            content = _read_text(file_path)
        except (OSError, UnicodeDecodeError) as e:
            message = _describe_error(e)
            logger.warning(f"Skipping {file_path}: {message}")
            return self._processed(file_path, FileOutcome.ERROR, error=message)

        result = scan_content(content, self.risk_urls)
        if not result.has_matches:
            logger.debug(f"No match: {file_path}")
            return FileOutcome.NO_MATCH

        self.stats.files_with_matches += 1
        # occurrences, not unique strings
        self.stats.total_matches += count_occurrences(content, result.matches)
        self.on_file_match(FileMatchEvent(file_path=str(file_path), matches=result.matches))

        if not self.replace:
            return FileOutcome.REPORTED

        new_content = replace_urls(content, result.matches)

        if new_content == content:
            return self._processed(file_path, FileOutcome.UNCHANGED, reason=REASON_UNCHANGED)

        if self.dry_run:
            return self._processed(file_path, FileOutcome.DRY_RUN, reason=REASON_DRY_RUN)

        try:
            _write_text(file_path, new_content)
        except OSError as e:
            message = _describe_error(e)
            logger.warning(f"Failed to rewrite {file_path}: {message}")
            return self._processed(file_path, FileOutcome.ERROR, error=message)

        self.stats.files_mutated += 1
        logger.debug(f"Rewrote {file_path}")
        return self._processed(file_path, FileOutcome.REPLACED, mutated=True)


def scan_directory(
    root: str | Path,
    risk_urls: list[str],
    *,
    replace: bool = False,
    dry_run: bool = False,
    on_file_match: Optional[MatchCallback] = None,
    on_file_processed: Optional[ProcessedCallback] = None,
) -> ScanStats:
    """
    Recursively scan every file under root for risk strings.

    Args:
        root: Directory to scan
        risk_urls: Ordered risk strings to look for
        replace: Strip matched strings from files (detection only when False)
        dry_run: With replace, compute the rewrite but never write it
        on_file_match: Called once per file with at least one match
        on_file_processed: Called once per file that was rewritten, skipped
            during replacement, or could not be read or written

    Returns:
        ScanStats for the whole traversal

    Raises:
        ScanError: If root does not exist, is not a directory, or cannot be listed
    """
    root_path = Path(root)
    if not root_path.exists():
        raise ScanError(f"Directory not found: {root_path}")
    if not root_path.is_dir():
        raise ScanError(f"Not a directory: {root_path}")
    try:
        os.listdir(root_path)
    except OSError as e:
        raise ScanError(f"Cannot read directory {root_path}: {_describe_error(e)}") from e

    walker = _Walker(risk_urls, replace, dry_run, on_file_match, on_file_processed)
    walker.walk(root_path)

    stats = walker.stats
    logger.info(
        f"Scanned {stats.files_scanned} files under {root_path}: "
        f"{stats.files_with_matches} with matches, {stats.total_matches} occurrences, "
        f"{stats.files_mutated} rewritten"
    )
    return stats
