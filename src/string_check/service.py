"""Run a directory scan and collect per-file reports."""

import logging
import uuid
from pathlib import Path

from .config import resolve_risk_list
from .models import (
    FileMatchEvent,
    FileOutcome,
    FileProcessedEvent,
    FileReport,
    ScanRequest,
    ScanResponse,
)
from .scanner import scan_directory

logger = logging.getLogger(__name__)


def run_scan(request: ScanRequest) -> ScanResponse:
    """
    Scan request.path and return stats plus one report per file with events.

    Raises:
        ConfigError: If the risk list cannot be resolved.
        ScanError: If the directory cannot be scanned.
    """
    risk_urls = resolve_risk_list(
        request.risk_urls if request.risk_urls is not None else request.config_path
    )
    root = Path(request.path).resolve()
    reports: dict[str, FileReport] = {}

    def on_file_match(event: FileMatchEvent) -> None:
        reports[event.file_path] = FileReport(
            file_path=event.file_path,
            matches=event.matches,
            outcome=FileOutcome.REPORTED,
        )

    def on_file_processed(event: FileProcessedEvent) -> None:
        report = reports.setdefault(
            event.file_path,
            FileReport(file_path=event.file_path, outcome=event.outcome),
        )
        report.outcome = event.outcome
        report.reason = event.reason
        report.error = event.error

    logger.info(
        f"Scanning {root} for {len(risk_urls)} risk strings "
        f"(replace={request.replace}, dry_run={request.dry_run})"
    )
    stats = scan_directory(
        root,
        risk_urls,
        replace=request.replace,
        dry_run=request.dry_run,
        on_file_match=on_file_match,
        on_file_processed=on_file_processed,
    )

    return ScanResponse(
        scan_id=str(uuid.uuid4()),
        root=str(root),
        replace=request.replace,
        dry_run=request.dry_run,
        stats=stats,
        files=list(reports.values()),
    )
