"""Scan a directory tree for risk strings and optionally strip them out."""

from .config import load_risk_list, normalize_urls, resolve_risk_list
from .errors import BuildRejectedError, ConfigError, ScanError, StringCheckError
from .models import (
    FileMatchEvent,
    FileOutcome,
    FileProcessedEvent,
    ScanResult,
    ScanStats,
)
from .scanner import count_occurrences, replace_urls, scan_content, scan_directory

__all__ = [
    "BuildRejectedError",
    "ConfigError",
    "FileMatchEvent",
    "FileOutcome",
    "FileProcessedEvent",
    "ScanError",
    "ScanResult",
    "ScanStats",
    "StringCheckError",
    "count_occurrences",
    "load_risk_list",
    "normalize_urls",
    "replace_urls",
    "resolve_risk_list",
    "scan_content",
    "scan_directory",
]
