"""Pydantic models for string-check."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class FileOutcome(str, Enum):
    """What happened to a single file during a scan."""

    NO_MATCH = "no_match"
    REPORTED = "reported"
    REPLACED = "replaced"
    UNCHANGED = "unchanged"
    DRY_RUN = "dry_run"
    ERROR = "error"


class ScanResult(BaseModel):
    """Risk strings found in one piece of content."""

    matches: list[str] = Field(
        default_factory=list, description="Matched risk strings, in risk list order"
    )
    has_matches: bool = Field(default=False, description="Whether anything matched")


class ScanStats(BaseModel):
    """Counters accumulated over one directory traversal."""

    files_scanned: int = Field(default=0, ge=0, description="Files visited")
    files_with_matches: int = Field(
        default=0, ge=0, description="Files with at least one match"
    )
    total_matches: int = Field(
        default=0, ge=0, description="Occurrences of matched strings across all files"
    )
    files_mutated: int = Field(default=0, ge=0, description="Files rewritten on disk")


class FileMatchEvent(BaseModel):
    """Fired once for every file that contains at least one risk string."""

    file_path: str
    matches: list[str]


class FileProcessedEvent(BaseModel):
    """Fired once a file has been rewritten, skipped or failed."""

    file_path: str
    outcome: FileOutcome
    mutated: bool = False
    reason: Optional[str] = Field(
        default=None, description="Why the file was left unchanged"
    )
    error: Optional[str] = Field(default=None, description="Read/write error message")


class AssetStats(BaseModel):
    """Counters for one pass over a build's asset map."""

    assets_scanned: int = 0
    assets_with_matches: int = 0
    total_matches: int = 0
    assets_mutated: int = 0


class ScanRequest(BaseModel):
    """Request body for scanning a directory."""

    path: str = Field(description="Directory to scan")
    risk_urls: Optional[list[str]] = Field(
        default=None, description="Risk strings to look for"
    )
    config_path: Optional[str] = Field(
        default=None,
        description="Risk list file (.json or .py), used when risk_urls is not given",
    )
    replace: bool = Field(default=False, description="Strip matched strings from files")
    dry_run: bool = Field(
        default=False, description="Compute replacements without writing files"
    )


class FileReport(BaseModel):
    """Everything observed for one file that produced an event."""

    file_path: str
    matches: list[str] = Field(default_factory=list)
    outcome: FileOutcome
    reason: Optional[str] = None
    error: Optional[str] = None


class ScanResponse(BaseModel):
    """Response from a directory scan."""

    scan_id: str = Field(description="Unique identifier for this scan")
    root: str = Field(description="Resolved directory that was scanned")
    replace: bool
    dry_run: bool
    stats: ScanStats
    files: list[FileReport] = Field(default_factory=list)
