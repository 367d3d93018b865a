"""Apply the risk string scanner to a build's in-memory asset map."""

import logging
import re
from collections.abc import MutableMapping
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, Field

from .config import load_risk_list, normalize_urls
from .errors import BuildRejectedError, ConfigError
from .models import AssetStats
from .scanner import count_occurrences, replace_urls, scan_content

logger = logging.getLogger(__name__)

LOG_PREFIX = "[StringCheck]"
DEFAULT_TEST = r"\.(js|css|html)$"

Pattern = Union[str, re.Pattern]
AssetContent = Union[str, bytes]


def _compile_patterns(patterns: Pattern | list[Pattern] | None) -> list[re.Pattern]:
    if patterns is None:
        return []
    if not isinstance(patterns, (list, tuple)):
        patterns = [patterns]
    return [re.compile(p) if isinstance(p, str) else p for p in patterns]


class AssetReport(BaseModel):
    """Outcome of one pass over an asset map."""

    stats: AssetStats = Field(default_factory=AssetStats)
    warnings: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    mutated_assets: list[str] = Field(default_factory=list)

    @property
    def failed(self) -> bool:
        return bool(self.errors)

    def raise_for_errors(self) -> None:
        """Raise BuildRejectedError if the pass recorded any errors."""
        if self.errors:
            raise BuildRejectedError(self.errors)


class AssetScanner:
    """
    Scan (and optionally clean) named build assets for risk strings.

    The host build tool hands over its assets as a mapping of file name to
    content; ``apply`` rewrites entries of that mapping in place.
    """

    def __init__(
        self,
        risk_urls: list[str] | str | Path | None = None,
        replace: bool = False,
        fail_on_match: bool = False,
        test: Pattern | list[Pattern] | None = DEFAULT_TEST,
        exclude: Pattern | list[Pattern] | None = None,
        verbose: bool = True,
    ):
        self.risk_urls = risk_urls
        self.replace = replace
        self.fail_on_match = fail_on_match
        self.test = _compile_patterns(test)
        self.exclude = _compile_patterns(exclude)
        self.verbose = verbose
        self.risk_url_list: Optional[list[str]] = None
        self.report = AssetReport()

    def initialize(self) -> list[str]:
        """Resolve the risk list once; later calls reuse it."""
        if self.risk_url_list is not None:
            return self.risk_url_list

        if isinstance(self.risk_urls, (list, tuple)):
            self.risk_url_list = normalize_urls(list(self.risk_urls))
        elif isinstance(self.risk_urls, (str, Path)):
            self.risk_url_list = load_risk_list(Path(self.risk_urls).resolve())
        else:
            raise ConfigError(
                "No risk_urls given: provide a list of risk strings or a config file path"
            )
        return self.risk_url_list

    def should_process_asset(self, filename: str) -> bool:
        """Exclude patterns win; otherwise the name must match a test pattern."""
        if any(pattern.search(filename) for pattern in self.exclude):
            return False
        if self.test:
            return any(pattern.search(filename) for pattern in self.test)
        return True

    def process_asset(self, filename: str, source: AssetContent) -> Optional[str]:
        """Scan one asset. Returns the rewritten content, or None to keep it."""
        risk_urls = self.initialize()
        content = source.decode("utf-8") if isinstance(source, bytes) else source
        result = scan_content(content, risk_urls)

        if not result.has_matches:
            return None

        stats = self.report.stats
        stats.assets_with_matches += 1
        stats.total_matches += count_occurrences(content, result.matches)

        if self.verbose:
            self.report.warnings.append(
                f"{LOG_PREFIX} Risk URLs found in {filename}: {', '.join(result.matches)}"
            )

        if self.fail_on_match:
            self.report.errors.append(
                f"{LOG_PREFIX} Build failed: risk URLs detected in {filename}"
            )

        if self.replace:
            new_content = replace_urls(content, result.matches)
            if new_content != content:
                stats.assets_mutated += 1
                return new_content

        return None

    def apply(self, assets: MutableMapping[str, AssetContent]) -> AssetReport:
        """Run one pass over the asset map, replacing cleaned assets in place."""
        self.initialize()
        self.report = AssetReport()

        for filename in list(assets.keys()):
            if not self.should_process_asset(filename):
                continue

            self.report.stats.assets_scanned += 1
            try:
                new_content = self.process_asset(filename, assets[filename])
            except UnicodeDecodeError as e:
                self.report.warnings.append(f"{LOG_PREFIX} Skipped {filename}: {e}")
                continue

            if new_content is not None:
                assets[filename] = new_content
                self.report.mutated_assets.append(filename)

        if self.verbose:
            self.report.warnings.append(self._summary())
            logger.info(self._summary())

        return self.report

    def _summary(self) -> str:
        stats = self.report.stats
        lines = [
            f"{LOG_PREFIX} --- Scan summary ---",
            f"{LOG_PREFIX} Assets scanned: {stats.assets_scanned}",
            f"{LOG_PREFIX} Assets with matches: {stats.assets_with_matches}",
            f"{LOG_PREFIX} Total URL matches: {stats.total_matches}",
        ]
        if self.replace:
            lines.append(f"{LOG_PREFIX} Assets cleaned: {stats.assets_mutated}")
        return "\n".join(lines)
