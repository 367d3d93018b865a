"""Exceptions for errors that fail a whole run."""


class StringCheckError(Exception):
    """Base class for string-check errors."""


class ConfigError(StringCheckError):
    """The risk list is missing, malformed or empty."""


class ScanError(StringCheckError):
    """The scan root does not exist or cannot be listed."""


class BuildRejectedError(StringCheckError):
    """Risk strings were found in build assets while fail_on_match is set."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("\n".join(errors) or "Build rejected")
