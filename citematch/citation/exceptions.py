"""
Citation matching exceptions.

This module contains the exception hierarchy shared by the pattern builder,
the document scanner and the CLI.
"""


class CitationMatchError(Exception):
    """Base class for errors raised while matching citations."""

    pass


class ConfigurationError(CitationMatchError):
    """Raised when a reporter list, document directory or config file is unusable."""

    pass


class PatternBuildError(CitationMatchError):
    """Raised when the citation pattern cannot be generated from the reporter source."""

    pass


class PatternNotBuiltError(CitationMatchError):
    """Raised when matching is attempted before the citation pattern exists."""

    pass


class DocumentReadError(CitationMatchError):
    """Raised when a document cannot be read and the run is configured to abort."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Could not read document {path}: {reason}")
        self.path = path
        self.reason = reason
