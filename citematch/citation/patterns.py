"""
Reporter-driven citation pattern and matcher.

The pattern recognises citations of the form ``<volume> <reporter> <page>``
where the reporter is one of the abbreviations in a ReporterSet. Pin
citations such as ``410 U.S. at 153`` are caught by the separator run
between reporter and page, which bridges commas, question marks, spaces and
the word "at".
"""

import logging
import re
from typing import List, Optional, Pattern, Sequence, Union

from citematch.citation.exceptions import (
    ConfigurationError,
    PatternBuildError,
    PatternNotBuiltError,
)
from citematch.citation.reporters import ReporterSet

logger = logging.getLogger(__name__)

# ── Pattern Pieces ─────────────────────────────────────────────

# Volume number, then a space and a word boundary before the reporter
VOLUME = r"[0-9]+ \b"

# Characters allowed between the reporter and the page: ", " and " at "
PIN_SEPARATOR = r"[,? at]*"

PAGE = r"[0-9]+"


def assemble_pattern(reporters: ReporterSet) -> str:
    """Return the regex source for the given reporters."""
    return VOLUME + reporters.alternation() + PIN_SEPARATOR + PAGE


class CitationPattern:
    """
    A citation regex built once from a reporter source and cached.

    The pattern is built lazily by ``build()``. Once built it is never
    rebuilt, so later changes to the reporter file have no effect on a
    running matcher.
    """

    def __init__(self, reporters_path: Optional[str] = None, encoding: str = "utf-8"):
        self.reporters_path = reporters_path
        self.encoding = encoding
        self._compiled: Optional[Pattern[str]] = None

    @classmethod
    def from_reporters(
        cls, reporters: Union[ReporterSet, Sequence[str]]
    ) -> "CitationPattern":
        """
        Build a pattern directly from in-memory reporters.

        Raises:
            PatternBuildError: If the sequence holds no usable reporter.
        """
        try:
            if not isinstance(reporters, ReporterSet):
                reporters = ReporterSet(reporters)
        except ConfigurationError as e:
            raise PatternBuildError(
                f"The pattern could not be generated. {e}"
            ) from e

        pattern = cls()
        pattern._compile(reporters)
        return pattern

    @property
    def is_built(self) -> bool:
        return self._compiled is not None

    @property
    def compiled(self) -> Pattern[str]:
        """The compiled regex; raises PatternNotBuiltError before ``build()``."""
        if self._compiled is None:
            raise PatternNotBuiltError(
                "The citation pattern has not been built yet. Call build() first."
            )
        return self._compiled

    def build(self) -> Pattern[str]:
        """
        Build the pattern from the reporter source unless already built.

        Returns:
            The compiled pattern.

        Raises:
            PatternBuildError: If the reporter source is missing, unreadable
                or empty. This is not retried.
        """
        if self._compiled is not None:
            return self._compiled

        if self.reporters_path is None:
            raise PatternBuildError(
                "The pattern could not be generated. No reporters file was given."
            )

        try:
            reporters = ReporterSet.from_file(self.reporters_path, self.encoding)
        except ConfigurationError as e:
            raise PatternBuildError(
                "The pattern could not be generated. "
                f"Check that the reporters file is accessible. {e}"
            ) from e

        return self._compile(reporters)

    def _compile(self, reporters: ReporterSet) -> Pattern[str]:
        source = assemble_pattern(reporters)
        try:
            self._compiled = re.compile(source)
        except re.error as e:
            raise PatternBuildError(f"The pattern could not be compiled: {e}") from e
        logger.debug(f"Citation pattern built from {reporters!r}")
        return self._compiled


class Matcher:
    """Applies a CitationPattern to document text."""

    def __init__(self, pattern: CitationPattern):
        self.pattern = pattern

    def match(self, content: str) -> List[str]:
        """
        Return every full citation match in document order.

        Args:
            content: Document text.

        Returns:
            Matched citation strings, in the order they occur. Empty or
            whitespace-only content gives an empty list.

        Raises:
            PatternNotBuiltError: If the pattern has not been built.
        """
        compiled = self.pattern.compiled
        if not content or not content.strip():
            return []
        return [m.group(0) for m in compiled.finditer(content)]
