"""
Reporter list loading.

A reporter is an abbreviation naming a published series of case reports
(e.g. "F.2d", "U.S.", "CLR"). The reporter file holds one abbreviation per
line; the order of the lines decides which alternative wins when two
reporters overlap in the citation pattern.
"""

import logging
import re
from typing import Iterable, List, Tuple

from citematch.citation.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class ReporterSet:
    """An ordered, immutable collection of reporter abbreviations."""

    def __init__(self, reporters: Iterable[str], source: str = "<memory>"):
        """
        Args:
            reporters: Reporter abbreviations in precedence order.
            source: Where the reporters came from, used in error messages.

        Raises:
            ConfigurationError: If no usable reporter remains.
        """
        self._reporters: Tuple[str, ...] = tuple(
            r for r in reporters if r and r.strip()
        )
        self.source = source
        if not self._reporters:
            raise ConfigurationError(
                f"The reporters file {source} does not list any reporters."
            )

    @classmethod
    def from_file(cls, path: str, encoding: str = "utf-8") -> "ReporterSet":
        """
        Load reporters from a newline-delimited file, skipping empty lines.

        Raises:
            ConfigurationError: If the file cannot be read or lists no reporters.
        """
        try:
            with open(path, "r", encoding=encoding) as f:
                lines = f.read().splitlines()
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(
                f"The reporters file {path} could not be read: {e}"
            ) from e

        reporters = cls(lines, source=path)
        logger.debug(f"Loaded {len(reporters)} reporters from {path}")
        return reporters

    def __len__(self) -> int:
        return len(self._reporters)

    def __iter__(self):
        return iter(self._reporters)

    def __repr__(self) -> str:
        return f"ReporterSet({len(self)} reporters from {self.source})"

    def escaped(self) -> List[str]:
        """Return every reporter escaped for literal use inside a regex."""
        return [re.escape(reporter) for reporter in self._reporters]

    def alternation(self) -> str:
        """Return the escaped reporters as a single capturing alternation group."""
        return "(" + "|".join(self.escaped()) + ")"
