"""
Pin citation consolidation.

Maps pin citations back to the canonical citations seen earlier in the same
document and counts how often each canonical citation is referenced.

Two behaviours here are known limitations:

- A canonical citation that occurs again resets its count to 1 instead of
  incrementing it.
- A pin citation's shorthand is matched against canonical citations with a
  substring test, and every canonical citation containing it is incremented.
  A shorthand such as "1 F.2d" therefore also counts towards "11 F.2d 3".
"""

import logging
from collections import OrderedDict
from typing import Iterable, Iterator, List, NamedTuple, Tuple

logger = logging.getLogger(__name__)

PIN_MARKER = " at "

# Trailing characters dropped from a shorthand: whitespace plus the
# separators the citation pattern bridges before "at"
SHORTHAND_TRAILING = " \t\r\n\x0b\x00,?"


class MatchRecord(NamedTuple):
    filename: str
    citation: str
    count: int


class UnmatchedRecord(NamedTuple):
    filename: str
    shorthand: str


def is_pin_citation(citation: str) -> bool:
    """True if the raw match points at a specific page with "at"."""
    return PIN_MARKER in citation


def pin_shorthand(citation: str) -> str:
    """
    Return the part of a pin citation before its first " at ".

    Example:
        >>> pin_shorthand("410 U.S. at 153")
        '410 U.S.'
    """
    position = citation.index(PIN_MARKER)
    return citation[: position + 1].rstrip(SHORTHAND_TRAILING)


class ConsolidatedEntry:
    """
    Canonical citation counts for one document, in first-seen order.

    Only citations inserted so far are visible to ``increment_containing``,
    which is what keeps a pin citation from resolving against a canonical
    citation that appears later in the document.
    """

    def __init__(self):
        self._counts: "OrderedDict[str, int]" = OrderedDict()

    def set_canonical(self, citation: str) -> None:
        # Reassignment resets the count; see module docstring
        self._counts[citation] = 1

    def increment_containing(self, shorthand: str) -> int:
        """Increment every citation containing ``shorthand``; return how many matched."""
        matched = 0
        for citation in self._counts:
            if shorthand in citation:
                self._counts[citation] += 1
                matched += 1
        return matched

    def items(self) -> Iterator[Tuple[str, int]]:
        return iter(self._counts.items())

    def as_dict(self) -> "OrderedDict[str, int]":
        return OrderedDict(self._counts)

    def __getitem__(self, citation: str) -> int:
        return self._counts[citation]

    def __contains__(self, citation: object) -> bool:
        return citation in self._counts

    def __len__(self) -> int:
        return len(self._counts)

    def __iter__(self) -> Iterator[str]:
        return iter(self._counts)

    def __repr__(self) -> str:
        return f"ConsolidatedEntry({dict(self._counts)!r})"


class ConsolidationEngine:
    """Resolves pin citations and collects the ones that cannot be resolved."""

    def __init__(self):
        self.unmatched: List[UnmatchedRecord] = []

    def consolidate(self, raw_matches: Iterable[str], filename: str) -> ConsolidatedEntry:
        """
        Build the canonical citation counts for one document.

        Matches are processed strictly in document order. Pin citations whose
        shorthand is not contained in any canonical citation seen so far are
        appended to ``self.unmatched``.

        Args:
            raw_matches: Citations in the order returned by the matcher.
            filename: Name of the document, recorded with unmatched pins.

        Returns:
            The document's ConsolidatedEntry.
        """
        entry = ConsolidatedEntry()

        for citation in raw_matches:
            if not is_pin_citation(citation):
                entry.set_canonical(citation)
                continue

            shorthand = pin_shorthand(citation)
            if not entry.increment_containing(shorthand):
                logger.debug(f"Unmatched pin citation in {filename}: {shorthand}")
                self.unmatched.append(UnmatchedRecord(filename, shorthand))

        return entry

    def drain_unmatched(self) -> List[UnmatchedRecord]:
        """Return the unmatched records collected so far and clear them."""
        drained, self.unmatched = self.unmatched, []
        return drained
