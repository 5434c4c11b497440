"""
Batched CSV report writing.

Rows are buffered and written once a buffer holds more than ``batch_size``
rows, or when a flush is forced at the end of a run.

Row writes are best-effort: a row that fails to serialise is logged and
counted as ``WriteOutcome.FAILED`` instead of raising, so one bad row cannot
abort a long batch. Callers that need to know inspect the returned
``FlushResult`` or the ``failed_rows`` counters.
"""

import csv
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Sequence, TextIO

from citematch.citation.consolidation import (
    ConsolidatedEntry,
    MatchRecord,
    UnmatchedRecord,
)

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 500


class WriteOutcome(Enum):
    WRITTEN = "written"
    FAILED = "failed"


@dataclass
class FlushResult:
    """What happened during one flush attempt."""

    flushed: bool = False
    outcomes: List[WriteOutcome] = field(default_factory=list)

    @property
    def written(self) -> int:
        return sum(1 for o in self.outcomes if o is WriteOutcome.WRITTEN)

    @property
    def failed(self) -> int:
        return sum(1 for o in self.outcomes if o is WriteOutcome.FAILED)


class BatchCsvWriter:
    """Buffers rows for one CSV stream and writes them in batches."""

    def __init__(self, stream: TextIO, batch_size: int = DEFAULT_BATCH_SIZE, name: str = "csv"):
        self.stream = stream
        self.batch_size = batch_size
        self.name = name
        self.rows: List[Sequence] = []
        self.written_rows = 0
        self.failed_rows = 0
        self._writer = csv.writer(stream, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")

    def __len__(self) -> int:
        return len(self.rows)

    def append(self, row: Sequence) -> None:
        self.rows.append(row)

    def write_row(self, row: Sequence) -> WriteOutcome:
        try:
            self._writer.writerow(row)
        except (csv.Error, OSError, ValueError) as e:
            logger.warning(f"Failed to write row {row!r} to {self.name}: {e}")
            self.failed_rows += 1
            return WriteOutcome.FAILED
        self.written_rows += 1
        return WriteOutcome.WRITTEN

    def flush(self, force: bool = False) -> FlushResult:
        """
        Write every buffered row if the buffer exceeds the batch size or
        ``force`` is set, then clear the buffer.
        """
        if len(self.rows) <= self.batch_size and not force:
            return FlushResult()

        result = FlushResult(flushed=True)
        for row in self.rows:
            result.outcomes.append(self.write_row(row))
        self.rows = []

        logger.debug(
            f"Flushed {self.name}: {result.written} written, {result.failed} failed"
        )
        return result


class ReportSink:
    """The matched and unmatched citation report streams."""

    def __init__(
        self,
        matched_stream: TextIO,
        unmatched_stream: TextIO,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ):
        self.matched = BatchCsvWriter(matched_stream, batch_size, name="matched")
        self.unmatched = BatchCsvWriter(unmatched_stream, batch_size, name="unmatched")

    def add_match(self, record: MatchRecord) -> None:
        self.matched.append(tuple(record))
        self.flush()

    def add_unmatched(self, record: UnmatchedRecord) -> None:
        self.unmatched.append(tuple(record))
        self.flush()

    def export(self, entry: ConsolidatedEntry, filename: str) -> int:
        """
        Queue one MatchRecord per canonical citation in ``entry``.

        Returns:
            The number of match records queued.
        """
        queued = 0
        for citation, count in entry.items():
            self.add_match(MatchRecord(filename, citation, count))
            queued += 1
        self.flush()
        return queued

    def flush(self, force: bool = False) -> List[FlushResult]:
        return [self.matched.flush(force), self.unmatched.flush(force)]

    def close(self) -> List[FlushResult]:
        """Force out whatever is still buffered in both streams."""
        return self.flush(force=True)

    @property
    def failed_rows(self) -> int:
        return self.matched.failed_rows + self.unmatched.failed_rows
