"""
Directory scanning for citations.

Iterates over the files of a directory of court decisions, extracts the
citations to known reporters from each one and writes two CSV reports: the
canonical citations with the number of times each is referenced, and the pin
citations that could not be mapped back to a canonical citation.

Documents are processed one at a time, in sorted filename order. What happens
when a document cannot be read is controlled by ``on_read_error``:

- ``skip``: log a warning, record the file in ``ScanSummary.skipped`` and
  carry on with the next document.
- ``abort``: flush the rows already buffered and raise ``DocumentReadError``.
"""

import logging
import os
from dataclasses import asdict, dataclass, field
from typing import Dict, Iterator, List, Optional, TextIO, Tuple

from citematch.citation.consolidation import ConsolidationEngine
from citematch.citation.exceptions import ConfigurationError, DocumentReadError
from citematch.citation.patterns import CitationPattern, Matcher
from citematch.config import Config, READ_ERROR_POLICIES
from citematch.reports import DEFAULT_BATCH_SIZE, ReportSink
from citematch.timing import timed
from citematch.utils.file_ops import read_document

logger = logging.getLogger(__name__)


@dataclass
class ScanSummary:
    """Counters for one run over a document directory."""

    files_scanned: int = 0
    files_with_citations: int = 0
    matched_rows: int = 0
    unmatched_rows: int = 0
    failed_rows: int = 0
    skipped: List[Dict[str, str]] = field(default_factory=list)

    def as_dict(self) -> Dict:
        return asdict(self)


class DirectoryScanner:
    """Scans a directory of documents for citations to the listed reporters."""

    def __init__(
        self,
        reporters_path: str,
        directory: str,
        output_dir: Optional[str] = None,
        matched_filename: str = "citations.csv",
        unmatched_filename: str = "unmatched_citations.csv",
        batch_size: int = DEFAULT_BATCH_SIZE,
        on_read_error: str = "skip",
        encoding: str = "utf-8",
        read_pdf: bool = True,
    ):
        """
        Args:
            reporters_path: Path to the newline-delimited reporters file.
            directory: Directory containing the court decisions to scan.
            output_dir: Where the CSV reports go; defaults to ``directory``.
            matched_filename: File name of the matched citations report.
            unmatched_filename: File name of the unmatched pin citations report.
            batch_size: Rows buffered per report before a batch write.
            on_read_error: "skip" or "abort".
            encoding: Encoding of plain-text documents and the reporters file.
            read_pdf: Extract the text of .pdf documents with pypdf.

        Raises:
            ConfigurationError: If a path is not of the expected kind or the
                read error policy is unknown.
        """
        if not os.path.isfile(reporters_path):
            raise ConfigurationError(
                "The filename for the reporters file should include the path and be valid: "
                f"{reporters_path}"
            )
        if not os.path.isdir(directory):
            raise ConfigurationError(
                "The path for the directory containing the court decisions must be valid: "
                f"{directory}"
            )
        if on_read_error not in READ_ERROR_POLICIES:
            raise ConfigurationError(f"Unknown read error policy: {on_read_error}")

        self.reporters_path = reporters_path
        self.directory = directory
        self.output_dir = output_dir or directory
        self.matched_path = os.path.join(self.output_dir, matched_filename)
        self.unmatched_path = os.path.join(self.output_dir, unmatched_filename)
        self.batch_size = batch_size
        self.on_read_error = on_read_error
        self.encoding = encoding
        self.read_pdf = read_pdf

        self.pattern = CitationPattern(reporters_path, encoding=encoding)
        self.matcher = Matcher(self.pattern)
        self.engine = ConsolidationEngine()

    @classmethod
    def from_config(
        cls,
        reporters_path: str,
        directory: str,
        config: Config,
        output_dir: Optional[str] = None,
    ) -> "DirectoryScanner":
        """Create a scanner using the settings of a loaded Config."""
        return cls(
            reporters_path,
            directory,
            output_dir=output_dir or config.output_dir,
            matched_filename=config.matched_filename,
            unmatched_filename=config.unmatched_filename,
            batch_size=config.batch_size,
            on_read_error=config.on_read_error,
            encoding=config.encoding,
            read_pdf=config.read_pdf,
        )

    def documents(self) -> Iterator[str]:
        """
        Yield the file names to scan, in sorted order.

        Subdirectories, hidden files and the scanner's own reports are skipped.
        """
        outputs = {
            os.path.abspath(self.matched_path),
            os.path.abspath(self.unmatched_path),
        }
        for filename in sorted(os.listdir(self.directory)):
            path = os.path.join(self.directory, filename)
            if filename.startswith("."):
                logger.debug(f"Skipping hidden file {filename}")
                continue
            if not os.path.isfile(path):
                continue
            if os.path.abspath(path) in outputs:
                continue
            yield filename

    def process_document(
        self, filename: str, content: str, sink: ReportSink
    ) -> Tuple[int, int]:
        """
        Match, consolidate and export one document's citations.

        Returns:
            (matched rows, unmatched rows) queued for the document.
        """
        if not content or not content.strip():
            return 0, 0

        matches = self.matcher.match(content)
        entry = self.engine.consolidate(matches, filename)

        unmatched = self.engine.drain_unmatched()
        for record in unmatched:
            sink.add_unmatched(record)

        return sink.export(entry, filename), len(unmatched)

    @timed
    def match_in_directory(self) -> ScanSummary:
        """
        Scan every document and write the two CSV reports.

        Returns:
            A ScanSummary of the run.

        Raises:
            PatternBuildError: If the reporters file cannot produce a pattern.
            DocumentReadError: If a document cannot be read under the
                "abort" policy.
            ConfigurationError: If the report files cannot be created.
        """
        # Build first so a bad reporters file leaves no empty reports behind
        self.pattern.build()

        matched, unmatched = self._open_reports()
        summary = ScanSummary()

        with matched, unmatched:
            sink = ReportSink(matched, unmatched, self.batch_size)
            try:
                for filename in self.documents():
                    self._scan_file(filename, sink, summary)
            finally:
                # Write anything that remains (too small for a batch)
                sink.close()
                summary.failed_rows = sink.failed_rows

        logger.info(
            f"Scanned {summary.files_scanned} files: {summary.matched_rows} matched, "
            f"{summary.unmatched_rows} unmatched, {len(summary.skipped)} skipped"
        )
        return summary

    def _open_reports(self) -> Tuple[TextIO, TextIO]:
        try:
            os.makedirs(self.output_dir, exist_ok=True)
            matched = open(self.matched_path, "w", encoding="utf-8", newline="")
            try:
                unmatched = open(self.unmatched_path, "w", encoding="utf-8", newline="")
            except OSError:
                matched.close()
                raise
        except OSError as e:
            raise ConfigurationError(
                f"Cannot write reports to {self.output_dir}: {e}"
            ) from e
        return matched, unmatched

    def _scan_file(self, filename: str, sink: ReportSink, summary: ScanSummary) -> None:
        path = os.path.join(self.directory, filename)
        try:
            content = read_document(path, self.encoding, self.read_pdf)
        except DocumentReadError as e:
            if self.on_read_error == "abort":
                logger.error(str(e))
                raise
            logger.warning(f"Skipping {filename}: {e.reason}")
            summary.skipped.append({"filename": filename, "reason": e.reason})
            return

        summary.files_scanned += 1
        queued, unmatched = self.process_document(filename, content, sink)

        summary.matched_rows += queued
        summary.unmatched_rows += unmatched
        if queued:
            summary.files_with_citations += 1
        logger.debug(f"{filename}: {queued} citations")
