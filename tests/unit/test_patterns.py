"""
Tests for reporter loading, pattern building and matching.
"""

import pytest

from citematch.citation.exceptions import (
    ConfigurationError,
    PatternBuildError,
    PatternNotBuiltError,
)
from citematch.citation.patterns import CitationPattern, Matcher, assemble_pattern
from citematch.citation.reporters import ReporterSet


# ============================================================================
# ReporterSet
# ============================================================================


class TestReporterSet:
    def test_from_file_skips_empty_lines(self, reporters_file):
        reporters = ReporterSet.from_file(str(reporters_file))
        assert list(reporters) == ["U.S.", "F.2d", "F. Supp."]
        assert len(reporters) == 3

    def test_from_file_missing(self, tmp_path):
        with pytest.raises(ConfigurationError) as excinfo:
            ReporterSet.from_file(str(tmp_path / "missing.txt"))
        assert "could not be read" in str(excinfo.value)

    def test_from_file_empty(self, tmp_path):
        path = tmp_path / "empty.txt"
        path.write_text("\n\n   \n")
        with pytest.raises(ConfigurationError) as excinfo:
            ReporterSet.from_file(str(path))
        assert "does not list any reporters" in str(excinfo.value)

    def test_escaped_neutralises_metacharacters(self):
        reporters = ReporterSet(["F. (2d)", "A+B"])
        assert reporters.escaped() == [r"F\.\ \(2d\)", r"A\+B"]

    def test_alternation_keeps_order(self):
        reporters = ReporterSet(["F.2d", "F."])
        assert reporters.alternation() == r"(F\.2d|F\.)"


# ============================================================================
# CitationPattern
# ============================================================================


class TestCitationPattern:
    def test_matches_simple_citation_full_span(self):
        pattern = CitationPattern.from_reporters(["SomeReporter"])
        matches = list(pattern.compiled.finditer("123 SomeReporter 456"))
        assert len(matches) == 1
        assert matches[0].span() == (0, len("123 SomeReporter 456"))
        assert matches[0].group(0) == "123 SomeReporter 456"

    def test_no_partial_token_match(self):
        pattern = CitationPattern.from_reporters(["SomeReporter"])
        assert pattern.compiled.search("123 SomeReporterX 456") is None
        assert pattern.compiled.search("123 XSomeReporter 456") is None

    def test_metacharacter_reporter_matched_literally(self):
        pattern = CitationPattern.from_reporters(["F. (2d)"])
        assert pattern.compiled.search("5 F. (2d) 10").group(0) == "5 F. (2d) 10"
        # As a regex, "F. (2d)" would accept any character after the F
        assert pattern.compiled.search("5 Fx 2d 10") is None

    def test_assembled_source(self):
        source = assemble_pattern(ReporterSet(["U.S."]))
        assert source == r"[0-9]+ \b(U\.S\.)[,? at]*[0-9]+"

    def test_first_listed_reporter_wins(self):
        pattern = CitationPattern.from_reporters(["F.", "F.2d"])
        match = pattern.compiled.search("1 F.2d 2")
        assert match.group(1) == "F."

    def test_build_from_file(self, reporters_file):
        pattern = CitationPattern(str(reporters_file))
        assert not pattern.is_built
        compiled = pattern.build()
        assert pattern.is_built
        assert compiled.search("410 U.S. 113").group(0) == "410 U.S. 113"

    def test_build_is_cached(self, reporters_file):
        pattern = CitationPattern(str(reporters_file))
        first = pattern.build()
        reporters_file.unlink()
        assert pattern.build() is first

    def test_build_missing_file(self, tmp_path):
        pattern = CitationPattern(str(tmp_path / "missing.txt"))
        with pytest.raises(PatternBuildError) as excinfo:
            pattern.build()
        assert "reporters file is accessible" in str(excinfo.value)
        assert isinstance(excinfo.value.__cause__, ConfigurationError)
        assert not pattern.is_built

    def test_build_empty_file(self, tmp_path):
        path = tmp_path / "reporters.txt"
        path.write_text("")
        with pytest.raises(PatternBuildError):
            CitationPattern(str(path)).build()

    def test_build_without_source(self):
        with pytest.raises(PatternBuildError):
            CitationPattern().build()

    def test_from_reporters_empty(self):
        with pytest.raises(PatternBuildError):
            CitationPattern.from_reporters([])

    def test_compiled_before_build(self, reporters_file):
        with pytest.raises(PatternNotBuiltError):
            CitationPattern(str(reporters_file)).compiled


# ============================================================================
# Matcher
# ============================================================================


class TestMatcher:
    def setup_method(self):
        self.matcher = Matcher(CitationPattern.from_reporters(["U.S.", "F.2d"]))

    def test_matches_in_document_order(self):
        text = (
            "Roe v. Wade, 410 U.S. 113 (1973), followed Griswold, 381 U.S. 479. "
            "See 410 U.S. at 153 and Smith v. Jones, 1 F.2d 2."
        )
        assert self.matcher.match(text) == [
            "410 U.S. 113",
            "381 U.S. 479",
            "410 U.S. at 153",
            "1 F.2d 2",
        ]

    def test_returns_full_matches_not_groups(self):
        assert self.matcher.match("1 F.2d 2") == ["1 F.2d 2"]

    def test_comma_pin_stops_at_first_page(self):
        # The page number ends the match before ", at 5"
        assert self.matcher.match("1 F.2d 2, at 5") == ["1 F.2d 2"]

    @pytest.mark.parametrize("content", ["", "   ", "\n\t\n"])
    def test_blank_content(self, content):
        assert self.matcher.match(content) == []

    def test_no_citations(self):
        assert self.matcher.match("Nothing to see here, 12 monkeys.") == []

    def test_repeated_calls_are_independent(self):
        assert self.matcher.match("410 U.S. 113") == ["410 U.S. 113"]
        assert self.matcher.match("1 F.2d 2") == ["1 F.2d 2"]

    def test_match_before_build(self, reporters_file):
        matcher = Matcher(CitationPattern(str(reporters_file)))
        with pytest.raises(PatternNotBuiltError):
            matcher.match("410 U.S. 113")
