"""Tests for heading-delimited section extraction."""
from __future__ import annotations

import pytest

from mdtransclude.core.exceptions import SectionNotFoundError
from mdtransclude.core.transclusion.sections import extract_section, heading_pattern
from mdtransclude.core.transclusion.targets import BoundaryMode

DOC = "# A\ntext1\n## B\ntext2\n# C\ntext3"


class TestBoundaryModes:
    def test_single_stops_at_next_heading_of_any_level(self) -> None:
        assert extract_section(DOC, "A", BoundaryMode.SINGLE) == "# A\ntext1\n"

    def test_same_level_includes_deeper_headings(self) -> None:
        assert extract_section(DOC, "A", BoundaryMode.SAME_LEVEL) == "# A\ntext1\n## B\ntext2\n"

    def test_last_section_runs_to_end_of_document(self) -> None:
        assert extract_section(DOC, "C", BoundaryMode.SINGLE) == "# C\ntext3"
        assert extract_section(DOC, "C", BoundaryMode.SAME_LEVEL) == "# C\ntext3"

    def test_same_level_for_a_subsection(self) -> None:
        text = "# Top\n## B\nx\n### Deep\ny\n## D\nz\n"
        assert extract_section(text, "B", BoundaryMode.SAME_LEVEL) == "## B\nx\n### Deep\ny\n"
        assert extract_section(text, "B", BoundaryMode.SINGLE) == "## B\nx\n"

    def test_heading_without_trailing_newline(self) -> None:
        assert extract_section("intro\n# Only", "Only", BoundaryMode.SINGLE) == "# Only"


class TestHeadingMatching:
    def test_match_is_case_insensitive(self) -> None:
        assert extract_section("# Usage\nrun it\n", "usage", BoundaryMode.SINGLE) == "# Usage\nrun it\n"

    def test_dash_matches_space_and_underscore(self) -> None:
        text = "# getting_started\nA\n## Getting Started\nB\n"
        assert extract_section(text, "getting-started", BoundaryMode.SINGLE) == "# getting_started\nA\n"
        assert heading_pattern("getting-started").search("## Getting Started") is not None

    def test_first_matching_heading_wins(self) -> None:
        text = "# Notes\nfirst\n# Notes\nsecond\n"
        assert extract_section(text, "Notes", BoundaryMode.SINGLE) == "# Notes\nfirst\n"

    def test_heading_requires_whitespace_after_hashes(self) -> None:
        with pytest.raises(SectionNotFoundError):
            extract_section("#Usage\ntext\n", "Usage", BoundaryMode.SINGLE)

    def test_regex_characters_in_name_are_literal(self) -> None:
        text = "# C++ (advanced)\ncode\n# Other\n"
        assert extract_section(text, "C++ (advanced)", BoundaryMode.SINGLE) == "# C++ (advanced)\ncode\n"

    def test_hash_lines_inside_text_are_not_boundaries(self) -> None:
        text = "# Tags\nsee #python and #rust\n# Next\n"
        assert extract_section(text, "Tags", BoundaryMode.SINGLE) == "# Tags\nsee #python and #rust\n"


class TestFailures:
    def test_missing_section_raises(self) -> None:
        with pytest.raises(SectionNotFoundError) as exc_info:
            extract_section(DOC, "Z", BoundaryMode.SINGLE, source="guide.md")
        assert "Z" in str(exc_info.value)
        assert "guide.md" in str(exc_info.value)
        assert exc_info.value.context == {"section": "Z", "path": "guide.md"}

    def test_missing_section_is_a_lookup_error(self) -> None:
        with pytest.raises(LookupError):
            extract_section("", "A", BoundaryMode.SAME_LEVEL)


def test_extraction_is_idempotent() -> None:
    first = extract_section(DOC, "A", BoundaryMode.SAME_LEVEL)
    second = extract_section(DOC, "A", BoundaryMode.SAME_LEVEL)
    assert first == second
