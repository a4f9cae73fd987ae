from __future__ import annotations

import pytest

from mdtransclude.core.utils.text import format_frontmatter, parse_frontmatter


class TestParseFrontmatter:
    def test_parses_mapping_and_body(self) -> None:
        doc = parse_frontmatter("---\ntitle: B\ntags: [x, y]\n---\n# B\n")
        assert doc.frontmatter == {"title": "B", "tags": ["x", "y"]}
        assert doc.content == "# B\n"
        assert "title: B" in doc.raw_frontmatter

    def test_without_frontmatter(self) -> None:
        doc = parse_frontmatter("# Title\n---\n")
        assert doc.frontmatter == {}
        assert doc.content == "# Title\n---\n"

    def test_empty_block(self) -> None:
        doc = parse_frontmatter("---\n---\nbody")
        assert doc.frontmatter == {}
        assert doc.content == "body"

    def test_invalid_yaml(self) -> None:
        with pytest.raises(ValueError, match="Invalid YAML"):
            parse_frontmatter("---\ntitle: [oops\n---\n")

    def test_non_mapping(self) -> None:
        with pytest.raises(ValueError, match="mapping"):
            parse_frontmatter("---\n42\n---\n")


def test_format_frontmatter() -> None:
    assert format_frontmatter({"title": "B", "order": 2}) == "---\ntitle: B\norder: 2\n---\n"
    assert format_frontmatter({}) == ""
