"""Tests for the resolver adapter and the resolver chain."""
from __future__ import annotations

import json
import logging
from typing import List, Optional, Tuple

import pytest

from mdtransclude.core.config import TransclusionOptions
from mdtransclude.core.exceptions import SectionAnchorError, SectionNotFoundError
from mdtransclude.core.transclusion.metadata import MetadataTree
from mdtransclude.core.transclusion.resolvers import (
    FileIndexResolver,
    PlaceholderResolver,
    ResolvedContent,
    Resolver,
    ResolverChain,
)


class RecordingResolver(Resolver):
    """Declines everything but remembers what it was asked."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, str, str]] = []

    def resolve(self, raw_target: str, origin_path: str, placeholder: str) -> Optional[ResolvedContent]:
        self.calls.append((raw_target, origin_path, placeholder))
        return None


@pytest.fixture
def index(make_index):
    return make_index({
        "x.md": ":[](missing)",
        "b.md": ("# B\nbody\n# Other\nmore\n", {"title": "B"}),
        "a/c.md": ("C body", {"title": "C"}),
    })


class TestFileIndexResolver:
    def test_whole_document_verbatim(self, index) -> None:
        result = FileIndexResolver(index, "x.md").resolve("b", "x.md")
        assert result is not None
        assert result.url == "b.md"
        assert result.text() == "# B\nbody\n# Other\nmore\n"

    def test_section_is_extracted(self, index) -> None:
        result = FileIndexResolver(index, "x.md").resolve("b.md#b", "x.md")
        assert result is not None
        assert result.text() == "# B\nbody\n"

    def test_missing_section_propagates(self, index) -> None:
        with pytest.raises(SectionNotFoundError):
            FileIndexResolver(index, "x.md").resolve("b#nope", "x.md")

    def test_malformed_anchor_propagates(self, index) -> None:
        with pytest.raises(SectionAnchorError):
            FileIndexResolver(index, "x.md").resolve("b###b", "x.md")

    def test_non_local_target_declines_silently(self, index, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="mdtransclude"):
            assert FileIndexResolver(index, "x.md").resolve('"quoted"', "x.md") is None
        assert caplog.records == []

    def test_missing_target_declines_with_one_warning(self, index, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="mdtransclude"):
            assert FileIndexResolver(index, "x.md").resolve("missing", "x.md") is None
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "x.md" in warnings[0].getMessage()
        assert "missing" in warnings[0].getMessage()

    def test_missing_target_warning_can_be_disabled(self, index, caplog: pytest.LogCaptureFixture) -> None:
        resolver = FileIndexResolver(index, "x.md", TransclusionOptions(warning=False))
        with caplog.at_level(logging.WARNING, logger="mdtransclude"):
            assert resolver.resolve("missing", "x.md") is None
        assert caplog.records == []

    def test_nested_origin_is_used_for_relative_paths(self, index) -> None:
        result = FileIndexResolver(index, "x.md").resolve("c", "a/other.md")
        assert result is not None
        assert result.url == "a/c.md"

    def test_empty_origin_falls_back_to_host(self, index) -> None:
        result = FileIndexResolver(index, "a/host.md").resolve("c", "")
        assert result is not None
        assert result.url == "a/c.md"

    def test_content_is_a_lazy_byte_iterator(self, index) -> None:
        result = FileIndexResolver(index, "x.md").resolve("a/c", "x.md")
        assert result is not None
        first = next(result.content)
        assert isinstance(first, bytes)
        assert first == b"C body"
        assert result.text() == ""


class TestMetadataRecording:
    def test_not_recorded_by_default(self, index) -> None:
        tree = MetadataTree()
        FileIndexResolver(index, "x.md", tree=tree).resolve("a/c", "x.md")
        assert tree.as_dict() == {}

    def test_recorded_at_canonical_path(self, index) -> None:
        tree = MetadataTree()
        resolver = FileIndexResolver(index, "x.md", TransclusionOptions(frontmatter=True), tree)
        resolver.resolve("a/c", "x.md")
        resolver.resolve("b#other", "x.md")
        assert tree.as_dict() == {"a": {"c": {"title": "C"}}, "b": {"title": "B"}}


class TestProvenanceComments:
    def test_plain_comments(self, index) -> None:
        options = TransclusionOptions(comments=True, verbose=False)
        result = FileIndexResolver(index, "x.md", options).resolve("a/c", "x.md")
        assert result is not None
        assert result.text() == (
            "<!-- Following snippet transcluded from a/c.md -->\n"
            "C body"
            "\n<!-- End of transcluded snippet from a/c.md -->\n\n"
        )

    def test_verbose_comments_carry_reference_and_metadata(self, index) -> None:
        options = TransclusionOptions(comments=True, verbose=True)
        text = FileIndexResolver(index, "x.md", options).resolve("a/c", "x.md").text()
        header = text.splitlines()[0]
        assert "a/c.md" in header
        assert "reference(a/c)" in header
        assert '{"title": "C"}' in header
        assert text.endswith("<!-- End of transcluded snippet from a/c.md -->\n\n")

    def test_verbose_metadata_cannot_form_a_directive(self, make_index) -> None:
        index = make_index({"x.md": "", "a.md": ("A", {"note": "see :[](b)", "tags": ["x"]})})
        options = TransclusionOptions(comments=True, verbose=True)
        header = FileIndexResolver(index, "x.md", options).resolve("a", "x.md").text().splitlines()[0]
        assert ":[" not in header
        payload = header[header.index("{"):header.rindex("}") + 1]
        assert json.loads(payload) == {"note": "see :[](b)", "tags": ["x"]}

    def test_source_document_is_untouched(self, index) -> None:
        options = TransclusionOptions(comments=True)
        FileIndexResolver(index, "x.md", options).resolve("a/c", "x.md")
        assert index["a/c.md"].content == "C body"


class TestPlaceholderAndChain:
    def test_placeholder_returns_directive_text(self) -> None:
        result = PlaceholderResolver().resolve("missing", "x.md", ":[label](missing)")
        assert result is not None
        assert result.url is None
        assert result.text() == ":[label](missing)"

    def test_chain_tries_resolvers_in_order(self) -> None:
        recorder = RecordingResolver()
        chain = ResolverChain([recorder, PlaceholderResolver()])
        result = chain.resolve("t", "o.md", ":[](t)")
        assert recorder.calls == [("t", "o.md", ":[](t)")]
        assert result is not None and result.text() == ":[](t)"

    def test_chain_declines_when_everyone_declines(self) -> None:
        chain = ResolverChain([RecordingResolver()])
        assert chain.resolve("t", "o.md", ":[](t)") is None
        assert len(chain) == 1
