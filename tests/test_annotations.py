"""Tests for annotation parsing and stripping."""

import textwrap

import pytest

from coffeedoc.analysis.annotations import (
    Annotation,
    parse_annotations,
    strip_annotations,
)
from coffeedoc.analysis.docstring import normalize


@pytest.fixture
def view_comment() -> str:
    """A function comment with a summary and several annotations."""
    return textwrap.dedent("""\
        Renders the view.
        @param el the element to render into,
          defaults to the body
        @param options render options
        @return the view
        Trailing note.
    """)


class TestParseAnnotations:
    """Tests for parse_annotations."""

    def test_none_comment(self) -> None:
        assert parse_annotations(None) is None

    def test_no_annotations(self) -> None:
        assert parse_annotations("Just prose.\nMore prose.") == {}

    def test_continuation(self) -> None:
        result = parse_annotations("@param x the value\n  continuation line")
        assert result == {
            "param": [
                Annotation(
                    value="x the value continuation line",
                    raw_value="@param x the value\n  continuation line\n",
                )
            ]
        }

    def test_occurrences_keep_order(self, view_comment: str) -> None:
        result = parse_annotations(view_comment)
        assert [a.value for a in result["param"]] == [
            "el the element to render into, defaults to the body",
            "options render options",
        ]
        assert result["return"][0].value == "the view"

    def test_terminating_line_not_included(self, view_comment: str) -> None:
        result = parse_annotations(view_comment)
        assert result["return"][0].raw_value == "@return the view\n"
        assert "Trailing note." not in result["return"][0].value

    def test_line_ends_one_and_starts_next(self) -> None:
        result = parse_annotations("@a one\n@b two")
        assert result["a"][0].raw_value == "@a one\n"
        assert result["b"][0].raw_value == "@b two\n"

    def test_base_indent_from_marker(self) -> None:
        raw = "    @param x first\n      second\n    @param y"
        result = parse_annotations(raw)
        assert result["param"][0].value == "x first second"
        assert result["param"][0].raw_value == "    @param x first\n      second\n"
        assert result["param"][1].value == "y"

    def test_equal_indent_terminates(self) -> None:
        result = parse_annotations("  @note first\n  not a continuation")
        assert result["note"][0].value == "first"

    def test_blank_line_terminates(self) -> None:
        result = parse_annotations("@note first\n\n  indented prose")
        assert result["note"][0].value == "first"

    def test_whitespace_collapsed(self) -> None:
        result = parse_annotations("@note a    b\n      c\t d")
        assert result["note"][0].value == "a b c d"

    def test_tag_without_value(self) -> None:
        result = parse_annotations("@deprecated")
        assert result == {
            "deprecated": [Annotation(value="", raw_value="@deprecated\n")]
        }

    def test_bare_marker_is_not_annotation(self) -> None:
        assert parse_annotations("@ nothing here\n@") == {}

    def test_marker_mid_line_is_prose(self) -> None:
        assert parse_annotations("Mail me@example.com") == {}

    def test_unterminated_block_ends_at_comment_end(self) -> None:
        result = parse_annotations("@example\n    a = 1\n    b = 2")
        assert result["example"][0].value == "a = 1 b = 2"

    def test_custom_marker(self) -> None:
        result = parse_annotations(":param x value\n@param y", tag_marker=":")
        assert list(result) == ["param"]
        assert result["param"][0].value == "x value"


class TestStripAnnotations:
    """Tests for strip_annotations."""

    def test_strips_all_by_default(self, view_comment: str) -> None:
        annotations = parse_annotations(view_comment)
        residual = strip_annotations(view_comment, annotations)
        assert residual == "Renders the view.\nTrailing note.\n"

    def test_no_raw_value_survives(self, view_comment: str) -> None:
        annotations = parse_annotations(view_comment)
        text = normalize(strip_annotations(view_comment, annotations))
        for occurrences in annotations.values():
            for occurrence in occurrences:
                assert occurrence.raw_value not in text

    def test_filter_tags(self, view_comment: str) -> None:
        annotations = parse_annotations(view_comment)
        residual = strip_annotations(view_comment, annotations, ["return"])
        assert "@param el" in residual
        assert "@return" not in residual

    def test_unknown_filter_tag_ignored(self, view_comment: str) -> None:
        annotations = parse_annotations(view_comment)
        assert strip_annotations(view_comment, annotations, ["since"]) == view_comment

    def test_single_tag_string(self, view_comment: str) -> None:
        annotations = parse_annotations(view_comment)
        residual = strip_annotations(view_comment, annotations, "return")
        assert "@param el" in residual
        assert "@return" not in residual

    def test_last_line_without_newline(self) -> None:
        raw = "Summary.\n@return value"
        residual = strip_annotations(raw, parse_annotations(raw))
        assert residual == "Summary."

    def test_no_annotations_returns_input(self) -> None:
        assert strip_annotations("Prose.", {}) == "Prose."
        assert strip_annotations("Prose.", None) == "Prose."
