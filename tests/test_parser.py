"""Tests for syntax/parser.py — grammar rules and document parsing."""

from __future__ import annotations

import pytest

from c4layout.errors import ParseError
from c4layout.syntax import (
    Document,
    NameAssignment,
    Relationship,
    parse,
    parse_arrow,
    parse_document,
    parse_identifier,
    parse_name_assignment,
    parse_relationship,
    parse_string,
)

# ─── Identifier ───────────────────────────────────────────────────────────────


class TestIdentifier:
    def test_simple(self):
        assert parse_identifier("cow") == "cow"

    def test_single_character(self):
        assert parse_identifier("a") == "a"

    def test_digits_and_underscore_after_first(self):
        assert parse_identifier("cow_2B") == "cow_2B"

    def test_leading_underscore(self):
        assert parse_identifier("_hidden") == "_hidden"

    def test_leading_digit_rejected(self):
        """`1a2` starts with a digit."""
        with pytest.raises(ParseError):
            parse_identifier("1a2")

    def test_leading_digit_rejected_long(self):
        with pytest.raises(ParseError):
            parse_identifier("11aa2")

    def test_empty_rejected(self):
        with pytest.raises(ParseError):
            parse_identifier("")

    def test_punctuation_inside_rejected(self):
        with pytest.raises(ParseError):
            parse_identifier("ab.c")

    def test_whitespace_inside_rejected(self):
        with pytest.raises(ParseError):
            parse_identifier("ab c")

    def test_dash_head_rejected(self):
        with pytest.raises(ParseError):
            parse_identifier("-ab")


# ─── String ───────────────────────────────────────────────────────────────────


class TestString:
    def test_quoted_strips_quotes(self):
        assert parse_string('"mamamia is a 1002.jjd££4"') == "mamamia is a 1002.jjd££4"

    def test_unquoted_run(self):
        assert parse_string("mamamia££4") == "mamamia££4"

    def test_unquoted_stops_at_space(self):
        with pytest.raises(ParseError):
            parse_string("two words")

    def test_empty_rejected(self):
        with pytest.raises(ParseError):
            parse_string("")

    def test_empty_quotes_read_as_bare_string(self):
        """`""` cannot match the quoted form (needs one char) so it is a bare run."""
        assert parse_string('""') == '""'


# ─── Arrow ────────────────────────────────────────────────────────────────────


class TestArrow:
    def test_unlabelled(self):
        assert parse_arrow("---->") is None

    def test_single_dash(self):
        assert parse_arrow("->") is None

    def test_labelled(self):
        assert parse_arrow("---label--->") == "label"

    def test_labelled_single_dashes(self):
        assert parse_arrow("-x->") == "x"

    def test_missing_head_rejected(self):
        with pytest.raises(ParseError):
            parse_arrow("----")

    def test_label_without_trailing_dash_rejected(self):
        with pytest.raises(ParseError):
            parse_arrow("--label>")

    def test_no_dash_rejected(self):
        with pytest.raises(ParseError):
            parse_arrow(">")


# ─── Relationship ─────────────────────────────────────────────────────────────


class TestRelationship:
    def test_unlabelled(self):
        assert parse_relationship("cow -------> fresh") == Relationship("cow", None, "fresh")

    def test_labelled(self):
        assert parse_relationship("cow ---hoho----> fresh") == Relationship("cow", "hoho", "fresh")

    def test_no_spaces(self):
        assert parse_relationship("a-->b") == Relationship("a", None, "b")

    def test_surrounding_spaces(self):
        assert parse_relationship("   a --> b   ") == Relationship("a", None, "b")

    def test_missing_target_rejected(self):
        with pytest.raises(ParseError):
            parse_relationship("a -->")

    def test_malformed_identifier_rejected(self):
        with pytest.raises(ParseError):
            parse_relationship("a --> 9b")


# ─── Name Assignment ──────────────────────────────────────────────────────────


class TestNameAssignment:
    def test_quoted(self):
        assert parse_name_assignment('db.name = "Main DB"') == NameAssignment("db", "Main DB")

    def test_bare(self):
        assert parse_name_assignment("db.name=Postgres") == NameAssignment("db", "Postgres")

    def test_missing_value_rejected(self):
        with pytest.raises(ParseError):
            parse_name_assignment("db.name = ")


# ─── Document ─────────────────────────────────────────────────────────────────


class TestDocument:
    def test_single_relationship(self):
        assert parse("a --> b") == [Relationship("a", None, "b")]

    def test_labelled_relationship(self):
        assert parse("a ---l---> b") == [Relationship("a", "l", "b")]

    def test_leading_and_trailing_whitespace(self):
        src = """
    cow ---hoho----> fresh
    cow2 ---hoho----> fresh2
    """
        assert parse(src) == [
            Relationship("cow", "hoho", "fresh"),
            Relationship("cow2", "hoho", "fresh2"),
        ]

    def test_order_preserved(self):
        rels = parse("a-->b\nb-->c\nc-->a")
        assert [(r.source, r.target) for r in rels] == [("a", "b"), ("b", "c"), ("c", "a")]

    def test_blank_lines_between_statements(self):
        assert len(parse("a --> b\n\n\tb --> c")) == 2

    def test_display_names_collected(self):
        doc = parse_document('a --> b\na.name = "Alpha"\na.name = Alef')
        assert isinstance(doc, Document)
        assert doc.relationships == [Relationship("a", None, "b")]
        assert doc.display_names == {"a": "Alef"}

    def test_trailing_garbage_rejected(self):
        with pytest.raises(ParseError):
            parse("a --> b\n!!!")

    def test_two_relationships_on_one_line_rejected(self):
        with pytest.raises(ParseError):
            parse("a --> b c --> d")

    def test_empty_rejected(self):
        with pytest.raises(ParseError):
            parse("")

    def test_names_only_rejected(self):
        with pytest.raises(ParseError) as exc_info:
            parse("a.name = x")
        assert exc_info.value.expected == ("relationship",)


# ─── ParseError ───────────────────────────────────────────────────────────────


class TestParseError:
    def test_position_of_bad_arrow(self):
        """The second line fails at its `=`."""
        with pytest.raises(ParseError) as exc_info:
            parse("a --> b\nc => d")
        err = exc_info.value
        assert err.line == 2
        assert err.column == 3
        assert err.position == len("a --> b\n") + 2
        assert err.found == "=> d"

    def test_expected_tokens_reported(self):
        with pytest.raises(ParseError) as exc_info:
            parse_arrow("--x")
        assert "'-'" in exc_info.value.expected

    def test_message_mentions_line_and_column(self):
        with pytest.raises(ParseError) as exc_info:
            parse_identifier("1a2")
        assert str(exc_info.value).startswith("line 1, column 1:")

    def test_end_of_input_reported(self):
        with pytest.raises(ParseError) as exc_info:
            parse_relationship("a -->")
        assert exc_info.value.found == ""
        assert "end of input" in str(exc_info.value)
