"""
Tests for the lexical stages of the parser.

This module contains tests for the preprocessor, the line classifier, the
settings mini-language and the string escaping helpers.
"""

import pytest

from dbml_schema.models.line_kind import LineKind
from dbml_schema.parser.line_classifier import LineClassifier
from dbml_schema.parser.preprocessor import SourceLine, preprocess
from dbml_schema.parser.settings_parser import (
    parse_setting,
    parse_settings,
    split_settings,
)
from dbml_schema.utils.escaping import (
    escape_string,
    is_quoted,
    quote,
    strip_quotes,
    unescape_string,
)


class TestPreprocess:
    """Tests for preprocess()."""

    def test_drops_blank_and_comment_lines(self):
        """Test that blank lines and line comments are removed."""
        lines = preprocess("// users\n\nTable users {\n  // id\n  id integer\n}")

        assert [line.text for line in lines] == ["Table users {", "id integer", "}"]

    def test_keeps_original_line_numbers(self):
        """Test that line numbers refer to the original text."""
        lines = preprocess("// users\n\nTable users {")

        assert lines == [SourceLine(text="Table users {", line_number=3, indent=0)]

    def test_records_indent(self):
        """Test that leading whitespace is measured."""
        line = preprocess("    id integer")[0]

        assert line.indent == 4
        assert line.column_of() == 5
        assert line.column_of(3) == 8

    def test_trailing_comment_is_kept(self):
        """Test that comments after content are not stripped."""
        lines = preprocess("id integer // primary")

        assert lines[0].text == "id integer // primary"

    def test_empty_input(self):
        """Test empty and whitespace-only input."""
        assert preprocess("") == []
        assert preprocess("  \n\t\n") == []


class TestLineClassifier:
    """Tests for LineClassifier."""

    def setup_method(self):
        """Create classifier."""
        self.classifier = LineClassifier()

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Table users {", LineKind.TABLE),
            ("table users", LineKind.TABLE),
            ("Table auth.users [note: 'x'] {", LineKind.TABLE),
            ("Ref: posts.user_id > users.id", LineKind.REF),
            ("Ref fk_user: posts.user_id > users.id", LineKind.REF),
            ("ref:posts.user_id>users.id", LineKind.REF),
            ("Enum status {", LineKind.ENUM),
            ("Project blog {", LineKind.PROJECT),
            ("TableGroup core {", LineKind.TABLE_GROUP),
            ("Indexes {", LineKind.INDEXES),
            ("{", LineKind.BRACE),
            ("}", LineKind.BRACE),
            ("???", LineKind.UNKNOWN),
        ],
    )
    def test_top_level(self, text, expected):
        """Test top-level classification."""
        assert self.classifier.classify(text) == expected

    def test_table_group_is_not_a_table(self):
        """Test that TableGroup is not mistaken for a table."""
        assert self.classifier.classify("TableGroup g {") != LineKind.TABLE

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("id integer [pk]", LineKind.COLUMN_LIKE),
            ('"first name" varchar', LineKind.COLUMN_LIKE),
            ("'last name' varchar", LineKind.COLUMN_LIKE),
            ("table text", LineKind.COLUMN_LIKE),
            ("ref integer", LineKind.COLUMN_LIKE),
            ("user-id integer", LineKind.COLUMN_LIKE),
            ("} // end", LineKind.UNKNOWN),
            ("Note: 'Users table'", LineKind.NOTE),
            ("indexes {", LineKind.INDEXES),
            ("}", LineKind.BRACE),
            ("!!!", LineKind.UNKNOWN),
        ],
    )
    def test_table_body(self, text, expected):
        """Test classification inside a table body."""
        assert self.classifier.classify(text, in_table_body=True) == expected

    def test_opens_block(self):
        """Test detection of block headers."""
        assert self.classifier.opens_block("Table b {")
        assert self.classifier.opens_block("Enum status {")
        assert not self.classifier.opens_block("table text")
        assert not self.classifier.opens_block("Indexes {")
        assert not self.classifier.opens_block("{")

    def test_line_kind_helpers(self):
        """Test LineKind predicates and feature tags."""
        assert LineKind.TABLE.is_modeled()
        assert not LineKind.ENUM.is_modeled()
        assert LineKind.INDEXES.is_unmodeled_block()
        assert not LineKind.REF.is_unmodeled_block()
        assert LineKind.TABLE_GROUP.feature_tag == "table_groups"
        assert LineKind.ENUM.feature_tag == "enums"


class TestSettingsParser:
    """Tests for the settings mini-language."""

    def test_split_on_top_level_commas(self):
        """Test that quoted and parenthesized commas are preserved."""
        parts = split_settings("pk, note: 'a, b', default: fn(1, 2)")

        assert parts == ["pk", "note: 'a, b'", "default: fn(1, 2)"]

    def test_split_skips_empty_entries(self):
        """Test that empty entries are dropped."""
        assert split_settings(" pk , , unique ,") == ["pk", "unique"]
        assert split_settings("") == []

    def test_split_honors_escaped_quotes(self):
        """Test that an escaped quote does not close the quoted span."""
        parts = split_settings(r"note: 'it\'s, fine', unique")

        assert parts == [r"note: 'it\'s, fine'", "unique"]

    def test_flag(self):
        """Test a setting without value."""
        setting = parse_setting("pk")

        assert setting.name == "pk"
        assert setting.value is None
        assert setting.is_flag

    def test_case_insensitive_key(self):
        """Test that keys are matched case-insensitively."""
        setting = parse_setting("Default: 'now()'")

        assert setting.key == "Default"
        assert setting.name == "default"
        assert setting.value == "now()"
        assert setting.quoted

    def test_whitespace_in_key_is_collapsed(self):
        """Test multi-word keys."""
        assert parse_setting("NOT   NULL").name == "not null"

    def test_split_on_first_colon_only(self):
        """Test that colons inside values are kept."""
        setting = parse_setting("note: 'Time: 10:30'")

        assert setting.value == "Time: 10:30"
        assert setting.raw_value == "'Time: 10:30'"

    def test_unquoted_value(self):
        """Test a bare value."""
        setting = parse_setting("default: 0.00")

        assert setting.value == "0.00"
        assert not setting.quoted

    def test_inner_quotes_preserved(self):
        """Test that quotes of the other kind survive inside a value."""
        assert parse_setting("note: 'say \"hi\"'").value == 'say "hi"'

    def test_empty_value_is_flag(self):
        """Test that ``key:`` without value is treated as a flag."""
        assert parse_setting("default:").is_flag

    def test_parse_settings(self):
        """Test parsing a full settings list."""
        settings = parse_settings(
            "pk, not null, default: 'now()', note: 'Sample values: 1, 2, 3'"
        )

        assert [s.name for s in settings] == ["pk", "not null", "default", "note"]
        assert settings[3].value == "Sample values: 1, 2, 3"


class TestEscaping:
    """Tests for escaping helpers."""

    def test_escape_string(self):
        """Test escaping of quotes, newlines and backslashes."""
        assert escape_string("a'b") == "a\\'b"
        assert escape_string("line1\nline2\r") == "line1\\nline2\\r"
        assert escape_string("C:\\temp") == "C:\\\\temp"

    def test_unescape_reverses_escape(self):
        """Test that unescape_string reverses escape_string."""
        value = "User's notes\nsecond line \\ backslash"

        assert unescape_string(escape_string(value)) == value

    def test_unknown_escape_kept(self):
        """Test that unknown escape sequences are left untouched."""
        assert unescape_string("a\\qb") == "a\\qb"
        assert unescape_string("tab\\there") == "tab\there"

    def test_is_quoted(self):
        """Test quote detection."""
        assert is_quoted("'x'")
        assert is_quoted('"x"')
        assert is_quoted("`now()`")
        assert not is_quoted("'x\"")
        assert not is_quoted("'")
        assert not is_quoted("x")

    def test_strip_quotes(self):
        """Test outer quote removal."""
        assert strip_quotes("'Sample values: 1, 2, 3'") == "Sample values: 1, 2, 3"
        assert strip_quotes("0.00") == "0.00"
        assert strip_quotes("'it\\'s'") == "it's"

    def test_quote(self):
        """Test quoting with escaping."""
        assert quote("it's") == "'it\\'s'"
