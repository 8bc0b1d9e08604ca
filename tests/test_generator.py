"""
Tests for the generator and round-trip validation.

This module contains tests for DBMLGenerator output, generator options,
failure reporting and the round-trip invariant.
"""

import pytest

from dbml_schema import (
    Column,
    DatabaseSchema,
    DBMLGenerator,
    GeneratorOptions,
    Reference,
    RelationshipType,
    SchemaMetadata,
    Table,
    generate,
    parse,
    validate_round_trip,
)
from dbml_schema.generator.dbml_generator import format_column_name, format_default

BLOG = """
Table users {
  id integer [pk]
  email varchar(255) [not null, unique]
  created_at timestamp [default: 'now()']
  Note: 'Registered accounts'
}

Table posts {
  id integer [pk]
  user_id integer [ref: > users.id]
  title varchar [note: 'Shown in listings']
  rating decimal(3,1) [default: 0.0]
}

Table comments {
  id integer [pk]
  post_id integer
  body text
}

Ref fk_comment_post: comments.post_id > posts.id [delete: cascade]
"""

NO_METADATA = GeneratorOptions(include_metadata=False)


def simple_schema():
    table = Table(id="table_0", name="users")
    table.add_column(Column(id="col_0", name="id", type="integer", primary_key=True))
    table.add_column(
        Column(id="col_1", name="email", type="varchar(255)", not_null=True, unique=True)
    )
    return DatabaseSchema(tables=[table])


class TestFormatting:
    """Tests for value formatting helpers."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("now()", "'now()'"),
            ("CURRENT_TIMESTAMP", "'CURRENT_TIMESTAMP'"),
            ("0", "0"),
            ("-1.5", "-1.5"),
            ("1e3", "1e3"),
            ("2.5E-4", "2.5E-4"),
            ("'already'", "'already'"),
            ("draft", "'draft'"),
            ("it's", "'it\\'s'"),
        ],
    )
    def test_format_default(self, value, expected):
        """Test default value formatting."""
        assert format_default(value) == expected

    def test_format_column_name(self):
        """Test bare and quoted column names."""
        assert format_column_name(Column(id="c", name="id", type="int")) == "id"
        assert (
            format_column_name(
                Column(id="c", name="first name", type="int", quoted_name=True)
            )
            == '"first name"'
        )
        assert format_column_name(Column(id="c", name='say "hi"', type="int")) == "'say \"hi\"'"


class TestGenerator:
    """Tests for DBMLGenerator."""

    def test_simple_table(self):
        """Test the exact output for a simple table."""
        result = generate(simple_schema(), NO_METADATA)

        assert result.success
        assert result.text == (
            "Table users {\n"
            "  id integer [pk]\n"
            "  email varchar(255) [not null, unique]\n"
            "}"
        )
        assert result.metadata.tables_generated == 1
        assert result.metadata.lines_generated == 4

    def test_indent_size(self):
        """Test custom indentation."""
        result = generate(simple_schema(), GeneratorOptions(include_metadata=False, indent_size=4))

        assert "\n    id integer [pk]\n" in result.text

    def test_header_and_footer(self):
        """Test metadata comments."""
        schema = simple_schema()
        schema.metadata = SchemaMetadata(version="2.0.0", author="alice")
        text = generate(schema).text

        assert text.startswith("// Database Schema\n// Generated on: ")
        assert "// Version: 2.0.0" in text
        assert "// Author: alice" in text
        assert text.endswith(
            "// Schema Statistics:\n// Tables: 1\n// Columns: 2\n// References: 0"
        )

    def test_no_comments(self):
        """Test that include_comments=False drops notes and comment lines."""
        schema = parse(BLOG).schema
        text = generate(schema, GeneratorOptions(include_comments=False)).text

        assert "//" not in text
        assert "Note:" not in text
        assert "note:" not in text
        assert "Ref fk_comment_post:" in text

    def test_compact_output(self):
        """Test format_output=False."""
        text = generate(
            parse(BLOG).schema,
            GeneratorOptions(include_comments=False, format_output=False),
        ).text

        assert "\n\n" not in text
        assert "}\nTable posts {" in text

    def test_inline_and_standalone_references(self):
        """Test that inline refs stay inline and others follow all tables."""
        text = generate(parse(BLOG).schema, NO_METADATA).text

        assert "  user_id integer [ref: > users.id]" in text
        assert text.endswith(
            "// References\nRef fk_comment_post: comments.post_id > posts.id [delete: cascade]"
        )
        assert text.count("\nRef") == 1

    def test_inline_reference_with_actions_becomes_standalone(self):
        """Test that an inline reference with actions is written standalone."""
        schema = parse(BLOG).schema
        schema.references[0].on_delete = "cascade"
        text = generate(schema, NO_METADATA).text

        assert "ref: >" not in text
        assert "Ref: posts.user_id > users.id [delete: cascade]" in text

    def test_notes_and_defaults(self):
        """Test note and default settings."""
        text = generate(parse(BLOG).schema, NO_METADATA).text

        assert "  created_at timestamp [default: 'now()']" in text
        assert "  rating decimal(3,1) [default: 0.0]" in text
        assert "  title varchar [note: 'Shown in listings']" in text
        assert "  Note: 'Registered accounts'\n}" in text

    def test_custom_properties(self):
        """Test that custom properties are re-emitted."""
        schema = parse(
            "Table users [headercolor: '#3498DB'] {\n  id integer [increment, color: red]\n}"
        ).schema
        text = generate(schema, NO_METADATA).text

        assert text.startswith("Table users [headercolor: '#3498DB'] {")
        assert "  id integer [increment, color: red]" in text

        text = generate(
            schema,
            GeneratorOptions(include_metadata=False, preserve_custom_properties=False),
        ).text
        assert text.startswith("Table users {")
        assert "  id integer\n" in text

    def test_schema_qualified_table(self):
        """Test a schema-qualified table name."""
        text = generate(parse("Table auth.users {\n}").schema, NO_METADATA).text

        assert text == "Table auth.users {\n}"

    def test_options_from_dict(self):
        """Test camelCase option mappings."""
        result = generate(simple_schema(), {"indentSize": 4, "includeMetadata": False})

        assert result.success
        assert "\n    id integer [pk]\n" in result.text

    def test_invalid_options(self):
        """Test that invalid options are reported, not raised."""
        result = generate(simple_schema(), {"indentSize": -1})

        assert not result.success
        assert result.warnings[0].startswith("Invalid generator options")

    def test_invalid_table_name(self):
        """Test that an inexpressible table name fails generation."""
        schema = DatabaseSchema(tables=[Table(id="t", name="bad name")])
        result = DBMLGenerator().generate(schema)

        assert not result.success
        assert result.text == ""
        assert result.warnings == ["Generation failed: Invalid table name: bad name"]

    def test_inexpressible_column_type(self):
        """Test a column type the notation cannot express."""
        schema = simple_schema()
        schema.tables[0].add_column(Column(id="c", name="x", type="double precision"))
        result = generate(schema)

        assert not result.success
        assert result.warnings[0].startswith("Generation failed: Column type")

    def test_column_name_with_both_quotes(self):
        """Test a column name that cannot be quoted."""
        schema = simple_schema()
        schema.tables[0].add_column(Column(id="c", name="a'b\"c", type="int"))
        result = generate(schema)

        assert not result.success
        assert "cannot be quoted" in result.warnings[0]


class TestRoundTrip:
    """Tests for the round-trip invariant."""

    def test_parse_generate_parse(self):
        """Test that generated text reparses without errors."""
        schema = parse(BLOG).schema
        reparsed = parse(generate(schema).text)

        assert reparsed.errors == []
        assert reparsed.schema.table_names() == schema.table_names()
        assert len(reparsed.schema.references) == len(schema.references)

    def test_order_is_stable(self):
        """Test that a second generation is identical apart from timestamps."""
        first = generate(parse(BLOG).schema, NO_METADATA).text
        second = generate(parse(first).schema, NO_METADATA).text

        assert first == second

    def test_model_survives(self):
        """Test that column settings survive a round trip."""
        schema = parse(BLOG).schema
        reparsed = parse(generate(schema).text).schema

        users = reparsed.get_table("users")
        assert users.note == "Registered accounts"
        assert users.get_column("created_at").default == "now()"
        assert users.get_column("email").not_null
        posts = reparsed.get_table("posts")
        assert posts.get_column("user_id").foreign_key
        assert reparsed.references[1].on_delete == "cascade"
        assert reparsed.references[1].name == "fk_comment_post"

    def test_escaping_is_symmetric(self):
        """Test notes with quotes, newlines and backslashes."""
        schema = simple_schema()
        schema.tables[0].note = "User's table\nsecond line C:\\temp"
        schema.tables[0].columns[0].note = 'say "hi"'

        reparsed = parse(generate(schema).text).schema

        assert reparsed.tables[0].note == "User's table\nsecond line C:\\temp"
        assert reparsed.tables[0].columns[0].note == 'say "hi"'

    def test_quoted_column_name(self):
        """Test that quoted column names are written back quoted."""
        schema = parse('Table t {\n  "first name" varchar\n}').schema
        text = generate(schema, NO_METADATA).text

        assert '  "first name" varchar' in text
        assert parse(text).schema.tables[0].columns[0].quoted_name

    def test_validate_round_trip(self):
        """Test validate_round_trip on a valid schema."""
        report = validate_round_trip(parse(BLOG).schema)

        assert report.is_valid
        assert report.errors == []
        assert report.generated_text.startswith("// Database Schema")

    def test_validate_round_trip_with_options(self):
        """Test validate_round_trip with generator options."""
        report = validate_round_trip(parse(BLOG).schema, {"includeComments": False})

        assert report.is_valid
        assert "//" not in report.generated_text

    def test_validate_round_trip_unresolved_reference(self):
        """Test a schema whose reference cannot be resolved on reparse."""
        schema = simple_schema()
        schema.references.append(
            Reference(
                id="ref_0",
                from_table="users",
                from_column="id",
                to_table="accounts",
                to_column="id",
                type=RelationshipType.ONE_TO_ONE,
            )
        )
        report = validate_round_trip(schema)

        assert not report.is_valid
        assert any("Referenced table not found: accounts" in e for e in report.errors)
        assert "Reference count mismatch: expected 1, got 0" in report.errors

    def test_validate_round_trip_generation_failure(self):
        """Test that generation failures are reported."""
        schema = DatabaseSchema(tables=[Table(id="t", name="1bad")])
        report = validate_round_trip(schema)

        assert not report.is_valid
        assert report.generated_text == ""
        assert report.errors == ["Generation failed: Invalid table name: 1bad"]
