"""
Tests for models, configuration and diagnostics.

This module contains tests for ParserConfig, GeneratorOptions, the
DiagnosticCollector, the TableRegistry and model serialization.
"""

import json

import pytest

from dbml_schema import (
    Column,
    DatabaseSchema,
    ErrorMode,
    GeneratorOptions,
    ParserConfig,
    Reference,
    RelationshipType,
    SchemaNotationError,
    Table,
    TableRegistry,
    parse,
)
from dbml_schema.models.diagnostic import DiagnosticKind, Severity
from dbml_schema.utils.diagnostics import DiagnosticCollector, get_suggestion


class TestConfig:
    """Tests for configuration models."""

    def test_error_mode_values(self):
        """Test ErrorMode values."""
        assert ErrorMode.values() == ["fail", "warn", "ignore"]
        assert ErrorMode("warn") is ErrorMode.WARN

    def test_parser_config_defaults(self):
        """Test ParserConfig defaults."""
        config = ParserConfig()

        assert config.inline_reference_check == ErrorMode.IGNORE
        assert config.report_unknown_settings is True

    def test_parser_config_validation(self):
        """Test that ParserConfig rejects wrong types."""
        with pytest.raises(TypeError):
            ParserConfig(inline_reference_check="warn")
        with pytest.raises(TypeError):
            ParserConfig(report_unknown_settings="yes")

    def test_generator_options_defaults(self):
        """Test GeneratorOptions defaults."""
        options = GeneratorOptions()

        assert options.include_comments
        assert options.include_metadata
        assert options.indent == "  "
        assert options.preserve_custom_properties
        assert options.format_output

    def test_generator_options_validation(self):
        """Test that GeneratorOptions rejects invalid values."""
        with pytest.raises(ValueError):
            GeneratorOptions(indent_size=-2)
        with pytest.raises(TypeError):
            GeneratorOptions(indent_size=True)
        with pytest.raises(TypeError):
            GeneratorOptions(include_comments=1)

    def test_from_dict(self):
        """Test snake_case and camelCase keys."""
        options = GeneratorOptions.from_dict(
            {"indentSize": 4, "include_comments": False, "unknown": 1}
        )

        assert options.indent_size == 4
        assert not options.include_comments
        assert GeneratorOptions.from_dict(None) == GeneratorOptions()


class TestDiagnostics:
    """Tests for DiagnosticCollector."""

    def setup_method(self):
        """Create collector."""
        self.collector = DiagnosticCollector()

    def test_errors_and_warnings(self):
        """Test severity filtering."""
        self.collector.warning(DiagnosticKind.UNRECOGNIZED, 2, 1, "Unrecognized syntax: ???")
        assert not self.collector.has_errors()

        self.collector.error(DiagnosticKind.SEMANTIC, 5, 7, "Invalid table name: 1bad")

        assert self.collector.has_errors()
        assert len(self.collector.errors) == 1
        assert len(self.collector.warnings) == 1
        assert self.collector.get_summary() == {"error": 1, "warning": 1}

    def test_suggestion_lookup(self):
        """Test that well-known messages receive a suggestion."""
        diagnostic = self.collector.add(
            Severity.ERROR, DiagnosticKind.SEMANTIC, 1, 7, "Invalid table name: 1bad"
        )

        assert diagnostic.suggestion.startswith("Table names must start with a letter")
        assert get_suggestion("Unrecognized syntax: x") is None

    def test_explicit_suggestion_wins(self):
        """Test that an explicit suggestion is kept."""
        diagnostic = self.collector.add(
            Severity.WARNING,
            DiagnosticKind.UNKNOWN_SETTING,
            3,
            1,
            "Invalid table name: x",
            suggestion="custom",
        )

        assert diagnostic.suggestion == "custom"

    def test_clear(self):
        """Test clearing diagnostics."""
        self.collector.error(DiagnosticKind.STRUCTURAL, 1, 1, "x")
        self.collector.clear()

        assert self.collector.get_all() == []

    def test_format_and_to_dict(self):
        """Test diagnostic display and serialization."""
        diagnostic = self.collector.add(
            Severity.ERROR, DiagnosticKind.SEMANTIC, 4, 3, "Duplicate table name: users"
        )

        assert diagnostic.format() == "4:3: error: Duplicate table name: users"
        data = diagnostic.to_dict()
        assert data["kind"] == "semantic"
        assert data["severity"] == "error"
        assert "suggestion" in data


class TestTableRegistry:
    """Tests for TableRegistry."""

    def setup_method(self):
        """Create registry with a few tables."""
        self.registry = TableRegistry()
        users = Table(id="table_0", name="users")
        users.add_column(Column(id="col_0", name="id", type="integer"))
        self.registry.register_table(users)
        self.registry.register_table(Table(id="table_1", name="accounts", schema="auth"))

    def test_register_and_find(self):
        """Test basic registration and lookup."""
        assert len(self.registry) == 2
        assert self.registry.has_table("users")
        assert self.registry.find_table("users").id == "table_0"

    def test_duplicate_raises(self):
        """Test that a duplicate (schema, name) pair is refused."""
        with pytest.raises(SchemaNotationError, match="already registered"):
            self.registry.register_table(Table(id="table_2", name="users"))

        assert self.registry.find_table("users").id == "table_0"

    def test_same_name_other_schema(self):
        """Test that the same name in another schema is allowed."""
        self.registry.register_table(Table(id="table_2", name="users", schema="auth"))

        assert self.registry.find_table("users").id == "table_0"
        assert self.registry.find_table("users", "auth").id == "table_2"

    def test_unqualified_falls_back_to_any_schema(self):
        """Test resolving an unqualified name of a qualified table."""
        assert self.registry.find_table("accounts").schema == "auth"
        assert not self.registry.has_table("accounts")
        assert self.registry.find_table("accounts", "public") is None

    def test_find_column(self):
        """Test column resolution."""
        assert self.registry.find_column("users", "id").id == "col_0"
        assert self.registry.find_column("users", "email") is None
        assert self.registry.find_column("ghosts", "id") is None

    def test_declaration_order(self):
        """Test that tables are returned in declaration order."""
        assert [t.name for t in self.registry.get_all_tables()] == ["users", "accounts"]


class TestModels:
    """Tests for model helpers and serialization."""

    @pytest.mark.parametrize(
        "symbol,expected",
        [
            (">", RelationshipType.ONE_TO_MANY),
            ("<", RelationshipType.MANY_TO_ONE),
            ("<>", RelationshipType.MANY_TO_MANY),
            ("-", RelationshipType.ONE_TO_ONE),
        ],
    )
    def test_relationship_symbols(self, symbol, expected):
        """Test that symbols and types map both ways."""
        assert RelationshipType.from_symbol(symbol) == expected
        assert expected.symbol == symbol

    def test_reference_endpoints(self):
        """Test endpoint rendering."""
        ref = Reference(
            id="ref_0",
            from_table="posts",
            from_column="user_id",
            to_table="users",
            to_column="id",
            to_schema="auth",
        )

        assert ref.from_endpoint() == "posts.user_id"
        assert ref.to_endpoint() == "auth.users.id"

    def test_schema_get_table(self):
        """Test table lookup with and without schema."""
        schema = DatabaseSchema(
            tables=[Table(id="t0", name="users", schema="auth"), Table(id="t1", name="users")]
        )

        assert schema.get_table("users").id == "t0"
        assert schema.get_table("users", "auth").id == "t0"
        assert schema.get_table("posts") is None

    def test_column_has_settings(self):
        """Test Column.has_settings."""
        assert not Column(id="c", name="id", type="int").has_settings()
        assert Column(id="c", name="id", type="int", unique=True).has_settings()

    def test_result_to_json(self):
        """Test that a parse result serializes to JSON."""
        result = parse(
            "Table users {\n  id integer [pk]\n}\n"
            "Table posts {\n  user_id integer [ref: > users.id]\n}"
        )
        data = json.loads(result.to_json())

        assert data["errors"] == []
        assert data["schema"]["tables"][0]["name"] == "users"
        assert data["schema"]["references"][0]["type"] == "one-to-many"
        assert data["schema"]["references"][0]["inline"] is True
        assert data["metadata"]["lines_processed"] == 6
