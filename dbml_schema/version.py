"""Version information."""

__version__ = "1.0.0"
__version_info__ = (1, 0, 0)

# Version history
CHANGELOG = """
# Changelog

## v1.0.0

**Notation parser**

- Table, column and reference parsing with line-scoped recovery
- Settings lists with quote-aware splitting
- Inline `ref:` settings
- Enum / Project / TableGroup / Indexes recognized and skipped

**Generator**

- Round-trip safe output
- Header / footer metadata comments
- Symmetric string escaping

**Tooling**

- `dbml-schema` CLI (check, format, roundtrip, stats, sql)
- Reference graph analysis
- SQL DDL export

### Known Limitations

- Trailing `//` comments on a line are not stripped
- Enum, index and table group contents are not modeled
"""
