"""
Command-line interface for dbml-schema.

This module provides the ``dbml-schema`` command, which checks, formats,
round-trips, summarizes and exports schema notation files.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from colorama import Fore, Style, init
from tabulate import tabulate

from dbml_schema import (
    ErrorMode,
    GeneratorOptions,
    ParseResult,
    ParserConfig,
    ReferenceGraph,
    export_sql,
    generate,
    parse,
    validate_round_trip,
)
from dbml_schema.exceptions import SchemaFileError, SchemaNotationError
from dbml_schema.version import __version__

logger = logging.getLogger(__name__)

USE_COLOR = True


def _colored(color: str, msg: str) -> str:
    if USE_COLOR:
        return f"{color}{msg}{Style.RESET_ALL}"
    return msg


def print_success(msg: str) -> None:
    """Print success message."""
    try:
        print(_colored(Fore.GREEN, f"✓ {msg}"))
    except UnicodeEncodeError:
        print(_colored(Fore.GREEN, f"[OK] {msg}"))


def print_error(msg: str) -> None:
    """Print error message."""
    try:
        print(_colored(Fore.RED, f"✗ {msg}"), file=sys.stderr)
    except UnicodeEncodeError:
        print(_colored(Fore.RED, f"[ERROR] {msg}"), file=sys.stderr)


def print_warning(msg: str) -> None:
    """Print warning message."""
    try:
        print(_colored(Fore.YELLOW, f"⚠ {msg}"), file=sys.stderr)
    except UnicodeEncodeError:
        print(_colored(Fore.YELLOW, f"[WARN] {msg}"), file=sys.stderr)


def print_info(msg: str) -> None:
    """Print info message."""
    print(_colored(Fore.CYAN, msg))


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="dbml-schema",
        description="Schema notation parser, formatter and exporter",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Check a schema for errors
  %(prog)s check schema.dbml

  # Reformat a schema with 4-space indentation
  %(prog)s format schema.dbml --indent 4 --output formatted.dbml

  # Verify the schema survives generation and reparsing
  %(prog)s roundtrip schema.dbml

  # Summarize tables and relationships
  %(prog)s stats schema.dbml

  # Export DDL for MySQL
  %(prog)s sql schema.dbml --dialect mysql
        """,
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--no-color", action="store_true", help="Disable colored output"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # === check ===
    check = subparsers.add_parser("check", help="Parse a file and report diagnostics")
    check.add_argument("file", help="Schema notation file")
    check.add_argument(
        "--inline-refs",
        choices=ErrorMode.values(),
        default=ErrorMode.IGNORE.value,
        help="How to treat inline references to undeclared targets (default: ignore)",
    )
    check.add_argument(
        "--json", action="store_true", help="Print the full parse result as JSON"
    )

    # === format ===
    fmt = subparsers.add_parser("format", help="Parse a file and regenerate it")
    fmt.add_argument("file", help="Schema notation file")
    fmt.add_argument(
        "--indent", type=int, default=2, help="Indentation width (default: 2)"
    )
    fmt.add_argument(
        "--no-comments", action="store_true", help="Omit notes and comment lines"
    )
    fmt.add_argument(
        "--no-metadata", action="store_true", help="Omit the header and footer"
    )
    fmt.add_argument(
        "--compact", action="store_true", help="Do not separate blocks with blank lines"
    )
    fmt.add_argument("--output", "-o", metavar="FILE", help="Write output to file")

    # === roundtrip ===
    roundtrip = subparsers.add_parser(
        "roundtrip", help="Check that a file survives generation and reparsing"
    )
    roundtrip.add_argument("file", help="Schema notation file")

    # === stats ===
    stats = subparsers.add_parser("stats", help="Summarize tables and references")
    stats.add_argument("file", help="Schema notation file")

    # === sql ===
    sql = subparsers.add_parser("sql", help="Export SQL DDL")
    sql.add_argument("file", help="Schema notation file")
    sql.add_argument(
        "--dialect", "-d", default="postgres", help="sqlglot dialect (default: postgres)"
    )
    sql.add_argument("--output", "-o", metavar="FILE", help="Write output to file")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    CLI main entry point.

    Supported commands:
        dbml-schema check schema.dbml
        dbml-schema format schema.dbml --indent 4
        dbml-schema roundtrip schema.dbml
        dbml-schema stats schema.dbml
        dbml-schema sql schema.dbml --dialect mysql

    Returns:
        Process exit code.
    """
    args = build_parser().parse_args(argv)

    global USE_COLOR
    USE_COLOR = not args.no_color
    init(strip=args.no_color)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    handlers = {
        "check": handle_check,
        "format": handle_format,
        "roundtrip": handle_roundtrip,
        "stats": handle_stats,
        "sql": handle_sql,
    }

    try:
        return handlers[args.command](args)
    except SchemaFileError as e:
        print_error(f"{e.message}: {e.path}")
        return 1
    except SchemaNotationError as e:
        print_error(e.message)
        return 1
    except ValueError as e:
        print_error(str(e))
        return 2


# ========== Helpers ==========


def read_source(path: str) -> str:
    """Read a notation file.

    Raises:
        SchemaFileError: If the file does not exist or cannot be read.
    """
    source = Path(path)
    if not source.is_file():
        raise SchemaFileError("File not found", path)
    try:
        return source.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SchemaFileError(f"Cannot read file ({e})", path) from e


def write_output(text: str, output: Optional[str]) -> None:
    """Write text to a file, or to stdout when no file is given."""
    if not output:
        print(text)
        return
    try:
        Path(output).write_text(text + "\n", encoding="utf-8")
    except OSError as e:
        raise SchemaFileError(f"Cannot write file ({e})", output) from e
    print_success(f"Written to {output}")


def load(path: str, config: Optional[ParserConfig] = None) -> ParseResult:
    """Read and parse a notation file."""
    text = read_source(path)
    logger.debug("Parsing %s (%d characters)", path, len(text))
    return parse(text, config)


def show_diagnostics(result: ParseResult) -> None:
    """Print diagnostics as a table."""
    rows = [
        [
            d.line,
            d.column,
            _colored(Fore.RED if d.is_error() else Fore.YELLOW, d.severity.value),
            d.kind.value,
            d.message,
        ]
        for d in result.diagnostics
    ]
    if rows:
        print(
            tabulate(
                rows,
                headers=["Line", "Col", "Severity", "Kind", "Message"],
                tablefmt="simple",
            )
        )


def report_parse_errors(path: str, result: ParseResult) -> bool:
    """Print parse errors to stderr. Returns True if there were any."""
    if result.success:
        return False
    print_error(f"{path} has {len(result.errors)} error(s):")
    for error in result.errors:
        print(f"  {error.format()}", file=sys.stderr)
    return True


# ========== Commands ==========


def handle_check(args: argparse.Namespace) -> int:
    """Handle the check command."""
    config = ParserConfig(inline_reference_check=ErrorMode(args.inline_refs))
    result = load(args.file, config)

    if args.json:
        print(result.to_json(indent=2))
        return 0 if result.success else 1

    print_info(f"Checked {args.file} ({result.metadata.lines_processed} lines)")
    show_diagnostics(result)

    counts = f"{len(result.errors)} error(s), {len(result.warnings)} warning(s)"
    if result.success:
        print_success(f"{len(result.schema.tables)} table(s), {counts}")
        return 0
    print_error(counts)
    return 1


def handle_format(args: argparse.Namespace) -> int:
    """Handle the format command."""
    result = load(args.file)
    if report_parse_errors(args.file, result):
        return 1

    options = GeneratorOptions(
        include_comments=not args.no_comments,
        include_metadata=not args.no_metadata,
        indent_size=args.indent,
        format_output=not args.compact,
    )
    generated = generate(result.schema, options)
    if not generated.success:
        for warning in generated.warnings:
            print_error(warning)
        return 1

    write_output(generated.text, args.output)
    return 0


def handle_roundtrip(args: argparse.Namespace) -> int:
    """Handle the roundtrip command."""
    result = load(args.file)
    if report_parse_errors(args.file, result):
        return 1

    report = validate_round_trip(result.schema)
    if report.is_valid:
        print_success(
            f"Round trip preserved {len(result.schema.tables)} table(s) and "
            f"{len(result.schema.references)} reference(s)"
        )
        return 0

    print_error("Round trip failed:")
    for i, error in enumerate(report.errors, 1):
        print(f"  {i}. {error}", file=sys.stderr)
    return 1


def handle_stats(args: argparse.Namespace) -> int:
    """Handle the stats command."""
    result = load(args.file)
    schema = result.schema
    graph = ReferenceGraph(schema)

    rows = [
        [
            table.qualified_name,
            len(table.columns),
            sum(1 for c in table.columns if c.primary_key),
            sum(1 for c in table.columns if c.foreign_key),
            len(graph.referenced_by(table.qualified_name)),
        ]
        for table in schema.tables
    ]
    print_info(f"\n{args.file}\n")
    print(
        tabulate(
            rows,
            headers=["Table", "Columns", "PK", "FK", "Referenced by"],
            tablefmt="simple",
        )
    )
    print()

    statistics = graph.get_statistics()
    print(tabulate(sorted(statistics.items()), headers=["Metric", "Count"]))
    print()

    for reference in graph.dangling_references():
        print_warning(
            f"Dangling reference: {reference.from_endpoint()} "
            f"{reference.type.symbol} {reference.to_endpoint()}"
        )
    for cycle in graph.cycles():
        print_warning(f"Reference cycle: {' -> '.join(cycle + cycle[:1])}")
    isolated = graph.isolated_tables()
    if isolated:
        print_info(f"Isolated tables: {', '.join(isolated)}")

    if result.errors:
        print_warning(f"{len(result.errors)} parse error(s); run 'check' for details")
    return 0


def handle_sql(args: argparse.Namespace) -> int:
    """Handle the sql command."""
    result = load(args.file)
    if report_parse_errors(args.file, result):
        return 1

    export = export_sql(result.schema, dialect=args.dialect)
    for warning in export.warnings:
        print_warning(warning)
    write_output(export.sql, args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
