#!/usr/bin/env python3
"""
Quick Start Script - Demonstrates dbml-schema core features

This script parses a small schema, shows the diagnostics, regenerates the
notation and checks that it round-trips.
"""

from dbml_schema import ReferenceGraph, export_sql, generate, parse, validate_round_trip


def main():
    print("=" * 60)
    print("dbml-schema v1.0 - Quick Start Demo")
    print("=" * 60)
    print()

    text = """
    // Blog schema
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
      status varchar [default: 'draft']
    }

    Table comments {
      id integer [pk]
      post_id integer
      body text
    }

    Ref: comments.post_id > posts.id [delete: cascade]

    Enum post_status {
      draft
      published
    }
    """

    print("Parsing schema...\n")
    result = parse(text)

    print(
        f"[OK] Parsed {len(result.schema.tables)} tables and "
        f"{len(result.schema.references)} references.\n"
    )

    # Demo 1: Diagnostics
    print("=" * 60)
    print("Demo 1: Diagnostics")
    print("=" * 60)
    print()
    for diagnostic in result.diagnostics:
        print(f"  {diagnostic.format()}")
    print()

    # Demo 2: Generate
    print("=" * 60)
    print("Demo 2: Regenerate the notation")
    print("=" * 60)
    print()
    generated = generate(result.schema, {"includeMetadata": False})
    print(generated.text)
    print()

    # Demo 3: Round trip
    print("=" * 60)
    print("Demo 3: Round trip")
    print("=" * 60)
    report = validate_round_trip(result.schema)
    print(f"\n  Valid: {report.is_valid}\n")

    # Demo 4: Relationships
    print("=" * 60)
    print("Demo 4: Relationships")
    print("=" * 60)
    print()
    graph = ReferenceGraph(result.schema)
    for reference in graph.referenced_by("users"):
        print(f"  - {reference.from_endpoint()} -> {reference.to_endpoint()}")
    print()

    # Demo 5: SQL
    print("=" * 60)
    print("Demo 5: SQL export")
    print("=" * 60)
    print()
    print(export_sql(result.schema, dialect="postgres").sql)
    print()

    print("=" * 60)
    print("Try it yourself!")
    print("=" * 60)
    print("\nRun: dbml-schema check schema.dbml\n")


if __name__ == "__main__":
    main()
