#!/usr/bin/env python3
"""Example compiling a JSON schema file into Iceberg table DDL.

Run from the repository root:

    python examples/create_table_example.py
"""

import json
from pathlib import Path

from iceberg_ddl.compiler import ColumnCompiler, compile_schema_file
from iceberg_ddl.generator.create_table import TableDefinition, generate_create_table
from iceberg_ddl.schema_tree.visitor import SchemaTreeVisitor

SCHEMA_DIR = Path(__file__).parent / "schemas"


class TypeCounterVisitor(SchemaTreeVisitor):
    """Custom visitor that counts the nodes of each kind in a schema tree."""

    def __init__(self):
        self.counts = {}

    def _count(self, kind: str) -> str:
        self.counts[kind] = self.counts.get(kind, 0) + 1
        return kind

    def visit_primitive(self, node):
        return self._count(node.kind.value)

    def visit_decimal(self, node):
        return self._count("decimal")

    def visit_array(self, node):
        node.item.accept(self)
        return self._count("array")

    def visit_map(self, node):
        node.key_type.accept(self)
        node.value_type.accept(self)
        return self._count("map")

    def visit_struct(self, node):
        for field in node.fields:
            field.node.accept(self)
        return self._count("object")

    def visit_object_group(self, node):
        for field in node.fields:
            field.node.accept(self)
        return self._count("group")


def main():
    schema_file = SCHEMA_DIR / "example_table.schema.json"
    mapping = json.loads((SCHEMA_DIR / "mapping.json").read_text())

    print("=" * 70)
    print("Column list")
    print("=" * 70)
    print(compile_schema_file(schema_file, mapping))
    print()

    print("=" * 70)
    print("Node counts")
    print("=" * 70)
    root = ColumnCompiler(mapping).build_tree(schema_file.read_bytes())
    counter = TypeCounterVisitor()
    root.accept(counter)
    for kind, count in sorted(counter.counts.items()):
        print(f"  {kind}: {count}")
    print()

    print("=" * 70)
    print("CREATE TABLE statement")
    print("=" * 70)
    definition = TableDefinition(
        table_name="example_table",
        bucket_name="datalakehouse.iceberg-example",
        schema_file=schema_file,
        mapping=mapping,
        partitioned_by=["uid", "hour(ts)"],
    )
    print(generate_create_table(definition))


if __name__ == "__main__":
    main()
