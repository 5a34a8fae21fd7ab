"""DDL generation modules."""

from iceberg_ddl.generator.ddl_types import (
    ColumnDefinition,
    ColumnListGenerator,
    DDLTypeVisitor,
    generate_columns_from_schema_tree,
)

__all__ = [
    "ColumnDefinition",
    "ColumnListGenerator",
    "DDLTypeVisitor",
    "generate_columns_from_schema_tree",
]
