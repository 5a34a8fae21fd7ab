"""iceberg-ddl - Compile JSON schema documents into Iceberg table DDL."""

from iceberg_ddl.compiler import ColumnCompiler, compile_schema, compile_schema_file
from iceberg_ddl.errors import (
    InvalidDocument,
    InvalidRootType,
    MalformedNode,
    SchemaError,
    UnknownType,
    UnsupportedType,
)
from iceberg_ddl.generator.create_table import TableDefinition, generate_create_table
from iceberg_ddl.generator.ddl_types import ColumnDefinition
from iceberg_ddl.naming import RESERVED_KEYWORDS, sanitize_field_name

__version__ = "0.1.0"

__all__ = [
    "ColumnCompiler",
    "compile_schema",
    "compile_schema_file",
    "ColumnDefinition",
    "TableDefinition",
    "generate_create_table",
    "sanitize_field_name",
    "RESERVED_KEYWORDS",
    "SchemaError",
    "UnsupportedType",
    "UnknownType",
    "InvalidRootType",
    "MalformedNode",
    "InvalidDocument",
]
