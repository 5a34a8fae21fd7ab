"""Schema tree module for representing a schema document as a tree structure.

This module provides schema tree nodes to represent a table schema in a modular,
extensible way that decouples the document layout from DDL generation.
"""

from iceberg_ddl.schema_tree.nodes import (
    ArrayNode,
    DecimalNode,
    FieldContainerNode,
    MapNode,
    ObjectGroupNode,
    PrimitiveNode,
    SchemaField,
    SchemaTreeNode,
    StructNode,
    TypeKeyword,
)
from iceberg_ddl.schema_tree.visitor import SchemaTreeVisitor

__all__ = [
    "SchemaTreeNode",
    "SchemaField",
    "TypeKeyword",
    "PrimitiveNode",
    "DecimalNode",
    "ArrayNode",
    "MapNode",
    "FieldContainerNode",
    "StructNode",
    "ObjectGroupNode",
    "SchemaTreeVisitor",
]
