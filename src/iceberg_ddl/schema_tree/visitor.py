"""Visitor pattern for traversing and processing schema tree nodes.

This module provides the abstract visitor interface that can be implemented
to perform different operations on the schema tree (DDL type rendering,
validation, etc.).
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from iceberg_ddl.schema_tree.nodes import (
        ArrayNode,
        DecimalNode,
        MapNode,
        ObjectGroupNode,
        PrimitiveNode,
        StructNode,
    )


class SchemaTreeVisitor(ABC):
    """Abstract base class for schema tree visitors.

    There is one visit method per node variant, so a concrete visitor handles
    the closed set of node kinds exhaustively.
    """

    @abstractmethod
    def visit_primitive(self, node: "PrimitiveNode") -> str:
        """Visit a primitive node.

        Args:
            node: The primitive node to visit

        Returns:
            String representation or processed result
        """
        pass

    @abstractmethod
    def visit_decimal(self, node: "DecimalNode") -> str:
        """Visit a decimal node."""
        pass

    @abstractmethod
    def visit_array(self, node: "ArrayNode") -> str:
        """Visit an array node."""
        pass

    @abstractmethod
    def visit_map(self, node: "MapNode") -> str:
        """Visit a map node."""
        pass

    @abstractmethod
    def visit_struct(self, node: "StructNode") -> str:
        """Visit an explicit object (struct) node."""
        pass

    @abstractmethod
    def visit_object_group(self, node: "ObjectGroupNode") -> str:
        """Visit an implicit grouping node."""
        pass
