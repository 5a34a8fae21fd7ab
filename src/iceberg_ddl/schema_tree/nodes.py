"""Schema tree node definitions for representing a table schema document.

Each node describes the type of one field. Nodes are immutable and carry no
field names of their own; names live on ``SchemaField`` entries held by the
field-container nodes (``StructNode`` and ``ObjectGroupNode``) in
declaration order.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TypeKeyword(str, Enum):
    """The closed set of ``type`` keywords recognized in a schema document."""

    STRING = "string"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    NUMBER = "number"
    FLOAT = "float"
    DATE = "date"
    DATETIME = "datetime"
    TIMESTAMP = "timestamp"
    LONG = "long"
    DECIMAL = "decimal"
    ARRAY = "array"
    OBJECT = "object"
    MAP = "map"
    NULL = "null"


PRIMITIVE_KEYWORDS = frozenset(
    {
        TypeKeyword.STRING,
        TypeKeyword.BOOLEAN,
        TypeKeyword.INTEGER,
        TypeKeyword.NUMBER,
        TypeKeyword.FLOAT,
        TypeKeyword.DATE,
        TypeKeyword.DATETIME,
        TypeKeyword.TIMESTAMP,
        TypeKeyword.LONG,
    }
)


class SchemaTreeNode(ABC, BaseModel):
    """Base class for all schema tree nodes.

    Schema tree nodes represent the type structure of a schema document in a
    way that is decoupled from the raw JSON layout and from DDL rendering.
    """

    model_config = ConfigDict(frozen=True)

    @abstractmethod
    def accept(self, visitor: "SchemaTreeVisitor") -> str:
        """Accept a visitor for the visitor pattern.

        Args:
            visitor: The visitor to accept

        Returns:
            Result of the visitor's visit operation
        """
        pass


class SchemaField(BaseModel):
    """A named child of a struct or grouping node.

    Attributes:
        name: The effective field name, after overlay renaming and before sanitizing.
        node: The type definition of the field.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="The field name as declared (or renamed by an overlay)")
    node: SchemaTreeNode = Field(..., description="The field's type definition")


class PrimitiveNode(SchemaTreeNode):
    """A scalar type such as string, integer or datetime."""

    kind: TypeKeyword = Field(..., description="The primitive type keyword")

    @field_validator("kind")
    @classmethod
    def _check_primitive(cls, value: TypeKeyword) -> TypeKeyword:
        if value not in PRIMITIVE_KEYWORDS:
            raise ValueError(f"'{value.value}' is not a primitive type keyword")
        return value

    def accept(self, visitor: "SchemaTreeVisitor") -> str:
        """Accept a visitor for primitive nodes."""
        return visitor.visit_primitive(self)


class DecimalNode(SchemaTreeNode):
    """A fixed point number.

    Attributes:
        precision: Total number of digits.
        scale: Number of digits after the decimal point.
    """

    precision: int = Field(..., description="Total number of digits")
    scale: int = Field(..., description="Digits after the decimal point")

    def accept(self, visitor: "SchemaTreeVisitor") -> str:
        """Accept a visitor for decimal nodes."""
        return visitor.visit_decimal(self)


class ArrayNode(SchemaTreeNode):
    """An ARRAY type.

    Attributes:
        item: The schema tree node describing the array elements
    """

    item: SchemaTreeNode = Field(..., description="The element type of this array")

    def accept(self, visitor: "SchemaTreeVisitor") -> str:
        """Accept a visitor for array nodes."""
        return visitor.visit_array(self)


class MapNode(SchemaTreeNode):
    """A MAP type with key and value types.

    Attributes:
        key_type: The schema tree node describing the map keys
        value_type: The schema tree node describing the map values
    """

    key_type: SchemaTreeNode = Field(..., description="The key type of this map")
    value_type: SchemaTreeNode = Field(..., description="The value type of this map")

    def accept(self, visitor: "SchemaTreeVisitor") -> str:
        """Accept a visitor for map nodes."""
        return visitor.visit_map(self)


class FieldContainerNode(SchemaTreeNode):
    """Common base for nodes that hold an ordered list of named fields."""

    fields: List[SchemaField] = Field(..., min_length=1, description="Fields in declaration order")

    def field_names(self) -> List[str]:
        """Return the field names in declaration order."""
        return [field.name for field in self.fields]


class StructNode(FieldContainerNode):
    """An explicit ``object`` with ``properties``, rendered as ``struct<name: type, ...>``."""

    def accept(self, visitor: "SchemaTreeVisitor") -> str:
        """Accept a visitor for struct nodes."""
        return visitor.visit_struct(self)


class ObjectGroupNode(FieldContainerNode):
    """A node with no ``type`` keyword that groups named children.

    This is the shape of the document root and of any bare grouping nested
    inside it. Rendered as ``struct<name type, ...>``.
    """

    def accept(self, visitor: "SchemaTreeVisitor") -> str:
        """Accept a visitor for implicit grouping nodes."""
        return visitor.visit_object_group(self)
