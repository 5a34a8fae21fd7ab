"""DDL type rendering using the schema tree visitor pattern.

Types follow the Athena DDL flavour accepted for Iceberg tables:

- ``number`` and ``float`` map to ``float``
- ``datetime`` (``yyyy-MM-dd HH:mm:ss[.f...]``) maps to ``timestamp``
- ``timestamp`` (unix epoch in microseconds) and ``long`` map to ``bigint``
- explicit objects render as ``struct<name: type, ...>``
- implicit groupings render as ``struct<name type, ...>``

See https://docs.aws.amazon.com/athena/latest/ug/data-types.html and
https://iceberg.apache.org/docs/latest/schemas/#schemas.
"""

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field

from iceberg_ddl.naming import sanitize_field_name
from iceberg_ddl.schema_tree.nodes import (
    ArrayNode,
    DecimalNode,
    FieldContainerNode,
    MapNode,
    ObjectGroupNode,
    PrimitiveNode,
    StructNode,
    TypeKeyword,
)
from iceberg_ddl.schema_tree.visitor import SchemaTreeVisitor

PRIMITIVE_DDL_TYPES: Dict[TypeKeyword, str] = {
    TypeKeyword.STRING: "string",
    TypeKeyword.BOOLEAN: "boolean",
    TypeKeyword.INTEGER: "int",
    TypeKeyword.NUMBER: "float",
    TypeKeyword.FLOAT: "float",
    TypeKeyword.DATE: "date",
    TypeKeyword.DATETIME: "timestamp",
    TypeKeyword.TIMESTAMP: "bigint",
    TypeKeyword.LONG: "bigint",
}


class ColumnDefinition(BaseModel):
    """A single top-level column of the generated DDL.

    Attributes:
        name: The sanitized column name.
        sql_type: The DDL type string.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="The sanitized column name")
    sql_type: str = Field(..., description="The DDL type of the column")

    def render(self, separator: str = " ") -> str:
        """Render the column as a ``name type`` pair, or ``name: type`` with ``separator=": "``."""
        return f"{self.name}{separator}{self.sql_type}"


class DDLTypeVisitor(SchemaTreeVisitor):
    """Schema tree visitor that renders each node as a DDL type string."""

    def visit_primitive(self, node: PrimitiveNode) -> str:
        return PRIMITIVE_DDL_TYPES[node.kind]

    def visit_decimal(self, node: DecimalNode) -> str:
        return f"decimal({node.precision},{node.scale})"

    def visit_array(self, node: ArrayNode) -> str:
        return f"array<{node.item.accept(self)}>"

    def visit_map(self, node: MapNode) -> str:
        return f"map<{node.key_type.accept(self)}, {node.value_type.accept(self)}>"

    def visit_struct(self, node: StructNode) -> str:
        """Render an explicit object using the ``name: type`` struct member form."""
        members = [
            f"{sanitize_field_name(field.name)}: {field.node.accept(self)}" for field in node.fields
        ]
        return f"struct<{', '.join(members)}>"

    def visit_object_group(self, node: ObjectGroupNode) -> str:
        """Render an implicit grouping using the ``name type`` column form."""
        members = [
            f"{sanitize_field_name(field.name)} {field.node.accept(self)}" for field in node.fields
        ]
        return f"struct<{', '.join(members)}>"


class ColumnListGenerator:
    """Generates the flat column list for a root schema tree node.

    The root's fields become the table's columns directly; the root is never
    rendered as a ``struct<...>`` itself. Members keep the separator their
    container would use: ``name type`` for an implicit grouping root and
    ``name: type`` for an explicit ``object`` root.
    """

    def __init__(self, root: FieldContainerNode):
        """Initialize the generator with the document's root node.

        Args:
            root: The root ObjectGroupNode or StructNode of the schema tree
        """
        self.root = root
        self.separator = ": " if isinstance(root, StructNode) else " "

    def columns(self) -> List[ColumnDefinition]:
        """Generate a column definition for every top-level field.

        Returns:
            Column definitions in declaration order
        """
        visitor = DDLTypeVisitor()
        return [
            ColumnDefinition(name=sanitize_field_name(field.name), sql_type=field.node.accept(visitor))
            for field in self.root.fields
        ]

    def generate(self) -> str:
        """Generate the comma separated column list.

        Returns:
            A string such as ``id string, ts bigint``
        """
        return ", ".join(column.render(self.separator) for column in self.columns())


def generate_columns_from_schema_tree(root: FieldContainerNode) -> str:
    """Convenience function to generate a column list from a schema tree.

    Args:
        root: The root node of the schema tree

    Returns:
        The comma separated column list
    """
    generator = ColumnListGenerator(root)
    return generator.generate()
