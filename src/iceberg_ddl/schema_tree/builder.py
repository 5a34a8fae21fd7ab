"""Builder for converting a decoded schema document into schema tree nodes.

The document grammar is a small JSON-Schema-like dialect::

    Node := {"type": <keyword>, ...type specific keys}
          | {"properties": {<key>: Node, ...}}    # implicit grouping
          | {<key>: Node, ...}                    # implicit grouping

Type specific keys:

- ``array``: ``items: Node``
- ``object``: ``properties: {<key>: Node, ...}``
- ``decimal``: ``properties: {precision: int, scale: int}``
- ``map``: ``properties: {key: Node, value: Node}``
"""

from typing import Any, Callable, Dict, List, Mapping, Optional

from iceberg_ddl.errors import (
    InvalidRootType,
    MalformedNode,
    UnknownType,
    UnsupportedType,
)
from iceberg_ddl.logging_config import get_logger
from iceberg_ddl.schema_tree.nodes import (
    PRIMITIVE_KEYWORDS,
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
from iceberg_ddl.schema_tree.overlay import MappingOverlay, resolve_child

logger = get_logger(__name__)


def _join_path(parent: str, name: str) -> str:
    return f"{parent}.{name}" if parent else name


def _is_typed(data: Mapping[str, Any]) -> bool:
    """Check whether a node carries a type keyword.

    A ``type`` key whose value is itself an object is a field named "type"
    inside a grouping, not a keyword.
    """
    return "type" in data and not isinstance(data["type"], Mapping)


def _parse_keyword(value: Any, path: str) -> TypeKeyword:
    if not isinstance(value, str):
        raise UnknownType(f"Unknown data type {value!r}", path=path)
    try:
        keyword = TypeKeyword(value)
    except ValueError:
        raise UnknownType(f"Unknown data type '{value}'", path=path) from None
    if keyword is TypeKeyword.NULL:
        raise UnsupportedType(
            f"Data type '{keyword.value}' is not supported by Iceberg schema", path=path
        )
    return keyword


def _coerce_int(value: Any, label: str, path: str) -> int:
    """Coerce a decimal parameter to an int, accepting integral floats and numeric strings."""
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise MalformedNode(f"Decimal {label} must be a number, got {value!r}", path=path)
    if isinstance(value, int):
        return value
    try:
        number = float(value)
    except ValueError:
        raise MalformedNode(f"Decimal {label} must be a number, got {value!r}", path=path) from None
    if not number.is_integer():
        raise MalformedNode(f"Decimal {label} must be an integer, got {value!r}", path=path)
    return int(number)


class SchemaTreeBuilder:
    """Builds schema tree nodes from a decoded schema document.

    The overlay, if given, is applied to the direct children of an implicit
    grouping root only. An explicit ``object`` root and everything nested
    below the root are built without it.

    Attributes:
        overlay: Optional column overlay mapping.
    """

    def __init__(self, overlay: Optional[MappingOverlay] = None) -> None:
        self.overlay = overlay
        self._composite_builders: Dict[
            TypeKeyword, Callable[[Mapping[str, Any], str], SchemaTreeNode]
        ] = {
            TypeKeyword.DECIMAL: self._build_decimal,
            TypeKeyword.ARRAY: self._build_array,
            TypeKeyword.MAP: self._build_map,
            TypeKeyword.OBJECT: self._build_struct,
        }

    def build_document(self, data: Any) -> FieldContainerNode:
        """Convert a decoded schema document into the root schema tree node.

        Args:
            data: The decoded JSON document.

        Returns:
            An ObjectGroupNode for implicit groupings or a StructNode for an
            explicit object root.

        Raises:
            InvalidRootType: If the root is not a grouping or an explicit object.
            UnknownType, UnsupportedType, MalformedNode: For invalid nodes anywhere in the tree.
        """
        if not isinstance(data, Mapping):
            raise InvalidRootType(
                f"Schema document root must be a JSON object, got {type(data).__name__}"
            )

        if _is_typed(data):
            keyword = _parse_keyword(data["type"], path="")
            if keyword is not TypeKeyword.OBJECT:
                raise InvalidRootType(
                    f"Schema document root must be an object or a field grouping, got '{keyword.value}'"
                )
            if self.overlay:
                logger.debug("overlay_skipped_for_object_root")
            return self._build_struct(data, path="")

        members = self._grouping_members(data, path="")
        return ObjectGroupNode(fields=self._build_fields(members, path="", overlay=self.overlay))

    def build_node(self, data: Any, path: str = "") -> SchemaTreeNode:
        """Convert a single field definition into a schema tree node.

        Args:
            data: The decoded field definition.
            path: Dotted path of the field, used in error messages.

        Returns:
            The schema tree node for the definition.
        """
        if not isinstance(data, Mapping):
            raise MalformedNode(f"Field definition must be a JSON object, got {data!r}", path=path)

        if not _is_typed(data):
            members = self._grouping_members(data, path)
            return ObjectGroupNode(fields=self._build_fields(members, path))

        keyword = _parse_keyword(data["type"], path)
        if keyword in PRIMITIVE_KEYWORDS:
            return PrimitiveNode(kind=keyword)
        return self._composite_builders[keyword](data, path)

    def _build_fields(
        self,
        members: Mapping[str, Any],
        path: str,
        overlay: Optional[MappingOverlay] = None,
    ) -> List[SchemaField]:
        fields = []
        for key, definition in members.items():
            name, replacement = resolve_child(key, overlay)
            if replacement is not None:
                logger.debug("overlay_applied", column=key, replacement=name)
                definition = replacement
            node = self.build_node(definition, _join_path(path, name))
            fields.append(SchemaField(name=name, node=node))
        return fields

    def _grouping_members(self, data: Mapping[str, Any], path: str) -> Mapping[str, Any]:
        if "properties" in data:
            members = data["properties"]
            if not isinstance(members, Mapping):
                raise MalformedNode("Field grouping 'properties' must be a JSON object", path=path)
        else:
            members = data

        if not members:
            raise MalformedNode("Field grouping has no fields", path=path)
        return members

    def _require_properties(self, data: Mapping[str, Any], path: str, what: str) -> Mapping[str, Any]:
        properties = data.get("properties")
        if not isinstance(properties, Mapping) or not properties:
            raise MalformedNode(f"{what} requires a non-empty 'properties' object", path=path)
        return properties

    def _build_decimal(self, data: Mapping[str, Any], path: str) -> DecimalNode:
        properties = self._require_properties(data, path, what="Decimal type")
        for required in ("precision", "scale"):
            if required not in properties:
                raise MalformedNode(f"Decimal type requires '{required}' in 'properties'", path=path)

        return DecimalNode(
            precision=_coerce_int(properties["precision"], "precision", path),
            scale=_coerce_int(properties["scale"], "scale", path),
        )

    def _build_array(self, data: Mapping[str, Any], path: str) -> ArrayNode:
        if "items" not in data:
            raise MalformedNode("Array type requires 'items'", path=path)
        return ArrayNode(item=self.build_node(data["items"], f"{path}[]"))

    def _build_map(self, data: Mapping[str, Any], path: str) -> MapNode:
        properties = self._require_properties(data, path, what="Map type")
        for required in ("key", "value"):
            if required not in properties:
                raise MalformedNode(f"Map type requires '{required}' in 'properties'", path=path)

        return MapNode(
            key_type=self.build_node(properties["key"], f"{path}<key>"),
            value_type=self.build_node(properties["value"], f"{path}<value>"),
        )

    def _build_struct(self, data: Mapping[str, Any], path: str) -> StructNode:
        properties = self._require_properties(data, path, what="Object type")
        return StructNode(fields=self._build_fields(properties, path))
