"""Unit tests for the schema tree module.

These tests cover the schema tree nodes, the document builder and the
column overlay resolution.
"""

import pytest
from pydantic import ValidationError

from iceberg_ddl.errors import InvalidRootType, MalformedNode, UnknownType, UnsupportedType
from iceberg_ddl.schema_tree.builder import SchemaTreeBuilder
from iceberg_ddl.schema_tree.nodes import (
    ArrayNode,
    DecimalNode,
    MapNode,
    ObjectGroupNode,
    PrimitiveNode,
    SchemaField,
    StructNode,
    TypeKeyword,
)
from iceberg_ddl.schema_tree.overlay import resolve_child, validate_overlay


def test_primitive_node():
    """Test primitive schema tree node creation."""
    node = PrimitiveNode(kind=TypeKeyword.STRING)

    assert node.kind is TypeKeyword.STRING


def test_primitive_node_rejects_composite_keyword():
    """Test that composite keywords cannot be used as primitives."""
    with pytest.raises(ValidationError):
        PrimitiveNode(kind=TypeKeyword.ARRAY)


def test_struct_node_field_names():
    """Test struct schema tree node creation keeps field order."""
    struct_node = StructNode(
        fields=[
            SchemaField(name="b", node=PrimitiveNode(kind=TypeKeyword.STRING)),
            SchemaField(name="a", node=PrimitiveNode(kind=TypeKeyword.INTEGER)),
        ]
    )

    assert struct_node.field_names() == ["b", "a"]


def test_container_node_requires_fields():
    """Test that struct and grouping nodes need at least one field."""
    with pytest.raises(ValidationError):
        ObjectGroupNode(fields=[])


class TestSchemaTreeBuilder:
    """Test suite for SchemaTreeBuilder."""

    def test_implicit_grouping_root(self) -> None:
        """Test that a document without a type keyword becomes a grouping."""
        root = SchemaTreeBuilder().build_document(
            {"id": {"type": "string"}, "ts": {"type": "timestamp"}}
        )

        assert isinstance(root, ObjectGroupNode)
        assert root.field_names() == ["id", "ts"]
        assert root.fields[1].node == PrimitiveNode(kind=TypeKeyword.TIMESTAMP)

    def test_properties_wrapper_root(self) -> None:
        """Test that a root with only 'properties' uses its members."""
        root = SchemaTreeBuilder().build_document(
            {"title": "ignored", "properties": {"id": {"type": "string"}}}
        )

        assert isinstance(root, ObjectGroupNode)
        assert root.field_names() == ["id"]

    def test_explicit_object_root(self) -> None:
        """Test that a typed object root becomes a struct node."""
        root = SchemaTreeBuilder().build_document(
            {"type": "object", "properties": {"id": {"type": "string"}}}
        )

        assert isinstance(root, StructNode)
        assert root.field_names() == ["id"]

    @pytest.mark.parametrize(
        "document",
        [
            {"type": "string"},
            {"type": "array", "items": {"type": "string"}},
            {"type": "map", "properties": {"key": {"type": "string"}, "value": {"type": "string"}}},
            {"type": "decimal", "properties": {"precision": 5, "scale": 2}},
        ],
    )
    def test_invalid_root_type(self, document) -> None:
        """Test that non-container roots are rejected."""
        with pytest.raises(InvalidRootType):
            SchemaTreeBuilder().build_document(document)

    def test_non_object_document(self) -> None:
        """Test that a JSON array document is rejected."""
        with pytest.raises(InvalidRootType, match="list"):
            SchemaTreeBuilder().build_document([{"type": "string"}])

    def test_field_named_type(self) -> None:
        """Test that a 'type' key holding a definition is treated as a field."""
        root = SchemaTreeBuilder().build_document(
            {"type": {"type": "string"}, "id": {"type": "integer"}}
        )

        assert isinstance(root, ObjectGroupNode)
        assert root.field_names() == ["type", "id"]

    def test_nested_grouping(self) -> None:
        """Test that a bare nested grouping becomes an ObjectGroupNode."""
        root = SchemaTreeBuilder().build_document({"outer": {"inner": {"type": "string"}}})

        outer = root.fields[0].node
        assert isinstance(outer, ObjectGroupNode)
        assert outer.field_names() == ["inner"]

    def test_decimal_coerces_floats(self) -> None:
        """Test that integral float precision and scale are coerced to int."""
        node = SchemaTreeBuilder().build_node(
            {"type": "decimal", "properties": {"precision": 5.0, "scale": "2"}}
        )

        assert node == DecimalNode(precision=5, scale=2)
        assert isinstance(node.precision, int)

    def test_decimal_parameters_not_range_checked(self) -> None:
        """Test that integral decimal parameters are taken as given."""
        node = SchemaTreeBuilder().build_node(
            {"type": "decimal", "properties": {"precision": 2, "scale": 5}}
        )

        assert node == DecimalNode(precision=2, scale=5)

    @pytest.mark.parametrize(
        "properties",
        [
            {"precision": 5},
            {"scale": 2},
            {"precision": 5.5, "scale": 2},
            {"precision": "five", "scale": 2},
            {"precision": True, "scale": 2},
        ],
    )
    def test_malformed_decimal(self, properties) -> None:
        """Test that invalid decimal parameters are rejected."""
        with pytest.raises(MalformedNode):
            SchemaTreeBuilder().build_node({"type": "decimal", "properties": properties})

    def test_array_and_map(self) -> None:
        """Test array and map node construction."""
        builder = SchemaTreeBuilder()

        array_node = builder.build_node({"type": "array", "items": {"type": "long"}})
        map_node = builder.build_node(
            {"type": "map", "properties": {"key": {"type": "string"}, "value": {"type": "date"}}}
        )

        assert array_node == ArrayNode(item=PrimitiveNode(kind=TypeKeyword.LONG))
        assert isinstance(map_node, MapNode)
        assert map_node.value_type == PrimitiveNode(kind=TypeKeyword.DATE)

    @pytest.mark.parametrize(
        "definition",
        [
            {"type": "array"},
            {"type": "map", "properties": {"key": {"type": "string"}}},
            {"type": "map"},
            {"type": "object"},
            {"type": "object", "properties": {}},
            {},
            {"properties": "nope"},
            "string",
        ],
    )
    def test_malformed_nodes(self, definition) -> None:
        """Test that missing sibling keys raise MalformedNode."""
        with pytest.raises(MalformedNode):
            SchemaTreeBuilder().build_document({"col": definition})

    def test_null_type_unsupported(self) -> None:
        """Test that the null type is rejected as unsupported."""
        with pytest.raises(UnsupportedType, match="'null'"):
            SchemaTreeBuilder().build_document({"x": {"type": "null"}})

    @pytest.mark.parametrize("type_value", ["bogus", "STRING", ["string", "null"], 3])
    def test_unknown_type(self, type_value) -> None:
        """Test that unrecognized type keywords are rejected."""
        with pytest.raises(UnknownType):
            SchemaTreeBuilder().build_document({"x": {"type": type_value}})

    def test_error_path(self) -> None:
        """Test that errors report the dotted path of the offending field."""
        document = {"other": {"type": "object", "properties": {"bad": {"type": "bogus"}}}}

        with pytest.raises(UnknownType) as exc_info:
            SchemaTreeBuilder().build_document(document)

        assert exc_info.value.path == "other.bad"
        assert "other.bad" in str(exc_info.value)


class TestOverlay:
    """Test suite for column overlay resolution."""

    def test_resolve_without_overlay(self) -> None:
        """Test that keys resolve to themselves without an overlay."""
        assert resolve_child("id") == ("id", None)
        assert resolve_child("id", {"other": {"x": {"type": "string"}}}) == ("id", None)

    def test_resolve_with_overlay(self) -> None:
        """Test that an overlay entry renames the key and supplies a definition."""
        overlay = {"json_str": {"json_map": {"type": "map"}}}

        assert resolve_child("json_str", overlay) == ("json_map", {"type": "map"})

    @pytest.mark.parametrize(
        "entry",
        [
            {},
            {"a": {"type": "string"}, "b": {"type": "string"}},
            {"a": "string"},
            "a",
        ],
    )
    def test_malformed_overlay_entry(self, entry) -> None:
        """Test that overlay entries must be single {new_key: definition} pairs."""
        with pytest.raises(MalformedNode):
            resolve_child("col", {"col": entry})

    def test_validate_overlay(self) -> None:
        """Test overlay shape validation."""
        assert validate_overlay(None) is None
        with pytest.raises(MalformedNode):
            validate_overlay(["not", "a", "mapping"])
        with pytest.raises(MalformedNode):
            validate_overlay({"col": {}})

    def test_overlay_applies_to_top_level_columns(self) -> None:
        """Test that the overlay renames and retypes a top-level column."""
        overlay = {"a": {"b": {"type": "long"}}}

        root = SchemaTreeBuilder(overlay).build_document({"a": {"type": "string"}})

        assert root.field_names() == ["b"]
        assert root.fields[0].node == PrimitiveNode(kind=TypeKeyword.LONG)

    def test_overlay_not_applied_under_object_root(self) -> None:
        """Test that an explicit object root keeps its columns despite an overlay."""
        overlay = {"a": {"b": {"type": "long"}}}

        root = SchemaTreeBuilder(overlay).build_document(
            {"type": "object", "properties": {"a": {"type": "string"}}}
        )

        assert isinstance(root, StructNode)
        assert root.field_names() == ["a"]
        assert root.fields[0].node == PrimitiveNode(kind=TypeKeyword.STRING)

    def test_overlay_ignores_nested_fields(self) -> None:
        """Test that nested fields sharing an overlay key are not rewritten."""
        overlay = {"a": {"b": {"type": "long"}}}
        document = {
            "outer": {"type": "object", "properties": {"a": {"type": "string"}}},
            "group": {"a": {"type": "string"}},
        }

        root = SchemaTreeBuilder(overlay).build_document(document)

        assert root.fields[0].node.field_names() == ["a"]
        assert root.fields[1].node.field_names() == ["a"]

    def test_overlay_replacement_not_rewritten(self) -> None:
        """Test that a replacement definition is not itself subject to the overlay."""
        overlay = {
            "a": {"b": {"type": "object", "properties": {"a": {"type": "string"}}}},
        }

        root = SchemaTreeBuilder(overlay).build_document({"a": {"type": "integer"}})

        assert root.field_names() == ["b"]
        assert root.fields[0].node.field_names() == ["a"]

    def test_overlay_replacement_errors_propagate(self) -> None:
        """Test that invalid replacement definitions raise like any other node."""
        overlay = {"a": {"b": {"type": "null"}}}

        with pytest.raises(UnsupportedType) as exc_info:
            SchemaTreeBuilder(overlay).build_document({"a": {"type": "string"}})

        assert exc_info.value.path == "b"
