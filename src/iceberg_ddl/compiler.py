"""Compile a schema document into a DDL column list.

This is the main entry point of the package. A schema document is decoded,
converted into a schema tree (applying the optional column overlay) and
rendered as the comma separated ``name type`` list used inside a
``CREATE TABLE (...)`` statement.

Example:
    >>> compile_schema(b'{"id": {"type": "string"}, "ts": {"type": "timestamp"}}')
    'id string, ts bigint'
"""

import json
from pathlib import Path
from typing import Any, List, Optional, Union

from iceberg_ddl.errors import InvalidDocument
from iceberg_ddl.generator.ddl_types import ColumnDefinition, ColumnListGenerator
from iceberg_ddl.logging_config import get_logger
from iceberg_ddl.schema_tree.builder import SchemaTreeBuilder
from iceberg_ddl.schema_tree.nodes import FieldContainerNode
from iceberg_ddl.schema_tree.overlay import MappingOverlay

logger = get_logger(__name__)


def load_schema_document(document: Union[bytes, str]) -> Any:
    """Decode a raw schema document.

    Args:
        document: UTF-8 encoded JSON bytes, or an already decoded JSON string.

    Returns:
        The decoded JSON value. Object key order is preserved.

    Raises:
        InvalidDocument: If the document is not valid UTF-8 JSON.
    """
    try:
        if isinstance(document, bytes):
            document = document.decode("utf-8")
        return json.loads(document)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise InvalidDocument(f"Schema document is not valid JSON: {e}") from e


class ColumnCompiler:
    """Compiles a schema document into DDL column definitions.

    Attributes:
        overlay: Optional column overlay applied to the top-level columns.
    """

    def __init__(self, overlay: Optional[MappingOverlay] = None):
        self.overlay = overlay

    def build_tree(self, document: Union[bytes, str]) -> FieldContainerNode:
        """Decode a document and build its schema tree."""
        data = load_schema_document(document)
        return SchemaTreeBuilder(self.overlay).build_document(data)

    def column_definitions(self, document: Union[bytes, str]) -> List[ColumnDefinition]:
        """Compile a document into an ordered list of column definitions."""
        root = self.build_tree(document)
        return ColumnListGenerator(root).columns()

    def compile(self, document: Union[bytes, str]) -> str:
        """Compile a document into a comma separated column list.

        Raises:
            SchemaError: Any subclass, on the first invalid node encountered.
        """
        generator = ColumnListGenerator(self.build_tree(document))
        column_list = generator.generate()
        logger.debug("columns_compiled", column_count=len(generator.root.fields))
        return column_list


def compile_schema(document: Union[bytes, str], overlay: Optional[MappingOverlay] = None) -> str:
    """Convenience function to compile a schema document into a column list.

    Args:
        document: The raw JSON schema document.
        overlay: Optional mapping used to rename columns and replace their definitions,
            in the form ``{"existing_col": {"new_col": {"type": "new_type"}}}``.

    Returns:
        A single string with comma separated column definitions,
        e.g. ``id string, ts bigint``.
    """
    return ColumnCompiler(overlay).compile(document)


def compile_schema_file(
    file_path: Union[str, Path], overlay: Optional[MappingOverlay] = None
) -> str:
    """Read a local JSON schema file and compile it into a column list.

    Args:
        file_path: Path to the JSON file containing the schema.
        overlay: Optional column overlay, see ``compile_schema``.

    Returns:
        A single string with comma separated column definitions.
    """
    path = Path(file_path)
    document = path.read_bytes()
    logger.debug("schema_document_loaded", path=str(path), size=len(document))
    return compile_schema(document, overlay)
