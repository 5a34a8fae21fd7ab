"""Column overlay resolution.

A schema document is often too limited to describe the columns a table
actually needs, so callers can pass a mapping that renames a column and
replaces its definition::

    {
        "json_str": {
            "json_map": {
                "type": "map",
                "properties": {"key": {"type": "string"}, "value": {"type": "integer"}}
            }
        }
    }

Overlay entries are only consulted for the table's top-level columns. Nested
fields that share a name with an overlay key are left untouched, and a
replacement definition is never itself rewritten.
"""

from typing import Any, Mapping, Optional, Tuple

from iceberg_ddl.errors import MalformedNode

MappingOverlay = Mapping[str, Mapping[str, Any]]


def resolve_child(
    key: str, overlay: Optional[MappingOverlay] = None
) -> Tuple[str, Optional[Mapping[str, Any]]]:
    """Resolve a column key against an overlay.

    Args:
        key: The column key as declared in the schema document.
        overlay: Optional mapping of original key to ``{new_key: definition}``.

    Returns:
        Tuple of (effective key, replacement definition). The replacement is
        None when the original subtree should be used.

    Raises:
        MalformedNode: If the overlay entry is not a single-entry mapping with
            a mapping as its value.
    """
    if not overlay or key not in overlay:
        return key, None

    entry = overlay[key]
    if not isinstance(entry, Mapping) or len(entry) != 1:
        raise MalformedNode(
            "Overlay entry must map to exactly one {new_key: definition} pair", path=key
        )

    new_key, definition = next(iter(entry.items()))
    if not isinstance(new_key, str) or not isinstance(definition, Mapping):
        raise MalformedNode(
            "Overlay entry must map a string key to a definition object", path=key
        )

    return new_key, definition


def validate_overlay(overlay: Any) -> Optional[MappingOverlay]:
    """Check the outer shape of an overlay loaded from an untyped source.

    Args:
        overlay: The decoded overlay value, or None.

    Returns:
        The overlay unchanged.

    Raises:
        MalformedNode: If the overlay is not a mapping of string keys to mappings.
    """
    if overlay is None:
        return None
    if not isinstance(overlay, Mapping):
        raise MalformedNode("Overlay must be a JSON object")
    for key in overlay:
        resolve_child(key, overlay)
    return overlay
