"""Error types raised while compiling a schema document into DDL columns."""

from typing import Optional


class SchemaError(ValueError):
    """Base class for all schema compilation errors.

    Attributes:
        path: Dotted path of the offending field, if known (e.g., 'other.col1').
    """

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        self.path = path
        if path:
            message = f"{message} (at '{path}')"
        super().__init__(message)


class UnsupportedType(SchemaError):
    """The node uses a recognized type keyword that has no DDL equivalent (``null``)."""


class UnknownType(SchemaError):
    """The node's ``type`` is not one of the recognized type keywords."""


class InvalidRootType(SchemaError):
    """The document root is not a field grouping or an explicit object."""


class MalformedNode(SchemaError):
    """A composite node is missing required sibling keys or has invalid values."""


class InvalidDocument(SchemaError):
    """The raw schema document could not be decoded as JSON."""
