"""Column name validation for Athena DDL.

Field names coming from a schema document may contain characters that are
illegal in an unquoted identifier, or may collide with keywords reserved by
the Athena DDL parser. ``sanitize_field_name`` handles both.
"""

import re
from typing import FrozenSet

# Keywords reserved in Athena DDL queries. When used as column names they must
# be quoted with backticks.
RESERVED_KEYWORDS: FrozenSet[str] = frozenset(
    [
        "all", "alter", "and", "array", "as", "authorization", "between", "bigint",
        "binary", "boolean", "both", "by", "case", "cashe", "cast", "char", "column",
        "conf", "constraint", "commit", "create", "cross", "cube", "current",
        "current_date", "current_timestamp", "cursor", "database", "date",
        "dayofweek", "decimal", "delete", "describe", "distinct", "double", "drop",
        "else", "end", "exchange", "exists", "extended", "external", "extract",
        "false", "fetch", "float", "floor", "following", "for", "foreign", "from",
        "full", "function", "grant", "group", "grouping", "having", "if", "import",
        "in", "inner", "insert", "int", "integer", "intersect", "interval", "into",
        "is", "join", "lateral", "left", "less", "like", "local", "macro", "map",
        "more", "none", "not", "null", "numeric", "of", "on", "only", "or", "order",
        "out", "outer", "over", "partialscan", "partition", "percent", "preceding",
        "precision", "preserve", "primary", "procedure", "range", "reads", "reduce",
        "regexp", "references", "revoke", "right", "rlike", "rollback", "rollup",
        "row", "rows", "select", "set", "smallint", "start", "table", "tablesample",
        "then", "time", "timestamp", "to", "transform", "trigger", "true", "truncate",
        "unbounded", "union", "uniquejoin", "update", "user", "using", "utc_timestamp",
        "values", "varchar", "views", "when", "where", "window", "with",
    ]
)  # fmt: skip

_ILLEGAL_CHARACTERS = re.compile(r"[^A-Za-z0-9_-]")


def is_reserved_keyword(name: str) -> bool:
    """Check whether a name is an Athena DDL reserved keyword (case-insensitive)."""
    return name.lower() in RESERVED_KEYWORDS


def sanitize_field_name(name: str) -> str:
    """Make a field name safe for use as a column name in DDL.

    - Removes any character other than letters, digits, underscore ``_`` and dash ``-``.
    - Surrounds reserved words with backticks, e.g. database -> `database`.

    The reserved word check is done on the original name, before stripping.
    Names must be sanitized exactly once: feeding a quoted name back in strips
    its backticks.

    Args:
        name: The raw field name from the schema document.

    Returns:
        The sanitized column name. Empty input yields an empty string.

    Example:
        >>> sanitize_field_name("table")
        '`table`'
        >>> sanitize_field_name("my col!")
        'mycol'
    """
    if not name:
        return ""

    stripped = _ILLEGAL_CHARACTERS.sub("", name)
    if is_reserved_keyword(name):
        return f"`{stripped}`"
    return stripped
