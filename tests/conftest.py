"""Shared fixtures for iceberg-ddl tests."""

import json
from pathlib import Path

import pytest


@pytest.fixture
def example_schema() -> dict:
    """A schema document covering every supported type keyword."""
    return {
        "uid": {"type": "string"},
        "active": {"type": "boolean"},
        "count": {"type": "integer"},
        "score": {"type": "number"},
        "ratio": {"type": "float"},
        "day": {"type": "date"},
        "created": {"type": "datetime"},
        "ts": {"type": "timestamp"},
        "big": {"type": "long"},
        "amount": {"type": "decimal", "properties": {"precision": 10, "scale": 2}},
        "tags": {"type": "array", "items": {"type": "string"}},
        "options": {
            "type": "map",
            "properties": {"key": {"type": "string"}, "value": {"type": "string"}},
        },
        "other": {
            "type": "object",
            "properties": {"col1": {"type": "integer"}, "col2": {"type": "float"}},
        },
    }


@pytest.fixture
def example_columns() -> str:
    """The column list compiled from ``example_schema``."""
    return (
        "uid string, active boolean, count int, score float, ratio float, "
        "day date, created timestamp, ts bigint, big bigint, amount decimal(10,2), "
        "tags array<string>, options map<string, string>, "
        "other struct<col1: int, col2: float>"
    )


@pytest.fixture
def schema_file(tmp_path: Path, example_schema: dict) -> Path:
    """Write ``example_schema`` to a temporary JSON file."""
    path = tmp_path / "example_table.schema.json"
    path.write_text(json.dumps(example_schema), encoding="utf-8")
    return path


@pytest.fixture
def mapping_file(tmp_path: Path) -> Path:
    """Write an overlay that turns ``uid`` into a map column ``uid_map``."""
    path = tmp_path / "mapping.json"
    path.write_text(
        json.dumps(
            {
                "uid": {
                    "uid_map": {
                        "type": "map",
                        "properties": {"key": {"type": "string"}, "value": {"type": "integer"}},
                    }
                }
            }
        ),
        encoding="utf-8",
    )
    return path
