"""Configuration management for iceberg-ddl.

This module provides a pydantic-based configuration system that loads settings
from environment variables (prefixed with ``ICEBERG_DDL_``) and an optional
``.env`` file.
"""

from pathlib import Path
from typing import Literal, Union

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Configuration settings for iceberg-ddl.

    Environment Variables:
        ICEBERG_DDL_SCHEMA_DIR: Directory that relative schema file names are resolved against
        ICEBERG_DDL_LOG_LEVEL: Log level for the CLI (e.g., 'DEBUG', 'INFO')
        ICEBERG_DDL_LOG_FORMAT: 'console' for human readable logs, 'json' for JSON lines

    Example:
        >>> config = Config()
        >>> config.resolve_schema_path("example_table.schema.json")
        PosixPath('src/schemas/example_table.schema.json')
    """

    model_config = SettingsConfigDict(
        env_prefix="ICEBERG_DDL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    schema_dir: Path = Field(
        default=Path("src/schemas"),
        description="Directory containing the JSON schema files",
    )

    log_level: str = Field(
        default="WARNING",
        description="Log level used by the CLI",
    )

    log_format: Literal["console", "json"] = Field(
        default="console",
        description="Log renderer used by the CLI",
    )

    def resolve_schema_path(self, schema_file: Union[Path, str]) -> Path:
        """Resolve a schema file name.

        Paths that exist as given are returned unchanged; anything else is
        looked up relative to ``schema_dir``.

        Args:
            schema_file: A path or a file name relative to the schema directory.

        Returns:
            The resolved path. Existence is not guaranteed.
        """
        path = Path(schema_file)
        if path.exists() or path.is_absolute():
            return path
        return self.schema_dir / path

    def __repr__(self) -> str:
        return (
            f"Config("
            f"schema_dir={str(self.schema_dir)!r}, "
            f"log_level={self.log_level!r}, "
            f"log_format={self.log_format!r}"
            f")"
        )


def load_config() -> Config:
    """Load configuration from environment variables.

    Returns:
        A Config instance with settings loaded from environment.
    """
    return Config()
