"""CREATE TABLE statement generation for Iceberg tables in Athena."""

from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from iceberg_ddl.compiler import compile_schema_file
from iceberg_ddl.schema_tree.overlay import MappingOverlay

DEFAULT_TABLE_PROPERTIES: Dict[str, str] = {
    "table_type": "ICEBERG",
    "format": "parquet",
    "write_compression": "snappy",
}


class TableDefinition(BaseModel):
    """Properties that define an Iceberg table created by an Athena DDL query.

    Attributes:
        table_name: Name of the Iceberg table. Also used as the last S3 path segment.
        bucket_name: Name of the S3 bucket where the table data is stored.
        bucket_prefix: Optional S3 prefix, must end with '/'.
            Resolves to 's3://{bucket_name}/{bucket_prefix}{table_name}'.
        columns: Pre-rendered column list. Takes precedence over schema_file.
        schema_file: JSON schema file to compile the column list from.
        mapping: Optional column overlay used when compiling schema_file.
        extra_columns: Column definitions not included in the schema, e.g. ["ts timestamp"].
        partitioned_by: Partition expressions, e.g. ["id", "hour(ts)"].
        table_properties: TBLPROPERTIES key/value pairs.
    """

    model_config = ConfigDict(frozen=False)

    table_name: str = Field(..., min_length=1, description="The Iceberg table name")
    bucket_name: str = Field(..., min_length=1, description="S3 bucket holding the table data")
    bucket_prefix: str = Field(default="", description="Optional S3 prefix ending with '/'")
    columns: Optional[str] = Field(default=None, description="Pre-rendered column list")
    schema_file: Optional[Path] = Field(default=None, description="JSON schema file for the columns")
    mapping: Optional[MappingOverlay] = Field(default=None, description="Column overlay")
    extra_columns: List[str] = Field(default_factory=list, description="Additional column definitions")
    partitioned_by: List[str] = Field(default_factory=list, description="Partition expressions")
    table_properties: Dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_TABLE_PROPERTIES),
        description="TBLPROPERTIES of the table",
    )

    @model_validator(mode="after")
    def _check_column_source(self) -> "TableDefinition":
        if self.columns is None and self.schema_file is None:
            raise ValueError("Either 'columns' or 'schema_file' must be provided")
        return self

    def get_location(self) -> str:
        """Get the S3 location of the table data."""
        return f"s3://{self.bucket_name}/{self.bucket_prefix}{self.table_name}"


class CreateTableGenerator:
    """Generates a ``CREATE TABLE IF NOT EXISTS`` statement for an Iceberg table."""

    def __init__(self, definition: TableDefinition):
        """Initialize the generator with a table definition.

        Args:
            definition: The TableDefinition describing the table
        """
        self.definition = definition

    def generate(self) -> str:
        """Generate the complete CREATE TABLE statement.

        Returns:
            A single line statement, e.g.
            CREATE TABLE IF NOT EXISTS t (id string) LOCATION 's3://b/t' TBLPROPERTIES ('table_type'='ICEBERG', ...)
        """
        return "".join(
            [
                f"CREATE TABLE IF NOT EXISTS {self.definition.table_name} ",
                f"({self.get_column_list()}) ",
                self.get_partitioned_by(),
                f"LOCATION '{self.definition.get_location()}' ",
                f"TBLPROPERTIES ({self.get_table_properties()})",
            ]
        )

    def get_column_list(self) -> str:
        """Get the table's columns followed by any extra columns."""
        if self.definition.columns is not None:
            columns = self.definition.columns
        else:
            columns = compile_schema_file(self.definition.schema_file, self.definition.mapping)

        if self.definition.extra_columns:
            columns = f"{columns}, {', '.join(self.definition.extra_columns)}"
        return columns

    def get_partitioned_by(self) -> str:
        """Create the ``PARTITIONED BY`` clause.

        See https://iceberg.apache.org/docs/latest/spark-ddl/#partitioned-by.

        Returns:
            e.g. "PARTITIONED BY (id, hour(ts)) ", or "" if no partitions are specified.
        """
        if self.definition.partitioned_by:
            return f"PARTITIONED BY ({', '.join(self.definition.partitioned_by)}) "
        return ""

    def get_table_properties(self) -> str:
        """Render the TBLPROPERTIES key/value pairs."""
        return ", ".join(f"'{key}'='{value}'" for key, value in self.definition.table_properties.items())


def generate_create_table(definition: TableDefinition) -> str:
    """Convenience function to generate a CREATE TABLE statement.

    Args:
        definition: The TableDefinition describing the table

    Returns:
        A complete CREATE TABLE statement string
    """
    generator = CreateTableGenerator(definition)
    return generator.generate()
