"""Command-line interface for iceberg-ddl.

This module provides a CLI for compiling JSON schema files into DDL column
lists, displaying the compiled columns, and rendering complete
CREATE TABLE statements for Iceberg tables.
"""

import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table as RichTable
from typing_extensions import Annotated

from iceberg_ddl.compiler import ColumnCompiler
from iceberg_ddl.config import Config
from iceberg_ddl.errors import SchemaError
from iceberg_ddl.generator.create_table import TableDefinition, generate_create_table
from iceberg_ddl.logging_config import configure_logging, get_logger
from iceberg_ddl.schema_tree.overlay import MappingOverlay, validate_overlay

app = typer.Typer(
    name="iceberg-ddl",
    help="Compile JSON schema files into Athena/Iceberg DDL column definitions",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)
logger = get_logger(__name__)

MappingOption = Annotated[
    Optional[Path],
    typer.Option("--mapping", "-m", help="JSON file with column renames and type overrides"),
]
OutputOption = Annotated[
    Optional[Path],
    typer.Option("--output", "-o", help="Output file path (stdout if not specified)"),
]


def get_config(schema_dir: Optional[Path] = None) -> Config:
    """Get configuration from environment or CLI options and set up logging.

    Args:
        schema_dir: Override the schema directory from environment

    Returns:
        Config instance
    """
    config = Config()

    if schema_dir:
        config.schema_dir = schema_dir

    configure_logging(config.log_level, config.log_format)
    return config


def load_mapping(mapping_file: Optional[Path]) -> Optional[MappingOverlay]:
    """Load a column overlay from a JSON file.

    Args:
        mapping_file: Path to the mapping file, or None

    Returns:
        The overlay mapping, or None if no file was given

    Raises:
        SchemaError: If the file is not valid JSON or has the wrong shape
    """
    if mapping_file is None:
        return None
    try:
        overlay = json.loads(mapping_file.read_text(encoding="utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise SchemaError(f"Mapping file {mapping_file} is not valid JSON: {e}") from e
    return validate_overlay(overlay)


def write_output(text: str, output: Optional[Path], what: str) -> None:
    """Write text to a file, or to stdout if no file is given."""
    if output:
        output.write_text(text + "\n")
        console.print(f"[green]✓[/green] {what} written to {output}")
    else:
        typer.echo(text)


@app.command()
def columns(
    schema_file: Annotated[Path, typer.Argument(help="JSON schema file of the table")],
    mapping: MappingOption = None,
    output: OutputOption = None,
    schema_dir: Annotated[
        Optional[Path], typer.Option("--schema-dir", help="Directory to resolve schema files in")
    ] = None,
) -> None:
    """Compile a schema file into a comma separated DDL column list.

    Example:
        iceberg-ddl columns example_table.schema.json

        iceberg-ddl columns example_table.schema.json --mapping mapping.json
    """
    try:
        config = get_config(schema_dir)
        schema_path = config.resolve_schema_path(schema_file)
        logger.info("compiling_schema", schema_file=str(schema_path))

        compiler = ColumnCompiler(load_mapping(mapping))
        column_list = compiler.compile(schema_path.read_bytes())

        write_output(column_list, output, "Column list")

    except (SchemaError, OSError) as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command(name="show-schema")
def show_schema(
    schema_file: Annotated[Path, typer.Argument(help="JSON schema file of the table")],
    mapping: MappingOption = None,
    schema_dir: Annotated[
        Optional[Path], typer.Option("--schema-dir", help="Directory to resolve schema files in")
    ] = None,
) -> None:
    """Display the compiled columns of a schema file as a table.

    Example:
        iceberg-ddl show-schema example_table.schema.json
    """
    try:
        config = get_config(schema_dir)
        schema_path = config.resolve_schema_path(schema_file)

        compiler = ColumnCompiler(load_mapping(mapping))
        definitions = compiler.column_definitions(schema_path.read_bytes())

        rich_table = RichTable(title=f"Columns: {schema_path.name}")
        rich_table.add_column("Column Name", style="cyan", no_wrap=True)
        rich_table.add_column("Data Type", style="magenta")
        for column in definitions:
            rich_table.add_row(column.name, column.sql_type)

        console.print(rich_table)

    except (SchemaError, OSError) as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command(name="create-table")
def create_table(
    table_name: Annotated[str, typer.Argument(help="Name of the Iceberg table")],
    schema_file: Annotated[Path, typer.Argument(help="JSON schema file of the table")],
    bucket: Annotated[str, typer.Option("--bucket", "-b", help="S3 bucket for the table data")],
    bucket_prefix: Annotated[
        str, typer.Option("--bucket-prefix", help="S3 prefix ending with '/'")
    ] = "",
    partition: Annotated[
        Optional[List[str]],
        typer.Option("--partition", "-p", help="Partition expression, can be repeated"),
    ] = None,
    extra_column: Annotated[
        Optional[List[str]],
        typer.Option("--extra-column", "-e", help="Extra 'name type' column, can be repeated"),
    ] = None,
    mapping: MappingOption = None,
    output: OutputOption = None,
    schema_dir: Annotated[
        Optional[Path], typer.Option("--schema-dir", help="Directory to resolve schema files in")
    ] = None,
) -> None:
    """Render a CREATE TABLE statement for an Iceberg table.

    Example:
        iceberg-ddl create-table example_table example_table.schema.json --bucket my-bucket

        iceberg-ddl create-table example_table schema.json -b my-bucket -p uid -p "hour(ts)"
    """
    try:
        config = get_config(schema_dir)
        definition = TableDefinition(
            table_name=table_name,
            bucket_name=bucket,
            bucket_prefix=bucket_prefix,
            schema_file=config.resolve_schema_path(schema_file),
            mapping=load_mapping(mapping),
            partitioned_by=partition or [],
            extra_columns=extra_column or [],
        )
        logger.info("rendering_create_table", table_name=table_name)

        write_output(generate_create_table(definition), output, "CREATE TABLE statement")

    except (ValueError, OSError) as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
