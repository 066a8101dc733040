"""Command line entry point for catalog discovery and query execution."""
import pathlib
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme
from rich.tree import Tree
from typing_extensions import Annotated

from fedsql.common.errors import FederationError
from fedsql.common.logger import configure_logging
from fedsql.common.settings import settings
from fedsql.configs import get_datasource, load_datasources
from fedsql.connectors import ConnectorRegistry
from fedsql.sdk import BackendConnector, SchemaCatalog

custom_theme = Theme({
    "info": "cyan",
    "warning": "yellow",
    "error": "bold red",
    "success": "bold green",
})

console = Console(theme=custom_theme)

app = typer.Typer(
    name="fedsql",
    help="Discover federated catalogs and run queries against their backends.",
    no_args_is_help=True,
    add_completion=False,
)

ConfigOption = Annotated[Optional[pathlib.Path], typer.Option("--config", help="Path to datasource config YAML")]
IdOption = Annotated[str, typer.Option("--id", help="Datasource ID from the config file")]


def print_error(message: str) -> None:
    console.print(f"[error]✘ {escape(message)}[/error]")


def _connector_for(datasource_id: str, config: Optional[pathlib.Path], strict_ordering: bool = False) -> BackendConnector:
    path = config or pathlib.Path(settings.datasource_config_path)
    datasource = get_datasource(load_datasources(path), datasource_id)
    return ConnectorRegistry().create(datasource, strict_catalog_ordering=strict_ordering)


def render_catalog(catalog: SchemaCatalog, title: str) -> Tree:
    tree = Tree(f"[bold]{escape(title)}[/bold]")
    for schema in catalog.values():
        schema_node = tree.add(f"[cyan]{escape(schema.name)}[/cyan]")
        for table in schema.tables.values():
            table_node = schema_node.add(f"[magenta]{escape(table.name)}[/magenta]")
            for column in table.columns:
                table_node.add(f"{escape(column.name)} [dim]{escape(str(column.type))}[/dim]")
    return tree


@app.callback()
def global_callback(
    log_level: Annotated[Optional[str], typer.Option("--log-level", help="Logging level, e.g. DEBUG")] = None,
    json_logs: Annotated[Optional[bool], typer.Option("--json-logs/--text-logs", help="Emit JSON log lines")] = None,
):
    """
    fedsql CLI Entry Point.
    """
    configure_logging(
        level=log_level or settings.log_level,
        json_format=settings.log_json if json_logs is None else json_logs,
    )


@app.command()
def connectors():
    """
    List the registered connector types.
    """
    registry = ConnectorRegistry()
    table = Table(title="Registered Connectors")
    table.add_column("Type", style="cyan", no_wrap=True)
    table.add_column("Class", style="magenta")

    for name in registry.available():
        cls = registry.get(name)
        table.add_row(name, f"{cls.__module__}.{cls.__name__}")

    console.print(table)


@app.command()
def schemas(
    id: IdOption,
    config: ConfigOption = None,
    strict_ordering: Annotated[
        Optional[bool],
        typer.Option("--strict-ordering/--lenient-ordering", help="Reject catalogs not grouped by schema and table"),
    ] = None,
):
    """
    Discover and print the schema catalog of a datasource.
    """
    strict = settings.strict_catalog_ordering if strict_ordering is None else strict_ordering
    try:
        connector = _connector_for(id, config, strict)
        catalog = connector.get_schemas()
    except (FederationError, FileNotFoundError) as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    console.print(render_catalog(catalog, id))
    table_count = sum(len(s.tables) for s in catalog.values())
    console.print(f"[success]✔ {len(catalog)} schema(s), {table_count} table(s)[/success]")


@app.command()
def query(
    sql: Annotated[str, typer.Argument(help="SQL to run on the datasource's backend")],
    id: IdOption,
    config: ConfigOption = None,
    limit: Annotated[Optional[int], typer.Option("--limit", min=1, help="Maximum number of rows to print")] = None,
):
    """
    Run SQL on a datasource and print the first rows.
    """
    max_rows = limit or settings.preview_row_limit
    table = Table(show_header=False)
    truncated = False
    try:
        connector = _connector_for(id, config)
        with connector.execute_query(sql) as rows:
            for row in rows:
                if len(table.rows) >= max_rows:
                    truncated = True
                    break
                table.add_row(*("NULL" if v is None else escape(str(v)) for v in row))
    except (FederationError, FileNotFoundError) as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    console.print(table)
    suffix = f" (limited to {max_rows})" if truncated else ""
    console.print(f"[info]{len(table.rows)} row(s){suffix}[/info]")


if __name__ == "__main__":
    app()
