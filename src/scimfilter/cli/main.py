import json
import os
import sys
import click
from rich.console import Console
from rich.table import Table
from rich.traceback import install as install_rich_traceback
from scimfilter.config import settings
from scimfilter.exceptions import InvalidFilterSyntax
from scimfilter.filters import COLUMN_MAPS, build_filter, evaluate_filter, parse_scim_filter
from scimfilter.schemas import ResourceType
from scimfilter.utils.attribute_projection import apply_attribute_projection_to_list
from scimfilter.utils.logging import setup_logging

console = Console()


def _load_resources(path: str) -> list:
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    # Accept a single resource, a list, or a ListResponse body
    if isinstance(data, dict) and "Resources" in data:
        return data["Resources"]
    if isinstance(data, dict):
        return [data]
    return data


def _parse_or_exit(filter_string: str):
    try:
        return parse_scim_filter(filter_string)
    except InvalidFilterSyntax as e:
        console.print(f"[red]✗[/red] {e.reason}")
        sys.exit(1)


@click.group()
@click.version_option(version="0.1.0", prog_name="scimfilter")
def cli():
    """scimfilter - SCIM 2.0 filter and attribute projection toolkit

    Parse and evaluate RFC 7644 filter expressions and preview
    attributes/excludedAttributes projections against JSON resources.
    """
    install_rich_traceback(show_locals=settings.debug, suppress=[])
    setup_logging()


@cli.command()
@click.argument("filter_string")
def parse(filter_string: str):
    """Print the AST of a SCIM filter as JSON"""
    ast = _parse_or_exit(filter_string)
    console.print_json(json.dumps(ast.to_dict()))


@cli.command(name="eval")
@click.argument("filter_string")
@click.argument("resource_file", type=click.Path(exists=True, dir_okay=False))
def eval_command(filter_string: str, resource_file: str):
    """Print the resources in RESOURCE_FILE matching a SCIM filter"""
    ast = _parse_or_exit(filter_string)
    resources = _load_resources(resource_file)
    matches = [r for r in resources if evaluate_filter(ast, r)]
    console.print(f"[bold]{len(matches)}[/bold] of {len(resources)} resources match")
    console.print_json(json.dumps(matches))


@cli.command()
@click.argument("filter_string")
@click.option("--resource-type", "-t", type=click.Choice([t.value for t in ResourceType]), default="User", help="Resource type whose column map is used")
def pushdown(filter_string: str, resource_type: str):
    """Show whether a filter is pushed down to the database"""
    try:
        result = build_filter(filter_string, COLUMN_MAPS[ResourceType(resource_type)])
    except InvalidFilterSyntax as e:
        console.print(f"[red]✗[/red] {e.reason}")
        sys.exit(1)

    if result.fetch_all:
        console.print("[yellow]In-memory[/yellow] fetch all rows and evaluate the filter")
    else:
        console.print(f"[green]Pushed down[/green] {json.dumps(result.db_predicate)}")


@cli.command()
@click.argument("resource_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--attributes", "-a", default=None, help="Comma-separated attributes to return")
@click.option("--excluded-attributes", "-x", default=None, help="Comma-separated attributes to exclude")
def project(resource_file: str, attributes: str, excluded_attributes: str):
    """Apply attributes/excludedAttributes to the resources in RESOURCE_FILE"""
    resources = _load_resources(resource_file)
    console.print_json(json.dumps(apply_attribute_projection_to_list(resources, attributes, excluded_attributes)))


@cli.command()
@click.option('--show-env', is_flag=True, help='Show environment file location')
def config(show_env: bool):
    """Display current configuration"""
    if show_env:
        env_file = os.path.join(os.getcwd(), '.env')
        if os.path.exists(env_file):
            console.print(f"[green]✓[/green] Environment file: {env_file}")
        else:
            console.print(f"[yellow]⚠[/yellow]  No .env file found at: {env_file}")

    table = Table(title="scimfilter Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Environment", settings.environment)
    table.add_row("Debug Mode", "On" if settings.debug else "Off")
    table.add_row("Log Level", settings.log_level)
    table.add_row("Database URL", settings.database_url)
    table.add_row("Default Page Size", str(settings.default_page_size))
    table.add_row("Max Page Size", str(settings.max_page_size))

    console.print(table)


if __name__ == "__main__":
    cli()
