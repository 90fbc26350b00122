"""Search command."""

import click
from rich.console import Console
from rich.table import Table

from cpm.cli.output import user_output
from cpm.commands.common import get_context, run_async
from cpm.constants import PACKAGE_TYPES, SEARCH_SORT_OPTIONS, VALID_PLATFORMS
from cpm.models.registry import SearchResult, resolve_package_type


def _render(result: SearchResult) -> Table:
    table = Table(show_header=True, header_style="bold")
    table.add_column("name", style="cyan", no_wrap=True)
    table.add_column("type", no_wrap=True)
    table.add_column("version", no_wrap=True)
    table.add_column("downloads", justify="right", no_wrap=True)
    table.add_column("description")
    for entry in result.packages:
        table.add_row(
            entry.name,
            resolve_package_type(entry) or "-",
            entry.version,
            str(entry.downloads),
            entry.description,
        )
    return table


@click.command()
@click.argument("query", required=False)
@click.option("--type", "-t", "package_type", type=click.Choice(PACKAGE_TYPES), default=None)
@click.option("--platform", "-p", type=click.Choice(VALID_PLATFORMS), default=None)
@click.option("--sort", "-s", type=click.Choice(SEARCH_SORT_OPTIONS), default="downloads")
@click.option("--limit", "-l", type=click.IntRange(min=1), default=10)
@click.option("--offset", type=click.IntRange(min=0), default=0)
@click.pass_context
def search(
    click_ctx: click.Context,
    query: str | None,
    package_type: str | None,
    platform: str | None,
    sort: str,
    limit: int,
    offset: int,
) -> None:
    """Search the package registry."""
    ctx = get_context(click_ctx)
    result = run_async(
        ctx,
        ctx.registry.search(
            query,
            type=package_type,  # type: ignore[arg-type]
            platform=platform,  # type: ignore[arg-type]
            sort=sort,  # type: ignore[arg-type]
            limit=limit,
            offset=offset,
        ),
    )

    if not result.packages:
        user_output("No packages found")
        return

    console = Console()
    console.print(_render(result))
    console.print(f"Showing {len(result.packages)} of {result.total}")
