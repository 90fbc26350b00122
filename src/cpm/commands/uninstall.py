"""Uninstall command."""

from pathlib import Path

import click

from cpm.cli.output import user_output
from cpm.commands.common import get_context, run_async
from cpm.constants import VALID_PLATFORMS, validate_platform
from cpm.operations.uninstall import is_not_found, uninstall_package


@click.command()
@click.argument("package")
@click.option("--platform", "-p", "platform", default=None, help="Only this platform")
@click.pass_context
def uninstall(click_ctx: click.Context, package: str, platform: str | None) -> None:
    """Remove a package from every platform it is installed on."""
    ctx = get_context(click_ctx)
    platforms = [validate_platform(platform)] if platform else list(VALID_PLATFORMS)

    results = run_async(ctx, uninstall_package(ctx, package, Path.cwd(), platforms=platforms))

    if is_not_found(results):
        user_output(f"Package {package} is not installed")
        raise SystemExit(1)

    for result in results:
        for path in result.paths:
            user_output(f"✓ Removed {path}")
        if result.error:
            user_output(f"Warning: {result.platform}: {result.error}")
