"""List command."""

from pathlib import Path

import click

from cpm.cli.output import machine_output, user_output
from cpm.commands.common import get_context
from cpm.constants import VALID_PLATFORMS, validate_platform
from cpm.operations.list_installed import list_installed


@click.command(name="list")
@click.option("--platform", "-p", type=click.Choice(VALID_PLATFORMS), default=None)
@click.pass_context
def list_cmd(click_ctx: click.Context, platform: str | None) -> None:
    """List installed packages."""
    ctx = get_context(click_ctx)
    platforms = [validate_platform(platform)] if platform else None

    packages = list_installed(ctx, Path.cwd(), platforms=platforms)
    if not packages:
        user_output("No packages installed")
        return

    for package in packages:
        version = f" v{package.version}" if package.version else ""
        machine_output(f"{package.name}{version}  [{package.type}, {package.platform}]")
