"""Config commands."""

import click

from cpm.cli.output import machine_output, user_output
from cpm.commands.common import get_context, run_async
from cpm.constants import DEFAULT_PLATFORM
from cpm.io.config_json import get_default_platform, set_default_platform


@click.group(name="config")
def config_group() -> None:
    """Show or change cpm settings."""


@config_group.command(name="show")
@click.pass_context
def show(click_ctx: click.Context) -> None:
    """Show current settings."""
    ctx = get_context(click_ctx)
    configured = get_default_platform(ctx.paths.config_file)
    machine_output(f"default platform: {configured or DEFAULT_PLATFORM}")
    machine_output(f"registry: {ctx.settings.registry_url}")


@config_group.command(name="set-platform")
@click.argument("platform")
@click.pass_context
def set_platform(click_ctx: click.Context, platform: str) -> None:
    """Set the platform used when --platform is omitted."""
    ctx = get_context(click_ctx)
    saved = run_async(ctx, set_default_platform(ctx.paths.config_file, platform))
    user_output(f"✓ Default platform set to {saved}")
