import logging

import click

from cpm.cli.output import user_output
from cpm.error_boundary import cli_error_boundary
from cpm.version import __version__

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])

# Track whether commands are registered
_commands_registered = False


class LazyGroup(click.Group):
    """Click Group that lazily loads commands."""

    def list_commands(self, ctx):
        """List available commands, registering them if needed."""
        if not _commands_registered:
            _register_commands()
        return super().list_commands(ctx)

    def get_command(self, ctx, cmd_name):
        """Get a command by name, registering if needed."""
        if not _commands_registered:
            _register_commands()
        return super().get_command(ctx, cmd_name)


@click.command(cls=LazyGroup, invoke_without_command=True, context_settings=CONTEXT_SETTINGS)
@click.version_option(version=__version__)
@click.option("--debug", is_flag=True, help="Log each resolution and install step")
@click.pass_context
def cli(ctx: click.Context, debug: bool) -> None:
    """Install rules, skills and MCP servers for AI coding assistants."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug

    if debug:
        logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")

    if ctx.invoked_subcommand is None:
        user_output(ctx.get_help())


def _register_commands() -> None:
    """Register all commands with the CLI group."""
    global _commands_registered

    if _commands_registered:
        return

    from cpm.commands.config import config_group
    from cpm.commands.install import install
    from cpm.commands.list_cmd import list_cmd
    from cpm.commands.search import search
    from cpm.commands.uninstall import uninstall

    cli.add_command(install)
    cli.add_command(uninstall)
    cli.add_command(search)
    cli.add_command(list_cmd)
    cli.add_command(config_group)

    _commands_registered = True


def main() -> None:
    """Entry point with error boundary."""
    cli_error_boundary(cli)()
