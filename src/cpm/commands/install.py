"""Install command."""

from pathlib import Path

import click

from cpm.cli.output import user_output
from cpm.commands.common import get_context, run_async
from cpm.models.installation import InstallStage
from cpm.operations.install import install_package
from cpm.operations.platforms import resolve_platforms


@click.command()
@click.argument("package")
@click.option(
    "--platform",
    "-p",
    "platform",
    default=None,
    help="claude-code, cursor, or all (defaults to the configured platform)",
)
@click.pass_context
def install(click_ctx: click.Context, package: str, platform: str | None) -> None:
    """Install a package.

    Bare names get the @cpm/ scope.

    Examples:

        cpm install commit-skill

        cpm install @official/github-mcp --platform cursor
    """
    ctx = get_context(click_ctx)
    platforms = resolve_platforms(ctx.paths, platform)

    report = run_async(ctx, install_package(ctx, package, Path.cwd(), platforms=platforms))

    if report.stage == InstallStage.FAILED and report.failure is not None and not report.results:
        user_output(f"Error: {report.failure.message}")
        raise SystemExit(1)

    for result in report.succeeded:
        user_output(f"✓ Installed {report.package_name} for {result.platform}")
        for path in result.paths:
            user_output(f"    {path}")

    for result in report.failed:
        user_output(f"✗ {result.platform}: {result.error}")

    if report.needs_configuration:
        user_output(
            f"Warning: {report.package_name} was registered with a bare launcher. "
            "Edit its mcpServers entry to add the server arguments."
        )

    if report.stage == InstallStage.FAILED:
        raise SystemExit(1)
