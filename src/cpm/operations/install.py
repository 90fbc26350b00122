"""Installing packages across platforms.

An install moves through RESOLVING (registry lookup), FETCHING and
EXTRACTING (only when the manifest comes from an archive), WRITING (handlers
run on each platform) and ends in DONE or FAILED. Platforms are installed
concurrently and independently: one platform failing never affects another.
"""

import asyncio
import logging
import tempfile
from pathlib import Path

from cpm.constants import Platform
from cpm.context import CpmContext
from cpm.errors import CpmError
from cpm.handlers.abc import InstallContext
from cpm.models.installation import (
    InstallationResult,
    InstallStage,
    PackageInstallReport,
    StageFailure,
)
from cpm.models.manifest import McpContent, PackageManifest
from cpm.operations.platforms import resolve_platforms
from cpm.security.package_name import normalize_package_name, validate_package_name
from cpm.sources.abc import FetchContext

logger = logging.getLogger(__name__)


async def _install_on_platform(
    ctx: CpmContext,
    platform: Platform,
    manifest: PackageManifest,
    install_context: InstallContext,
) -> InstallationResult:
    adapter = ctx.platforms[platform]
    try:
        return await adapter.install(manifest, install_context)
    except CpmError as e:
        logger.debug("Install of %s on %s failed: %s", manifest.name, platform, e)
        return InstallationResult(success=False, platform=platform, error=str(e))
    except Exception as e:
        # One platform failing must not abort the others
        logger.debug("Install of %s on %s failed", manifest.name, platform, exc_info=True)
        return InstallationResult(success=False, platform=platform, error=str(e))


async def install_manifest(
    ctx: CpmContext,
    manifest: PackageManifest,
    project_root: Path,
    *,
    package_dir: Path | None = None,
    platforms: list[Platform] | None = None,
) -> list[InstallationResult]:
    """Install a resolved manifest on each platform concurrently.

    Args:
        ctx: Dependencies
        manifest: Manifest to install
        project_root: Project directory for project-scoped platforms
        package_dir: Directory holding the package's downloaded files, if any
        platforms: Target platforms (defaults to resolve_platforms(None))

    Returns:
        One result per platform, in the order the platforms were given
    """
    targets = platforms if platforms is not None else resolve_platforms(ctx.paths, None)
    install_context = InstallContext(project_root=project_root, package_dir=package_dir)
    return list(
        await asyncio.gather(
            *(_install_on_platform(ctx, p, manifest, install_context) for p in targets)
        )
    )


def classify_results(
    results: list[InstallationResult],
) -> tuple[list[InstallationResult], list[InstallationResult]]:
    """Split results into (succeeded, failed)."""
    succeeded = [r for r in results if r.success]
    failed = [r for r in results if not r.success]
    return succeeded, failed


def needs_configuration(manifest: PackageManifest) -> bool:
    """True for an MCP launcher that has no arguments yet.

    Registry synthesis produces `npx` with no arguments, which registers a
    server entry the user must still complete.
    """
    return isinstance(manifest.content, McpContent) and not manifest.content.args


async def install_package(
    ctx: CpmContext,
    name: str,
    project_root: Path,
    *,
    platforms: list[Platform] | None = None,
) -> PackageInstallReport:
    """Look up, resolve and install a package by name.

    Ordinary failures (unknown package, registry down, every platform
    failing) are reported in the returned report instead of raised.

    Raises:
        InvalidPackageNameError: If name is not a valid package name
    """
    validate_package_name(name)
    package_name = normalize_package_name(name)
    stage = InstallStage.RESOLVING

    def report_stage(next_stage: InstallStage) -> None:
        nonlocal stage
        logger.debug("%s: %s -> %s", package_name, stage.value, next_stage.value)
        stage = next_stage

    def failed(
        message: str,
        manifest: PackageManifest | None = None,
        results: list[InstallationResult] | None = None,
    ) -> PackageInstallReport:
        return PackageInstallReport(
            package_name=package_name,
            stage=InstallStage.FAILED,
            manifest=manifest,
            results=results or [],
            failure=StageFailure(stage=stage, message=message),
        )

    try:
        entry = await ctx.registry.get_package(package_name)
    except CpmError as e:
        return failed(str(e))
    if entry is None:
        return failed(f"Package {package_name} not found")

    targets = platforms if platforms is not None else resolve_platforms(ctx.paths, None)

    with tempfile.TemporaryDirectory(prefix="cpm-") as scratch:
        scratch_dir = Path(scratch)
        fetch_context = FetchContext(
            scratch_dir=scratch_dir,
            http=ctx.http,
            settings=ctx.settings,
            report_stage=report_stage,
        )
        try:
            manifest = await ctx.resolver.resolve(entry, fetch_context)
        except CpmError as e:
            return failed(str(e))

        report_stage(InstallStage.WRITING)
        results = await install_manifest(
            ctx,
            manifest,
            project_root,
            package_dir=scratch_dir,
            platforms=targets,
        )

    succeeded, failures = classify_results(results)
    if not succeeded:
        errors = "; ".join(f"{r.platform}: {r.error}" for r in failures)
        return failed(f"Installation failed on every platform ({errors})", manifest, results)

    report_stage(InstallStage.DONE)
    return PackageInstallReport(
        package_name=package_name,
        stage=InstallStage.DONE,
        manifest=manifest,
        results=results,
        needs_configuration=needs_configuration(manifest),
    )
