"""Removing packages from every platform."""

import logging
from pathlib import Path

from cpm.constants import VALID_PLATFORMS, Platform
from cpm.context import CpmContext
from cpm.handlers.abc import UninstallContext
from cpm.models.installation import InstallationResult
from cpm.security.paths import sanitize_folder_name

logger = logging.getLogger(__name__)


async def uninstall_package(
    ctx: CpmContext,
    name: str,
    project_root: Path,
    *,
    platforms: list[Platform] | None = None,
) -> list[InstallationResult]:
    """Remove a package wherever it might be installed.

    Every handler of every target platform runs; a handler that fails is
    logged and the rest still run.

    Args:
        ctx: Dependencies
        name: Package name, scoped or bare
        project_root: Project directory for project-scoped platforms
        platforms: Platforms to clean (defaults to all of them)

    Returns:
        One result per platform listing the paths removed

    Raises:
        SecurityValidationError: If name cannot be turned into a safe folder name
    """
    sanitize_folder_name(name)
    targets = platforms if platforms is not None else list(VALID_PLATFORMS)
    context = UninstallContext(project_root=project_root)

    results: list[InstallationResult] = []
    for platform in targets:
        result = await ctx.platforms[platform].uninstall(name, context)
        logger.debug("Uninstall %s on %s removed %d paths", name, platform, len(result.paths))
        results.append(result)
    return results


def is_not_found(results: list[InstallationResult]) -> bool:
    """True when an uninstall removed nothing anywhere."""
    return not any(result.paths for result in results)
