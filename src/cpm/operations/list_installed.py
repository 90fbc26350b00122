"""Listing installed packages."""

from pathlib import Path

from cpm.constants import VALID_PLATFORMS, Platform
from cpm.context import CpmContext
from cpm.models.installation import InstalledPackage


def list_installed(
    ctx: CpmContext,
    project_root: Path,
    *,
    platforms: list[Platform] | None = None,
) -> list[InstalledPackage]:
    """Installed packages for the given platforms (all by default)."""
    targets = platforms if platforms is not None else list(VALID_PLATFORMS)
    packages: list[InstalledPackage] = []
    for platform in targets:
        packages.extend(ctx.platforms[platform].list_installed(project_root))
    return packages
