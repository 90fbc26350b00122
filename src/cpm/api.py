"""Public API for programmatic use.

Each function takes a CpmContext so callers decide where files go and how
HTTP is done. CLI commands are thin wrappers over these.
"""

from pathlib import Path

from cpm.constants import PackageType, Platform, SearchSort
from cpm.context import CpmContext
from cpm.models.installation import InstallationResult, InstalledPackage, PackageInstallReport
from cpm.models.manifest import PackageManifest
from cpm.models.registry import RegistryEntry, SearchResult
from cpm.operations.install import install_manifest, install_package
from cpm.operations.list_installed import list_installed as _list_installed
from cpm.operations.uninstall import uninstall_package


async def search(
    ctx: CpmContext,
    query: str | None = None,
    *,
    type: PackageType | None = None,
    platform: Platform | None = None,
    sort: SearchSort = "downloads",
    limit: int = 10,
    offset: int = 0,
) -> SearchResult:
    """Search the registry."""
    return await ctx.registry.search(
        query, type=type, platform=platform, sort=sort, limit=limit, offset=offset
    )


async def get_package(ctx: CpmContext, name: str) -> RegistryEntry | None:
    """Exact-name registry lookup."""
    return await ctx.registry.get_package(name)


async def install(
    ctx: CpmContext,
    manifest: PackageManifest,
    project_root: Path,
    *,
    package_dir: Path | None = None,
    platforms: list[Platform] | None = None,
) -> list[InstallationResult]:
    """Install an already resolved manifest."""
    return await install_manifest(
        ctx, manifest, project_root, package_dir=package_dir, platforms=platforms
    )


async def install_by_name(
    ctx: CpmContext,
    name: str,
    project_root: Path,
    *,
    platforms: list[Platform] | None = None,
) -> PackageInstallReport:
    """Look up, resolve and install a package."""
    return await install_package(ctx, name, project_root, platforms=platforms)


async def uninstall(
    ctx: CpmContext,
    name: str,
    project_root: Path,
    *,
    platforms: list[Platform] | None = None,
) -> list[InstallationResult]:
    """Remove a package from the given platforms (all by default)."""
    return await uninstall_package(ctx, name, project_root, platforms=platforms)


def list_installed(
    ctx: CpmContext,
    project_root: Path,
    *,
    platform: Platform | None = None,
) -> list[InstalledPackage]:
    """Installed packages, optionally for one platform."""
    platforms = [platform] if platform is not None else None
    return _list_installed(ctx, project_root, platforms=platforms)
