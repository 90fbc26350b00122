"""Abstract base class for package type handlers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from cpm.constants import PackageType
from cpm.models.manifest import PackageManifest


@dataclass(frozen=True)
class InstallContext:
    """Where an install runs and where extracted package files are.

    Attributes:
        project_root: Project directory, for project-scoped platforms
        package_dir: Directory holding the package's own files, if any were
            downloaded
    """

    project_root: Path
    package_dir: Path | None = None


@dataclass(frozen=True)
class UninstallContext:
    """Where an uninstall runs."""

    project_root: Path


class PackageHandler(ABC):
    """Writes and removes one package type for one platform."""

    package_type: PackageType

    @abstractmethod
    async def install(self, manifest: PackageManifest, context: InstallContext) -> list[Path]:
        """Install a package.

        Args:
            manifest: Validated manifest
            context: Project root and downloaded package files

        Returns:
            Absolute paths of files written (may be empty)
        """
        ...

    @abstractmethod
    async def uninstall(self, package_name: str, context: UninstallContext) -> list[Path]:
        """Remove a package installed by this handler.

        Args:
            package_name: Package name as given by the user
            context: Project root

        Returns:
            Absolute paths removed (empty if nothing was installed)
        """
        ...
