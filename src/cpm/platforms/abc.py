"""Base class for platform adapters."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from cpm.constants import Platform
from cpm.errors import CpmError
from cpm.handlers.abc import InstallContext, PackageHandler, UninstallContext
from cpm.handlers.handler_registry import HandlerRegistry
from cpm.models.installation import InstallationResult, InstalledPackage
from cpm.models.manifest import PackageManifest

logger = logging.getLogger(__name__)


class PlatformAdapter(ABC):
    """Installs packages for one AI assistant.

    Subclasses provide the handler set and the on-disk listing. Handler
    selection, result shaping and best-effort uninstall live here.
    """

    platform: Platform
    display_name: str

    def __init__(self, handlers: HandlerRegistry) -> None:
        self._handlers = handlers

    @property
    def handlers(self) -> HandlerRegistry:
        return self._handlers

    def skip_reason(self, manifest: PackageManifest) -> str | None:
        """Why this platform declines a package, or None to install it."""
        return None

    def select_handler(self, manifest: PackageManifest) -> PackageHandler | None:
        """The declared type's handler, else one matching the content variant."""
        if self._handlers.has_handler(manifest.type):
            return self._handlers.get_handler(manifest.type)
        return self._handlers.handler_for_payload(manifest)

    async def install(
        self, manifest: PackageManifest, context: InstallContext
    ) -> InstallationResult:
        """Install a manifest on this platform.

        Handler errors propagate; the orchestrator turns them into failed
        results.
        """
        reason = self.skip_reason(manifest)
        if reason is not None:
            logger.warning("%s", reason)
            return InstallationResult(success=True, platform=self.platform)

        handler = self.select_handler(manifest)
        if handler is None:
            logger.warning(
                "Package type '%s' has nothing to install on %s",
                manifest.type,
                self.display_name,
            )
            return InstallationResult(success=True, platform=self.platform)

        paths = await handler.install(manifest, context)
        return InstallationResult(success=True, platform=self.platform, paths=paths)

    async def uninstall(self, package_name: str, context: UninstallContext) -> InstallationResult:
        """Run every handler's uninstall. One failing handler does not stop the rest."""
        removed: list[Path] = []
        errors: list[str] = []
        for handler in self._handlers.handlers():
            try:
                removed.extend(await handler.uninstall(package_name, context))
            except (CpmError, OSError) as e:
                logger.warning(
                    "Could not remove %s %s from %s: %s",
                    handler.package_type,
                    package_name,
                    self.display_name,
                    e,
                )
                errors.append(str(e))

        return InstallationResult(
            success=not errors or bool(removed),
            platform=self.platform,
            paths=removed,
            error="; ".join(errors) if errors else None,
        )

    @abstractmethod
    def list_installed(self, project_root: Path) -> list[InstalledPackage]:
        """Packages currently installed for this platform.

        Args:
            project_root: Project directory, for project-scoped installs

        Returns:
            Installed packages, directories first, then MCP servers
        """
        ...
