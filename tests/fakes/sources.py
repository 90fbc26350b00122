"""Scripted ManifestSource for resolver and install tests."""

from cpm.models.manifest import PackageManifest
from cpm.models.registry import RegistryEntry
from cpm.sources.abc import FetchContext, ManifestSource


class ScriptedSource(ManifestSource):
    """Returns a fixed manifest, None, or raises a fixed exception.

    All state is provided via constructor using keyword arguments.
    """

    def __init__(
        self,
        *,
        name: str,
        priority: int,
        manifest: PackageManifest | None = None,
        error: Exception | None = None,
        applies: bool = True,
    ) -> None:
        self.name = name
        self.priority = priority
        self._manifest = manifest
        self._error = error
        self._applies = applies
        self._calls: list[str] = []

    @property
    def calls(self) -> list[str]:
        """Entry names resolve() was called with."""
        return self._calls.copy()

    def can_attempt(self, entry: RegistryEntry) -> bool:
        return self._applies

    async def resolve(
        self, entry: RegistryEntry, context: FetchContext
    ) -> PackageManifest | None:
        self._calls.append(entry.name)
        if self._error is not None:
            raise self._error
        return self._manifest
