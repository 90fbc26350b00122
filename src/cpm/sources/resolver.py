"""Manifest resolution across prioritized sources."""

import logging

from cpm.errors import ManifestNotFoundError
from cpm.models.manifest import PackageManifest
from cpm.models.registry import RegistryEntry
from cpm.sources.abc import FetchContext, ManifestSource

logger = logging.getLogger(__name__)


class ManifestResolver:
    """Try sources in priority order and return the first manifest produced.

    A source returning None and a source raising are handled the same way:
    the failure is logged and the next source is tried. With the registry
    synthesis source last in the chain, resolve() always returns a manifest.
    """

    def __init__(self, sources: list[ManifestSource]) -> None:
        self._sources = sorted(sources, key=lambda s: s.priority)

    @property
    def sources(self) -> list[ManifestSource]:
        return list(self._sources)

    def source_names(self) -> list[str]:
        """Source names in the order they are tried."""
        return [source.name for source in self._sources]

    async def resolve(self, entry: RegistryEntry, context: FetchContext) -> PackageManifest:
        """Resolve a manifest for a registry entry.

        Raises:
            ManifestNotFoundError: If every source declined (only possible
                without a terminal source in the chain)
        """
        tried: list[str] = []
        for source in self._sources:
            if not source.can_attempt(entry):
                continue
            tried.append(source.name)
            try:
                manifest = await source.resolve(entry, context)
            except Exception as e:
                logger.debug("Source %s failed for %s: %s", source.name, entry.name, e)
                continue
            if manifest is not None:
                logger.debug("Resolved %s from source %s", entry.name, source.name)
                return manifest
            logger.debug("Source %s had no manifest for %s", source.name, entry.name)

        raise ManifestNotFoundError(entry.name, tried)
