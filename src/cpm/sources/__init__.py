"""Manifest sources and the resolver that chains them."""

from cpm.sources.archive import ArchiveSource
from cpm.sources.embedded import EmbeddedSource
from cpm.sources.registry import RegistrySource
from cpm.sources.repository import RepositorySource
from cpm.sources.resolver import ManifestResolver


def create_default_resolver() -> ManifestResolver:
    """Resolver with every built-in source, ending with registry synthesis."""
    return ManifestResolver(
        sources=[
            RepositorySource(),
            ArchiveSource(),
            EmbeddedSource(),
            RegistrySource(),
        ]
    )


__all__ = [
    "ArchiveSource",
    "EmbeddedSource",
    "ManifestResolver",
    "RegistrySource",
    "RepositorySource",
    "create_default_resolver",
]
