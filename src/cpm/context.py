"""Context for dependency injection."""

from dataclasses import dataclass
from pathlib import Path

from cpm.constants import Platform
from cpm.integrations.http.abc import HttpClient
from cpm.integrations.http.fake import FakeHttpClient
from cpm.integrations.http.real import RealHttpClient
from cpm.paths import CpmPaths
from cpm.platforms import create_platforms
from cpm.platforms.abc import PlatformAdapter
from cpm.registry_client import RegistryClient
from cpm.settings import CpmSettings
from cpm.sources import create_default_resolver
from cpm.sources.resolver import ManifestResolver


@dataclass(frozen=True)
class CpmContext:
    """Everything an operation needs, injected once.

    This is a frozen dataclass holding all dependencies. Use create() for
    production and for_test() in tests.
    """

    paths: CpmPaths
    settings: CpmSettings
    http: HttpClient
    registry: RegistryClient
    resolver: ManifestResolver
    platforms: dict[Platform, PlatformAdapter]

    @classmethod
    def create(cls) -> "CpmContext":
        """Production context rooted at the real home directory."""
        return cls.build(
            paths=CpmPaths.default(),
            settings=CpmSettings.from_env(),
            http=RealHttpClient(),
        )

    @classmethod
    def build(
        cls,
        *,
        paths: CpmPaths,
        settings: CpmSettings,
        http: HttpClient,
        resolver: ManifestResolver | None = None,
    ) -> "CpmContext":
        return cls(
            paths=paths,
            settings=settings,
            http=http,
            registry=RegistryClient(http, settings.registry_url, paths.registry_cache_file),
            resolver=resolver or create_default_resolver(),
            platforms=create_platforms(paths),
        )

    @classmethod
    def for_test(
        cls,
        *,
        home: Path,
        responses: dict[str, str | bytes | Exception] | None = None,
        settings: CpmSettings | None = None,
        resolver: ManifestResolver | None = None,
    ) -> "CpmContext":
        """Create a test context around FakeHttpClient.

        Args:
            home: Directory standing in for the user's home
            responses: Canned HTTP responses keyed by URL
            settings: Endpoints (defaults to the production URLs)
            resolver: Replacement source chain

        Returns:
            CpmContext that never touches the network or the real home
        """
        return cls.build(
            paths=CpmPaths(home=home),
            settings=settings or CpmSettings(),
            http=FakeHttpClient(responses=responses),
            resolver=resolver,
        )
