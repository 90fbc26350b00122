"""Abstract base class for manifest sources."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from cpm.integrations.http.abc import HttpClient
from cpm.models.installation import InstallStage
from cpm.models.manifest import PackageManifest
from cpm.models.registry import RegistryEntry
from cpm.settings import CpmSettings


def _ignore_stage(stage: InstallStage) -> None:
    return None


@dataclass(frozen=True)
class FetchContext:
    """Per-install resources handed to every source.

    Attributes:
        scratch_dir: Empty temporary directory owned by this install
        http: Client for network sources
        settings: Remote endpoints
        report_stage: Called when a source enters FETCHING or EXTRACTING
    """

    scratch_dir: Path
    http: HttpClient
    settings: CpmSettings
    report_stage: Callable[[InstallStage], None] = _ignore_stage


class ManifestSource(ABC):
    """One way of obtaining a package manifest.

    Sources never raise for ordinary failures (missing files, bad responses,
    invalid documents). They return None so the resolver moves on to the
    next source.
    """

    name: str
    priority: int

    @abstractmethod
    def can_attempt(self, entry: RegistryEntry) -> bool:
        """Cheap check whether this source applies to an entry.

        Args:
            entry: Registry entry being resolved

        Returns:
            True if resolve() is worth calling
        """
        ...

    @abstractmethod
    async def resolve(
        self, entry: RegistryEntry, context: FetchContext
    ) -> PackageManifest | None:
        """Try to produce a manifest for the entry.

        Args:
            entry: Registry entry being resolved
            context: Scratch directory, HTTP client and settings

        Returns:
            The manifest, or None if this source could not produce one
        """
        ...
