"""Installation result and tracking models."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from cpm.constants import PackageType, Platform
from cpm.models.manifest import PackageManifest


def _empty_path_list() -> list[Path]:
    """Factory for empty path list (helps type inference)."""
    return []


@dataclass(frozen=True)
class InstallationResult:
    """Outcome of installing (or uninstalling) a package on one platform.

    paths lists every file or directory written, or removed on uninstall.
    """

    success: bool
    platform: Platform
    paths: list[Path] = field(default_factory=_empty_path_list)
    error: str | None = None


@dataclass(frozen=True)
class InstalledPackage:
    """A package found on disk by list_installed."""

    name: str
    folder_name: str
    type: PackageType
    platform: Platform
    path: Path
    version: str | None = None


class PackageMetadata(BaseModel):
    """Contents of the .cpm.json sidecar written next to installed files."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    name: str
    version: str
    type: PackageType
    installed_at: str = Field(alias="installedAt")


class InstallStage(Enum):
    """Stages an install passes through, in order."""

    RESOLVING = "resolving"
    FETCHING = "fetching"
    EXTRACTING = "extracting"
    WRITING = "writing"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class StageFailure:
    """Where and why an install stopped."""

    stage: InstallStage
    message: str


def _empty_result_list() -> list[InstallationResult]:
    """Factory for empty result list (helps type inference)."""
    return []


@dataclass(frozen=True)
class PackageInstallReport:
    """Summary of a full install_package run."""

    package_name: str
    stage: InstallStage
    manifest: PackageManifest | None = None
    results: list[InstallationResult] = field(default_factory=_empty_result_list)
    failure: StageFailure | None = None
    needs_configuration: bool = False

    @property
    def succeeded(self) -> list[InstallationResult]:
        return [r for r in self.results if r.success]

    @property
    def failed(self) -> list[InstallationResult]:
        return [r for r in self.results if not r.success]
