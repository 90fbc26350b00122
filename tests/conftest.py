"""Pytest configuration and fixtures."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from cpm.constants import DEFAULT_REGISTRY_URL
from cpm.context import CpmContext
from cpm.handlers.abc import InstallContext
from cpm.models.manifest import PackageManifest, RulesContent
from cpm.paths import CpmPaths
from tests.test_utils.builders import registry_json


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """Directory standing in for the user's home."""
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Project directory commands run in."""
    path = tmp_path / "project"
    path.mkdir()
    return path


@pytest.fixture
def paths(home: Path) -> CpmPaths:
    return CpmPaths(home=home)


@pytest.fixture
def install_context(project: Path) -> InstallContext:
    return InstallContext(project_root=project)


@pytest.fixture
def rules_manifest() -> PackageManifest:
    return PackageManifest(
        name="@cpm/typescript-rules",
        version="1.0.0",
        description="TypeScript conventions",
        type="rules",
        content=RulesContent(rules="Use strict mode.", globs=["**/*.ts"]),
    )


@pytest.fixture
def make_context(home: Path) -> Callable[..., CpmContext]:
    """Factory for a CpmContext over FakeHttpClient.

    `packages` are served as the registry index at the default registry URL;
    `responses` adds further canned URLs.
    """

    def factory(
        *,
        packages: list[dict[str, Any]] | None = None,
        responses: dict[str, str | bytes | Exception] | None = None,
    ) -> CpmContext:
        canned: dict[str, str | bytes | Exception] = {}
        if packages is not None:
            canned[DEFAULT_REGISTRY_URL] = registry_json(*packages)
        canned.update(responses or {})
        return CpmContext.for_test(home=home, responses=canned)

    return factory
