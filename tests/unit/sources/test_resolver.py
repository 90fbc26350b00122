"""Tests for ManifestResolver ordering and fallthrough."""

from pathlib import Path

import pytest

from cpm.errors import HttpError, ManifestNotFoundError
from cpm.integrations.http.fake import FakeHttpClient
from cpm.models.manifest import PackageManifest
from cpm.models.registry import RegistryEntry
from cpm.settings import CpmSettings
from cpm.sources import create_default_resolver
from cpm.sources.abc import FetchContext
from cpm.sources.resolver import ManifestResolver
from tests.fakes.sources import ScriptedSource


def _entry() -> RegistryEntry:
    return RegistryEntry(name="@cpm/x", version="1.0.0", description="d", author="a")


def _manifest(description: str) -> PackageManifest:
    return PackageManifest(name="@cpm/x", version="1.0.0", description=description, type="rules")


def _context(tmp_path: Path) -> FetchContext:
    return FetchContext(scratch_dir=tmp_path, http=FakeHttpClient(), settings=CpmSettings())


def test_sources_sorted_by_priority() -> None:
    resolver = ManifestResolver(
        [
            ScriptedSource(name="late", priority=9),
            ScriptedSource(name="early", priority=1),
        ]
    )

    assert resolver.source_names() == ["early", "late"]


def test_default_chain_order() -> None:
    names = create_default_resolver().source_names()

    assert names == ["repository", "archive", "embedded", "registry"]


async def test_first_manifest_wins(tmp_path: Path) -> None:
    second = ScriptedSource(name="second", priority=2, manifest=_manifest("second"))
    resolver = ManifestResolver(
        [ScriptedSource(name="first", priority=1, manifest=_manifest("first")), second]
    )

    manifest = await resolver.resolve(_entry(), _context(tmp_path))

    assert manifest.description == "first"
    assert second.calls == []


async def test_none_and_errors_fall_through(tmp_path: Path) -> None:
    resolver = ManifestResolver(
        [
            ScriptedSource(name="empty", priority=1),
            ScriptedSource(name="broken", priority=2, error=HttpError("u", "boom")),
            ScriptedSource(name="crash", priority=3, error=RuntimeError("unexpected")),
            ScriptedSource(name="last", priority=4, manifest=_manifest("last")),
        ]
    )

    manifest = await resolver.resolve(_entry(), _context(tmp_path))

    assert manifest.description == "last"


async def test_sources_that_do_not_apply_are_skipped(tmp_path: Path) -> None:
    skipped = ScriptedSource(name="skipped", priority=1, manifest=_manifest("no"), applies=False)
    resolver = ManifestResolver(
        [skipped, ScriptedSource(name="used", priority=2, manifest=_manifest("yes"))]
    )

    manifest = await resolver.resolve(_entry(), _context(tmp_path))

    assert manifest.description == "yes"
    assert skipped.calls == []


async def test_exhausted_chain_raises(tmp_path: Path) -> None:
    resolver = ManifestResolver(
        [
            ScriptedSource(name="a", priority=1),
            ScriptedSource(name="b", priority=2, applies=False),
        ]
    )

    with pytest.raises(ManifestNotFoundError) as exc_info:
        await resolver.resolve(_entry(), _context(tmp_path))

    assert exc_info.value.tried == ["a"]


async def test_default_chain_always_resolves(tmp_path: Path) -> None:
    entry = RegistryEntry(
        name="@cpm/unknown",
        version="1.0.0",
        description="Something",
        author="a",
        path="rules/unknown",
        tarball="https://example.com/unknown.tgz",
    )

    manifest = await create_default_resolver().resolve(entry, _context(tmp_path))

    assert manifest.name == "@cpm/unknown"
    assert manifest.type == "rules"
