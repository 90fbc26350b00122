"""Synthesize a minimal manifest from registry metadata."""

import logging
import re
from typing import Any

from pydantic import ValidationError

from cpm.models.manifest import Author, McpContent, PackageManifest, RulesContent, SkillContent
from cpm.models.registry import RegistryEntry, resolve_package_type
from cpm.sources.abc import FetchContext, ManifestSource

logger = logging.getLogger(__name__)

_SCOPE_PREFIX = re.compile(r"^@[^/]+/")

_OPTIONAL_FIELDS = ("author", "repository", "license", "keywords")


def _build(entry: RegistryEntry, base: dict[str, Any]) -> PackageManifest:
    package_type = resolve_package_type(entry)
    heading = f"# {entry.name}\n\n{entry.description}"

    if package_type == "mcp":
        return PackageManifest(type="mcp", content=McpContent(command="npx", args=[]), **base)

    if package_type == "skill":
        command = "/" + _SCOPE_PREFIX.sub("", entry.name)
        return PackageManifest(
            type="skill",
            content=SkillContent(command=command, description=base["description"], prompt=heading),
            **base,
        )

    return PackageManifest(type="rules", content=RulesContent(rules=heading), **base)


def synthesize_manifest(entry: RegistryEntry) -> PackageManifest:
    """Build a manifest from the registry entry alone.

    mcp entries get an npx launcher with no arguments, skill entries a slash
    command named after the package, and everything else (including entries
    whose type cannot be determined) becomes a rules package whose text is the
    registry description. If the entry's optional metadata does not validate,
    the manifest is built without it.
    """
    base: dict[str, Any] = {
        "name": entry.name,
        "version": entry.version or "0.0.0",
        "description": entry.description or entry.name,
        "author": Author(name=entry.author) if entry.author else None,
        "repository": entry.repository,
        "license": entry.license,
        "keywords": list(entry.keywords),
    }

    try:
        return _build(entry, base)
    except ValidationError as e:
        logger.debug("Dropping registry metadata of %s that does not validate: %s", entry.name, e)

    required = {k: v for k, v in base.items() if k not in _OPTIONAL_FIELDS}
    return _build(entry, required)


class RegistrySource(ManifestSource):
    """Terminal source: always applies and always produces a manifest."""

    name = "registry"
    priority = 4

    def can_attempt(self, entry: RegistryEntry) -> bool:
        return True

    async def resolve(
        self, entry: RegistryEntry, context: FetchContext
    ) -> PackageManifest | None:
        return synthesize_manifest(entry)
