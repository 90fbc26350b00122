"""Fetch manifests straight from package repositories."""

import logging
import re

from cpm.constants import MANIFEST_FETCH_TIMEOUT, MANIFEST_FILE_NAME
from cpm.errors import CpmError
from cpm.io.manifest import parse_manifest_text
from cpm.models.manifest import PackageManifest
from cpm.models.registry import RegistryEntry
from cpm.sources.abc import FetchContext, ManifestSource

logger = logging.getLogger(__name__)

_GITHUB_REPO = re.compile(r"github\.com[/:]([^/]+)/([^/#?]+)")


def is_safe_monorepo_path(path: str) -> bool:
    """Reject registry paths that could climb out of the packages tree."""
    return ".." not in path and not path.startswith("/") and "\\" not in path


def standalone_manifest_url(repository: str) -> str | None:
    """Raw URL of cpm.yaml on the main branch of a GitHub repository.

    Returns:
        The URL, or None if repository is not a GitHub URL
    """
    match = _GITHUB_REPO.search(repository)
    if match is None:
        return None
    owner, repo = match.group(1), match.group(2).removesuffix(".git")
    return f"https://raw.githubusercontent.com/{owner}/{repo}/main/{MANIFEST_FILE_NAME}"


class RepositorySource(ManifestSource):
    """Read cpm.yaml from the packages monorepo, then from the package's own repo."""

    name = "repository"
    priority = 1

    def can_attempt(self, entry: RegistryEntry) -> bool:
        if entry.path:
            return True
        return entry.repository is not None and "github.com" in entry.repository

    async def resolve(
        self, entry: RegistryEntry, context: FetchContext
    ) -> PackageManifest | None:
        if entry.path:
            manifest = await self._from_monorepo(entry.path, context)
            if manifest is not None:
                return manifest

        if entry.repository:
            return await self._from_standalone_repo(entry.repository, context)

        return None

    async def _from_monorepo(self, path: str, context: FetchContext) -> PackageManifest | None:
        if not is_safe_monorepo_path(path):
            logger.warning("Ignoring unsafe registry path: %s", path)
            return None
        url = f"{context.settings.packages_base_url}/{path}/{MANIFEST_FILE_NAME}"
        return await self._fetch(url, context)

    async def _from_standalone_repo(
        self, repository: str, context: FetchContext
    ) -> PackageManifest | None:
        url = standalone_manifest_url(repository)
        if url is None:
            return None
        return await self._fetch(url, context)

    async def _fetch(self, url: str, context: FetchContext) -> PackageManifest | None:
        try:
            text = await context.http.get_text(url, timeout=MANIFEST_FETCH_TIMEOUT)
            return parse_manifest_text(text)
        except CpmError as e:
            logger.debug("No usable manifest at %s: %s", url, e)
            return None
