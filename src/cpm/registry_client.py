"""Client for the package registry index.

The index is a single JSON document:

    {"version": 1, "updated": "...", "packages": [{"name": ..., ...}, ...]}

Lookups are served from an in-memory copy while it is younger than the cache
TTL, then from ~/.cpm/cache/registry.json while that file is younger than the
TTL, and only then from the network. When the network fails, any cached copy
is served regardless of age.
"""

import json
import logging
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any

from cpm.constants import (
    PLATFORM_PACKAGE_TYPES,
    REGISTRY_CACHE_TTL,
    REGISTRY_FETCH_TIMEOUT,
    PackageType,
    Platform,
    SearchSort,
)
from cpm.errors import CpmError, RegistryUnavailableError
from cpm.integrations.http.abc import HttpClient
from cpm.io.config_json import write_json_atomic
from cpm.models.registry import RegistryEntry, SearchResult, resolve_package_type

logger = logging.getLogger(__name__)


def _parse_entries(data: dict[str, Any]) -> list[RegistryEntry]:
    entries: list[RegistryEntry] = []
    for raw in data.get("packages") or []:
        if not isinstance(raw, dict) or not raw.get("name"):
            logger.debug("Skipping malformed registry entry: %r", raw)
            continue
        entries.append(RegistryEntry.from_dict(raw))
    return entries


def _sort_entries(entries: list[RegistryEntry], sort: SearchSort) -> list[RegistryEntry]:
    if sort == "stars":
        return sorted(entries, key=lambda e: e.stars or 0, reverse=True)
    if sort == "recent":
        return sorted(entries, key=lambda e: e.published_at or "", reverse=True)
    if sort == "name":
        return sorted(entries, key=lambda e: e.name.lower())
    return sorted(entries, key=lambda e: e.downloads, reverse=True)


def _matches_query(entry: RegistryEntry, query: str) -> bool:
    needle = query.lower()
    if needle in entry.name.lower() or needle in entry.description.lower():
        return True
    return any(needle in keyword.lower() for keyword in entry.keywords)


class RegistryClient:
    """Fetches, caches and searches the registry index."""

    def __init__(
        self,
        http: HttpClient,
        registry_url: str,
        cache_file: Path,
        *,
        ttl: float = REGISTRY_CACHE_TTL,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Create RegistryClient.

        Args:
            http: HTTP client for network fetches
            registry_url: URL of the registry JSON index
            cache_file: File cache location (~/.cpm/cache/registry.json)
            ttl: Seconds a cached index stays fresh
            clock: Source of the current time in seconds, injectable for tests
        """
        self._http = http
        self._registry_url = registry_url
        self._cache_file = cache_file
        self._ttl = ttl
        self._clock = clock
        self._cached: list[RegistryEntry] | None = None
        self._cached_at = 0.0

    async def fetch(self, *, force_refresh: bool = False) -> list[RegistryEntry]:
        """Return all registry entries, using caches where fresh.

        Raises:
            RegistryUnavailableError: If the network fails and nothing is cached
        """
        if not force_refresh:
            if self._cached is not None and self._clock() - self._cached_at < self._ttl:
                return self._cached

            from_file = self._load_file_cache(require_fresh=True)
            if from_file is not None:
                self._remember(from_file)
                return from_file

        return await self._fetch_from_network()

    async def search(
        self,
        query: str | None = None,
        *,
        type: PackageType | None = None,
        platform: Platform | None = None,
        sort: SearchSort = "downloads",
        limit: int = 10,
        offset: int = 0,
    ) -> SearchResult:
        """Search the registry.

        Args:
            query: Case-insensitive substring matched against name,
                description and keywords
            type: Only packages of this (resolved) type
            platform: Only packages the platform can install
            sort: downloads, stars, recent or name
            limit: Page size
            offset: Entries to skip

        Returns:
            One page of results and the total number of matches
        """
        entries = await self.fetch()

        if query:
            entries = [e for e in entries if _matches_query(e, query)]
        if type is not None:
            entries = [e for e in entries if resolve_package_type(e) == type]
        if platform is not None:
            supported = PLATFORM_PACKAGE_TYPES[platform]
            entries = [e for e in entries if resolve_package_type(e) in supported]

        entries = _sort_entries(entries, sort)
        total = len(entries)
        return SearchResult(packages=entries[offset : offset + limit], total=total)

    async def get_package(self, name: str) -> RegistryEntry | None:
        """Exact-name lookup."""
        for entry in await self.fetch():
            if entry.name == name:
                return entry
        return None

    def _remember(self, entries: list[RegistryEntry]) -> None:
        self._cached = entries
        self._cached_at = self._clock()

    def _load_file_cache(self, *, require_fresh: bool) -> list[RegistryEntry] | None:
        if not self._cache_file.exists():
            return None
        try:
            if require_fresh:
                age = self._clock() - self._cache_file.stat().st_mtime
                if age >= self._ttl:
                    return None
            data = json.loads(self._cache_file.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.debug("Ignoring unreadable registry cache %s: %s", self._cache_file, e)
            return None
        if not isinstance(data, dict):
            return None
        return _parse_entries(data)

    def _save_file_cache(self, data: dict[str, Any]) -> None:
        try:
            write_json_atomic(self._cache_file, data)
        except OSError as e:
            logger.debug("Could not write registry cache %s: %s", self._cache_file, e)

    async def _fetch_from_network(self) -> list[RegistryEntry]:
        try:
            text = await self._http.get_text(self._registry_url, timeout=REGISTRY_FETCH_TIMEOUT)
            data = json.loads(text)
            if not isinstance(data, dict):
                raise ValueError("registry index is not a JSON object")
        except (CpmError, ValueError) as e:
            return self._fall_back_to_cache(e)

        entries = _parse_entries(data)
        self._remember(entries)
        self._save_file_cache(data)
        return entries

    def _fall_back_to_cache(self, error: Exception) -> list[RegistryEntry]:
        if self._cached is not None:
            logger.warning("Registry fetch failed (%s); using cached registry", error)
            return self._cached

        stale = self._load_file_cache(require_fresh=False)
        if stale is not None:
            logger.warning("Registry fetch failed (%s); using stale cached registry", error)
            self._cached = stale
            return stale

        raise RegistryUnavailableError(self._registry_url, str(error))
