"""Manifests bundled with cpm."""

from functools import cache
from pathlib import Path

import yaml

from cpm.io.manifest import load_manifest_file
from cpm.models.manifest import PackageManifest
from cpm.models.registry import RegistryEntry
from cpm.sources.abc import FetchContext, ManifestSource


def _default_data_dir() -> Path:
    return Path(__file__).parent.parent / "data" / "embedded"


@cache
def _load_index(data_dir: Path) -> dict[str, str]:
    """Map of package name -> manifest file name, from index.yaml."""
    index_path = data_dir / "index.yaml"
    if not index_path.exists():
        return {}
    with open(index_path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if not data or "packages" not in data:
        return {}
    return {str(name): str(file_name) for name, file_name in data["packages"].items()}


class EmbeddedSource(ManifestSource):
    """Resolve packages whose manifests ship inside cpm itself.

    Works offline. Bundled versions may lag behind the registry, which is why
    network sources are tried first.
    """

    name = "embedded"
    priority = 3

    def __init__(self, data_dir: Path | None = None) -> None:
        self._data_dir = data_dir or _default_data_dir()

    def available(self) -> list[str]:
        """Names of all bundled packages."""
        return sorted(_load_index(self._data_dir))

    def can_attempt(self, entry: RegistryEntry) -> bool:
        return entry.name in _load_index(self._data_dir)

    async def resolve(
        self, entry: RegistryEntry, context: FetchContext
    ) -> PackageManifest | None:
        file_name = _load_index(self._data_dir).get(entry.name)
        if file_name is None:
            return None
        return load_manifest_file(self._data_dir / file_name)
