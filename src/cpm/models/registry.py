"""Registry models."""

from dataclasses import dataclass, field
from typing import Any

from cpm.constants import PACKAGE_TYPES, PATH_TYPE_PREFIXES, PackageType


def _empty_str_list() -> list[str]:
    """Factory for empty string list (helps type inference)."""
    return []


def _optional_str(value: Any) -> str | None:
    if value is None or isinstance(value, (dict, list)):
        return None
    return str(value)


def _repository_url(value: Any) -> str | None:
    """Accept both a plain URL and the npm-style {"type": ..., "url": ...} form."""
    if isinstance(value, dict):
        return _optional_str(value.get("url"))
    return _optional_str(value)


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if isinstance(item, (str, int, float))]


def _int_or(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default



@dataclass(frozen=True)
class RegistryEntry:
    """Package entry in the registry index.

    The registry is the source of truth for discovery only. Installable
    content always comes from a resolved manifest.
    """

    name: str
    version: str
    description: str
    author: str
    type: PackageType | None = None
    downloads: int = 0
    stars: int | None = None
    verified: bool = False
    official: bool = False
    path: str | None = None
    repository: str | None = None
    tarball: str | None = None
    keywords: list[str] = field(default_factory=_empty_str_list)
    published_at: str | None = None
    license: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RegistryEntry":
        """Build an entry from one object of the registry JSON index.

        Unknown package types are dropped so that type inference can take over.
        Optional fields of the wrong shape are coerced to strings or dropped.
        """
        raw_type = data.get("type")
        package_type: PackageType | None = None
        if raw_type in PACKAGE_TYPES:
            package_type = raw_type

        author = data.get("author")
        if isinstance(author, dict):
            author = author.get("name")

        return cls(
            name=str(data["name"]),
            version=_optional_str(data.get("version")) or "0.0.0",
            description=_optional_str(data.get("description")) or "",
            author=_optional_str(author) or "",
            type=package_type,
            downloads=_int_or(data.get("downloads"), 0),
            stars=None if data.get("stars") is None else _int_or(data["stars"], 0),
            verified=bool(data.get("verified", False)),
            official=bool(data.get("official", False)),
            path=_optional_str(data.get("path")),
            repository=_repository_url(data.get("repository")),
            tarball=_optional_str(data.get("tarball")),
            keywords=_string_list(data.get("keywords")),
            published_at=_optional_str(data.get("publishedAt")),
            license=_optional_str(data.get("license")),
        )


@dataclass(frozen=True)
class SearchResult:
    """One page of search results plus the total match count before paging."""

    packages: list[RegistryEntry]
    total: int


def type_from_path(path: str | None) -> PackageType | None:
    """Infer a package type from the first segment of a registry path.

    Args:
        path: Registry path such as "skills/commit-skill"

    Returns:
        The inferred type, or None if the path has no known prefix
    """
    if not path:
        return None
    for prefix, package_type in PATH_TYPE_PREFIXES:
        if path.startswith(prefix):
            return package_type
    return None


def resolve_package_type(entry: RegistryEntry) -> PackageType | None:
    """Return the explicit type of an entry, falling back to its path."""
    if entry.type is not None:
        return entry.type
    return type_from_path(entry.path)
