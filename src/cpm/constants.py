"""Shared constants for registry access, limits and security policy."""

import re
from typing import Literal, cast

PackageType = Literal[
    "rules",
    "mcp",
    "skill",
    "agent",
    "hook",
    "workflow",
    "template",
    "bundle",
]

PACKAGE_TYPES: tuple[PackageType, ...] = (
    "rules",
    "mcp",
    "skill",
    "agent",
    "hook",
    "workflow",
    "template",
    "bundle",
)

Platform = Literal["claude-code", "cursor"]

VALID_PLATFORMS: tuple[Platform, ...] = ("claude-code", "cursor")

DEFAULT_PLATFORM: Platform = "claude-code"

SearchSort = Literal["downloads", "stars", "recent", "name"]

SEARCH_SORT_OPTIONS: tuple[SearchSort, ...] = ("downloads", "stars", "recent", "name")

DEFAULT_REGISTRY_URL = "https://raw.githubusercontent.com/cpmai-dev/packages/main/registry.json"
DEFAULT_PACKAGES_BASE_URL = "https://raw.githubusercontent.com/cpmai-dev/packages/main/packages"

MANIFEST_FILE_NAME = "cpm.yaml"
METADATA_FILE_NAME = ".cpm.json"
ARCHIVE_FILE_NAME = "package.tar.gz"

DEFAULT_SCOPE = "@cpm/"

# Seconds
MANIFEST_FETCH_TIMEOUT = 5.0
ARCHIVE_DOWNLOAD_TIMEOUT = 30.0
REGISTRY_FETCH_TIMEOUT = 10.0

REGISTRY_CACHE_TTL = 5 * 60.0
MAX_ARCHIVE_BYTES = 25 * 1024 * 1024
MAX_PACKAGE_NAME_LENGTH = 214

LOCK_STALE_AFTER = 10.0
LOCK_RETRY_INTERVAL = 0.1
LOCK_TIMEOUT = 5.0

# Path prefix -> package type, used when a registry entry omits its type
PATH_TYPE_PREFIXES: tuple[tuple[str, PackageType], ...] = (
    ("skills/", "skill"),
    ("rules/", "rules"),
    ("mcp/", "mcp"),
    ("agents/", "agent"),
    ("hooks/", "hook"),
    ("workflows/", "workflow"),
    ("templates/", "template"),
    ("bundles/", "bundle"),
)

ALLOWED_MCP_COMMANDS = frozenset({"npx", "node", "python", "python3", "deno", "bun", "uvx"})

BLOCKED_MCP_ARG_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"--eval", re.IGNORECASE),
    re.compile(r"-e(\s|$)"),
    re.compile(r"^-e\S"),
    re.compile(r"-c(\s|$)"),
    re.compile(r"^-c\S"),
    re.compile(r"\bcurl\b", re.IGNORECASE),
    re.compile(r"\bwget\b", re.IGNORECASE),
    re.compile(r"\brm(\s|$)", re.IGNORECASE),
    re.compile(r"\bsudo\b", re.IGNORECASE),
    re.compile(r"\bchmod\b", re.IGNORECASE),
    re.compile(r"\bchown\b", re.IGNORECASE),
    re.compile(r"[|;&`$]"),
    re.compile(r"--inspect", re.IGNORECASE),
    re.compile(r"--allow-all", re.IGNORECASE),
    re.compile(r"--allow-run", re.IGNORECASE),
    re.compile(r"--allow-write", re.IGNORECASE),
    re.compile(r"--allow-net", re.IGNORECASE),
    re.compile(r"^https?://", re.IGNORECASE),
)

BLOCKED_MCP_ENV_KEYS = frozenset(
    {
        "PATH",
        "LD_PRELOAD",
        "LD_LIBRARY_PATH",
        "DYLD_INSERT_LIBRARIES",
        "DYLD_LIBRARY_PATH",
        "NODE_OPTIONS",
        "NODE_PATH",
        "PYTHONPATH",
        "PYTHONSTARTUP",
        "PYTHONHOME",
        "RUBYOPT",
        "PERL5OPT",
        "BASH_ENV",
        "ENV",
        "CDPATH",
        "HOME",
        "USERPROFILE",
        "NPM_CONFIG_REGISTRY",
        "NPM_CONFIG_PREFIX",
        "NPM_CONFIG_GLOBALCONFIG",
        "DENO_DIR",
        "BUN_INSTALL",
    }
)

BLOCKED_GLOB_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\.env", re.IGNORECASE),
    re.compile(r"\.secret", re.IGNORECASE),
    re.compile(r"credentials", re.IGNORECASE),
    re.compile(r"\.pem$", re.IGNORECASE),
    re.compile(r"\.key$", re.IGNORECASE),
    re.compile(r"\.p12$", re.IGNORECASE),
    re.compile(r"\.pfx$", re.IGNORECASE),
    re.compile(r"\.ssh/", re.IGNORECASE),
    re.compile(r"id_rsa", re.IGNORECASE),
    re.compile(r"id_ed25519", re.IGNORECASE),
    re.compile(r"\.gnupg/", re.IGNORECASE),
    re.compile(r"\.git/", re.IGNORECASE),
    re.compile(r"\.claude\.json$", re.IGNORECASE),
    re.compile(r"\.npmrc$", re.IGNORECASE),
    re.compile(r"\.pypirc$", re.IGNORECASE),
    re.compile(r"/etc/", re.IGNORECASE),
    re.compile(r"/passwd", re.IGNORECASE),
    re.compile(r"/shadow", re.IGNORECASE),
    re.compile(r"\.\./"),
)


def validate_platform(value: str) -> Platform:
    """Validate and return a platform name.

    Args:
        value: String to validate

    Returns:
        Valid Platform

    Raises:
        ValueError: If value is not a supported platform
    """
    if value not in VALID_PLATFORMS:
        valid = ", ".join(VALID_PLATFORMS)
        raise ValueError(f"Invalid platform: {value}. Valid platforms: {valid}")
    return cast(Platform, value)


# Package types each platform can install natively, used by search filtering
PLATFORM_PACKAGE_TYPES: dict[Platform, frozenset[PackageType]] = {
    "claude-code": frozenset({"rules", "skill", "mcp"}),
    "cursor": frozenset({"rules", "mcp"}),
}
