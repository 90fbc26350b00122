"""Package name validation and normalization."""

import re
from urllib.parse import unquote

from cpm.constants import DEFAULT_SCOPE, MAX_PACKAGE_NAME_LENGTH
from cpm.errors import InvalidPackageNameError

_NAME_PATTERN = re.compile(r"^(@[a-z0-9-~][a-z0-9-._~]*/)?[a-z0-9-~][a-z0-9-._~]*$")
_TRAVERSAL_MARKERS = ("..", "\\", "%2e", "%2E", "%5c", "%5C", "%2f", "%2F")


def validate_package_name(name: str) -> None:
    """Validate a user supplied package name.

    Accepts npm style names, scoped ("@scope/name") or bare. URL encoding is
    decoded before the length and traversal checks so encoded attacks are
    caught too.

    Raises:
        InvalidPackageNameError: If the name is empty, too long, malformed, or
            contains traversal sequences
    """
    if not name or not name.strip():
        raise InvalidPackageNameError(name, "name cannot be empty")

    decoded = unquote(name)

    if len(decoded) > MAX_PACKAGE_NAME_LENGTH:
        raise InvalidPackageNameError(
            name, f"name too long (max {MAX_PACKAGE_NAME_LENGTH} characters)"
        )

    if "\0" in decoded:
        raise InvalidPackageNameError(name, "invalid characters in package name")

    for marker in _TRAVERSAL_MARKERS:
        if marker in name or marker in decoded:
            raise InvalidPackageNameError(name, "invalid characters in package name")

    if not _NAME_PATTERN.match(name.lower()):
        raise InvalidPackageNameError(name, "invalid package name format")


def normalize_package_name(name: str) -> str:
    """Add the default @cpm/ scope to bare names."""
    if name.startswith("@"):
        return name
    return f"{DEFAULT_SCOPE}{name}"
