"""Path sanitizing for names that come from package metadata."""

import os
import posixpath
import re
from pathlib import Path
from urllib.parse import unquote

from cpm.errors import SecurityValidationError

_UNSAFE_FOLDER_CHARS = re.compile(r'[<>:"|?*\\]')
_UNSAFE_FILE_CHARS = re.compile(r'[<>:"|?*\\]')
_ENCODED_TRAVERSAL = (
    re.compile(r"%2e%2e", re.IGNORECASE),
    re.compile(r"%2f", re.IGNORECASE),
    re.compile(r"%5c", re.IGNORECASE),
)


def sanitize_folder_name(name: str) -> str:
    """Turn a package name into a single safe directory name.

    "@cpm/typescript-rules" becomes "typescript-rules". Traversal sequences and
    characters that are unsafe on common file systems are removed.

    Args:
        name: Package name, possibly scoped or URL-encoded

    Returns:
        A non-empty, non-hidden, single-segment directory name

    Raises:
        SecurityValidationError: If nothing safe is left
    """
    if not name:
        raise SecurityValidationError("Package name cannot be empty")

    decoded = unquote(name)
    if "\0" in decoded:
        raise SecurityValidationError("Invalid package name: contains null bytes")

    if "/" in decoded:
        sanitized = decoded.rsplit("/", 1)[-1] or decoded
    else:
        sanitized = decoded.removeprefix("@")

    sanitized = sanitized.replace("..", "")
    for pattern in _ENCODED_TRAVERSAL:
        sanitized = pattern.sub("", sanitized)
    sanitized = _UNSAFE_FOLDER_CHARS.sub("", sanitized)

    if not sanitized or sanitized.startswith("."):
        raise SecurityValidationError(f"Invalid package name: {name}")

    if posixpath.normpath(sanitized) != sanitized:
        raise SecurityValidationError(f"Invalid package name: {name}")

    resolved = posixpath.normpath(posixpath.join("/test", sanitized))
    if not resolved.startswith("/test/"):
        raise SecurityValidationError(f"Invalid package name: {name}")

    return sanitized


def sanitize_file_name(file_name: str) -> str:
    """Validate a file name copied out of a package.

    Only markdown files are accepted. Directory components are dropped.

    Raises:
        SecurityValidationError: If the name is unsafe or not a .md file
    """
    if not file_name:
        raise SecurityValidationError("File name cannot be empty")

    base_name = os.path.basename(file_name)
    if "\0" in base_name:
        raise SecurityValidationError("File name contains null bytes")

    if base_name.startswith(".") and base_name != ".md":
        raise SecurityValidationError("Hidden files not allowed")

    sanitized = _UNSAFE_FILE_CHARS.sub("_", base_name)

    if ".." in sanitized or "/" in sanitized or "\\" in sanitized:
        raise SecurityValidationError("Path traversal detected in file name")

    if not sanitized.endswith(".md"):
        raise SecurityValidationError("Only .md files allowed")

    return sanitized


def is_path_within_directory(path: Path, directory: Path) -> bool:
    """Check that path resolves to directory itself or somewhere below it."""
    resolved_path = path.resolve()
    resolved_dir = directory.resolve()
    return resolved_path == resolved_dir or resolved_path.is_relative_to(resolved_dir)
