"""Validation for file globs attached to rules packages."""

from cpm.constants import BLOCKED_GLOB_PATTERNS
from cpm.errors import SecurityValidationError


def validate_globs(globs: list[str]) -> None:
    """Reject globs that would point an assistant at secrets or system files.

    Raises:
        SecurityValidationError: For the first blocked glob
    """
    for glob in globs:
        if "\0" in glob:
            raise SecurityValidationError("Glob pattern contains null bytes")
        for pattern in BLOCKED_GLOB_PATTERNS:
            if pattern.search(glob):
                raise SecurityValidationError(
                    f"Glob pattern '{glob}' targets a sensitive file or directory"
                )
