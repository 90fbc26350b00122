"""Choosing which platforms an operation targets."""

from cpm.constants import DEFAULT_PLATFORM, VALID_PLATFORMS, Platform, validate_platform
from cpm.io.config_json import get_default_platform
from cpm.paths import CpmPaths


def resolve_platforms(paths: CpmPaths, requested: str | None) -> list[Platform]:
    """Turn a --platform value into the platforms to target.

    "all" selects every platform. No value falls back to the configured
    default platform, then to Claude Code.

    Raises:
        ValueError: If requested names an unknown platform
    """
    if requested == "all":
        return list(VALID_PLATFORMS)
    if requested is not None:
        return [validate_platform(requested)]

    configured = get_default_platform(paths.config_file)
    if configured is not None:
        return [configured]
    return [DEFAULT_PLATFORM]
