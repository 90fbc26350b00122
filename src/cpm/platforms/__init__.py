"""Platform adapters: which handlers serve each assistant, and what is installed."""

from cpm.constants import Platform
from cpm.paths import CpmPaths
from cpm.platforms.abc import PlatformAdapter
from cpm.platforms.claude_code import ClaudeCodePlatform
from cpm.platforms.cursor import CursorPlatform


def create_platforms(paths: CpmPaths) -> dict[Platform, PlatformAdapter]:
    """Build the adapter for every supported platform."""
    return {
        "claude-code": ClaudeCodePlatform(paths),
        "cursor": CursorPlatform(paths),
    }


__all__ = ["ClaudeCodePlatform", "CursorPlatform", "PlatformAdapter", "create_platforms"]
