"""Local file system layout used by cpm."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class CpmPaths:
    """All user-level locations cpm reads or writes, rooted at a home directory.

    Tests build one around tmp_path instead of the real home directory.
    """

    home: Path

    @classmethod
    def default(cls) -> "CpmPaths":
        return cls(home=Path.home())

    @property
    def claude_dir(self) -> Path:
        return self.home / ".claude"

    @property
    def claude_rules_dir(self) -> Path:
        return self.claude_dir / "rules"

    @property
    def claude_skills_dir(self) -> Path:
        return self.claude_dir / "skills"

    @property
    def claude_mcp_config(self) -> Path:
        return self.home / ".claude.json"

    @property
    def cursor_dir(self) -> Path:
        return self.home / ".cursor"

    @property
    def cursor_mcp_config(self) -> Path:
        return self.cursor_dir / "mcp.json"

    @property
    def cpm_dir(self) -> Path:
        return self.home / ".cpm"

    @property
    def config_file(self) -> Path:
        return self.cpm_dir / "config.json"

    @property
    def registry_cache_file(self) -> Path:
        return self.cpm_dir / "cache" / "registry.json"


def cursor_rules_dir(project_root: Path) -> Path:
    """Cursor reads rules per project, from <project>/.cursor/rules."""
    return project_root / ".cursor" / "rules"
