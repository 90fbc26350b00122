"""Claude Code platform adapter."""

from pathlib import Path

from cpm.handlers.handler_registry import HandlerRegistry
from cpm.handlers.mcp import McpHandler
from cpm.handlers.rules import RulesHandler
from cpm.handlers.skill import SkillHandler
from cpm.models.installation import InstalledPackage
from cpm.paths import CpmPaths
from cpm.platforms.abc import PlatformAdapter
from cpm.platforms.scanning import scan_directory, scan_mcp_servers


class ClaudeCodePlatform(PlatformAdapter):
    """Rules and skills under ~/.claude, MCP servers in ~/.claude.json."""

    platform = "claude-code"
    display_name = "Claude Code"

    def __init__(self, paths: CpmPaths) -> None:
        self._paths = paths
        super().__init__(
            HandlerRegistry(
                [
                    RulesHandler(paths.claude_rules_dir),
                    SkillHandler(paths.claude_skills_dir),
                    McpHandler(paths.claude_mcp_config),
                ]
            )
        )

    def list_installed(self, project_root: Path) -> list[InstalledPackage]:
        return [
            *scan_directory(self._paths.claude_rules_dir, "rules", self.platform),
            *scan_directory(self._paths.claude_skills_dir, "skill", self.platform),
            *scan_mcp_servers(self._paths.claude_mcp_config, self.platform),
        ]
