"""Cursor platform adapter."""

from pathlib import Path

from cpm.handlers.cursor_rules import CursorRulesHandler
from cpm.handlers.handler_registry import HandlerRegistry
from cpm.handlers.mcp import McpHandler
from cpm.models.installation import InstalledPackage
from cpm.models.manifest import PackageManifest
from cpm.paths import CpmPaths, cursor_rules_dir
from cpm.platforms.abc import PlatformAdapter
from cpm.platforms.scanning import scan_directory, scan_mcp_servers


class CursorPlatform(PlatformAdapter):
    """Project rules under .cursor/rules, MCP servers in ~/.cursor/mcp.json.

    Cursor has no skills, so skill packages are skipped.
    """

    platform = "cursor"
    display_name = "Cursor"

    def __init__(self, paths: CpmPaths) -> None:
        self._paths = paths
        super().__init__(
            HandlerRegistry(
                [
                    CursorRulesHandler(),
                    McpHandler(paths.cursor_mcp_config),
                ]
            )
        )

    def skip_reason(self, manifest: PackageManifest) -> str | None:
        if manifest.type == "skill":
            return (
                f'Package "{manifest.name}" is a skill package. '
                "Skills are not supported on Cursor, skipping."
            )
        return None

    def list_installed(self, project_root: Path) -> list[InstalledPackage]:
        return [
            *scan_directory(cursor_rules_dir(project_root), "rules", self.platform),
            *scan_mcp_servers(self._paths.cursor_mcp_config, self.platform),
        ]
