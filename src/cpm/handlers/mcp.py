"""MCP server handler.

Registers a server under mcpServers in an MCP client's config file. The same
handler serves Claude Code (~/.claude.json) and Cursor (~/.cursor/mcp.json);
only the config path differs.
"""

import logging
from pathlib import Path

from cpm.errors import CpmError, SecurityValidationError
from cpm.handlers.abc import InstallContext, PackageHandler, UninstallContext
from cpm.io.config_json import modify_mcp_config
from cpm.models.config import McpServerEntry
from cpm.models.manifest import McpContent, PackageManifest
from cpm.security.mcp import validate_mcp_content
from cpm.security.paths import sanitize_folder_name

logger = logging.getLogger(__name__)


class McpHandler(PackageHandler):
    """Adds and removes entries in an MCP client config file."""

    package_type = "mcp"

    def __init__(self, config_path: Path) -> None:
        self._config_path = config_path

    @property
    def config_path(self) -> Path:
        return self._config_path

    async def install(self, manifest: PackageManifest, context: InstallContext) -> list[Path]:
        if not isinstance(manifest.content, McpContent):
            return []
        mcp = manifest.content

        try:
            validate_mcp_content(mcp)
        except SecurityValidationError as e:
            raise SecurityValidationError(f"MCP security validation failed: {e}") from e

        server_key = sanitize_folder_name(manifest.name)
        entry = McpServerEntry(command=mcp.command, args=list(mcp.args), env=dict(mcp.env))

        async with modify_mcp_config(self._config_path) as (document, save):
            save(document.with_server(server_key, entry))

        logger.debug("Registered MCP server %s in %s", server_key, self._config_path)
        return [self._config_path]

    async def uninstall(self, package_name: str, context: UninstallContext) -> list[Path]:
        if not self._config_path.exists():
            return []

        server_key = sanitize_folder_name(package_name)
        try:
            async with modify_mcp_config(self._config_path) as (document, save):
                if server_key not in document.mcp_servers:
                    return []
                save(document.without_server(server_key))
        except (CpmError, OSError) as e:
            logger.warning("Could not update MCP config %s: %s", self._config_path, e)
            return []

        return [self._config_path]
