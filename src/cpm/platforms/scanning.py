"""Discovery of installed packages on disk."""

import json
import logging
from pathlib import Path

from cpm.constants import PackageType, Platform
from cpm.io.metadata import read_metadata
from cpm.models.installation import InstalledPackage

logger = logging.getLogger(__name__)


def scan_directory(
    directory: Path, package_type: PackageType, platform: Platform
) -> list[InstalledPackage]:
    """List package directories under an install root.

    Symlinked entries are ignored. Names come from .cpm.json when present,
    otherwise from the directory name.
    """
    if not directory.is_dir():
        return []

    packages: list[InstalledPackage] = []
    for entry in sorted(directory.iterdir()):
        if entry.is_symlink() or not entry.is_dir():
            continue
        metadata = read_metadata(entry)
        packages.append(
            InstalledPackage(
                name=metadata.name if metadata else entry.name,
                folder_name=entry.name,
                type=package_type,
                platform=platform,
                path=entry,
                version=metadata.version if metadata else None,
            )
        )
    return packages


def scan_mcp_servers(config_path: Path, platform: Platform) -> list[InstalledPackage]:
    """List servers registered under mcpServers in an MCP client config.

    The config is only read here, so an unparsable file is skipped rather
    than backed up.
    """
    if not config_path.is_file():
        return []
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.debug("Skipping unreadable MCP config %s: %s", config_path, e)
        return []

    servers = data.get("mcpServers") if isinstance(data, dict) else None
    if not isinstance(servers, dict):
        return []

    return [
        InstalledPackage(
            name=key,
            folder_name=key,
            type="mcp",
            platform=platform,
            path=config_path,
        )
        for key in sorted(servers)
    ]
