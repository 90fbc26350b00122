"""I/O for JSON configuration documents.

Two kinds of document live here:

- ~/.cpm/config.json, cpm's own preferences
- MCP client configs (~/.claude.json, ~/.cursor/mcp.json), owned by other
  tools, where cpm only touches entries under mcpServers

Writes go through a temp file and a rename. Read-modify-write cycles run
under the file lock so concurrent cpm processes do not lose updates.
"""

import json
import logging
import secrets
import shutil
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from cpm.constants import Platform, validate_platform
from cpm.io.file_lock import file_lock
from cpm.models.config import CpmConfig, McpConfigDocument

logger = logging.getLogger(__name__)


def write_json_atomic(path: Path, data: dict[str, Any]) -> None:
    """Write JSON to path via a temporary sibling file and rename."""
    path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = path.with_name(path.name + ".tmp")
    with temp_path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
        f.write("\n")
    temp_path.replace(path)


def load_cpm_config(config_path: Path) -> CpmConfig:
    """Load ~/.cpm/config.json.

    Returns:
        The stored config, or an empty config if the file is missing or
        cannot be parsed
    """
    if not config_path.exists():
        return CpmConfig.empty()
    try:
        return CpmConfig.model_validate_json(config_path.read_text(encoding="utf-8"))
    except (OSError, ValidationError) as e:
        logger.debug("Ignoring unreadable config %s: %s", config_path, e)
        return CpmConfig.empty()


async def save_cpm_config(config_path: Path, config: CpmConfig) -> None:
    """Save ~/.cpm/config.json under the file lock."""
    async with file_lock(config_path):
        write_json_atomic(config_path, config.model_dump(by_alias=True, exclude_none=True))


async def set_default_platform(config_path: Path, platform: str) -> Platform:
    """Validate and persist the default platform.

    Raises:
        ValueError: If platform is not supported
    """
    valid = validate_platform(platform)
    async with file_lock(config_path):
        current = load_cpm_config(config_path)
        updated = current.model_copy(update={"default_platform": valid})
        write_json_atomic(config_path, updated.model_dump(by_alias=True, exclude_none=True))
    return valid


def get_default_platform(config_path: Path) -> Platform | None:
    """Return the configured default platform, if any."""
    return load_cpm_config(config_path).default_platform


def load_mcp_config(config_path: Path) -> McpConfigDocument:
    """Load an MCP client config.

    A document that is not valid JSON, or whose top level is not an object,
    is copied to "<name>.backup.<hex>" and treated as empty, so installing
    never destroys a file we could not read. Any other shape problem, such as
    a null mcpServers, keeps every other key of the document.

    Returns:
        The parsed document, or an empty one if missing or unreadable
    """
    if not config_path.exists():
        return McpConfigDocument.empty()

    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError("top-level value is not an object")
    except ValueError as e:
        backup_path = config_path.with_name(f"{config_path.name}.backup.{secrets.token_hex(4)}")
        shutil.copyfile(config_path, backup_path)
        logger.warning(
            "Could not parse %s (%s). Backed it up to %s and started from an empty config",
            config_path,
            e,
            backup_path,
        )
        return McpConfigDocument.empty()

    return McpConfigDocument.model_validate(data)


def save_mcp_config(config_path: Path, document: McpConfigDocument) -> None:
    """Save an MCP client config, preserving unknown keys."""
    write_json_atomic(config_path, document.to_json_dict())


@asynccontextmanager
async def modify_mcp_config(
    config_path: Path,
) -> AsyncIterator[tuple[McpConfigDocument, Callable[[McpConfigDocument], None]]]:
    """Locked read-modify-write access to an MCP client config.

    Yields:
        Tuple of (current_document, save_function)

    Example:
        async with modify_mcp_config(path) as (doc, save):
            save(doc.with_server("github", entry))
    """
    async with file_lock(config_path):
        document = load_mcp_config(config_path)

        def save_fn(new_document: McpConfigDocument) -> None:
            save_mcp_config(config_path, new_document)

        yield document, save_fn
