"""Models for local configuration documents."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cpm.constants import Platform


class CpmConfig(BaseModel):
    """User preferences stored in ~/.cpm/config.json."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    default_platform: Platform | None = Field(default=None, alias="defaultPlatform")

    @classmethod
    def empty(cls) -> "CpmConfig":
        return cls()


class McpServerEntry(BaseModel):
    """One entry under mcpServers in an MCP client config."""

    model_config = ConfigDict(frozen=True, extra="allow")

    command: str
    args: list[str] = Field(default_factory=list)
    env: dict[str, str] = Field(default_factory=dict)


class McpConfigDocument(BaseModel):
    """An MCP client config file (~/.claude.json or ~/.cursor/mcp.json).

    These files belong to other tools. Every key other than mcpServers is kept
    as-is, and mcpServers entries cpm did not write are kept untouched, whatever
    their shape. A missing or non-object mcpServers reads as empty.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    mcp_servers: dict[str, Any] = Field(default_factory=dict, alias="mcpServers")

    @field_validator("mcp_servers", mode="before")
    @classmethod
    def _coerce_servers(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return {}
        return value

    @classmethod
    def empty(cls) -> "McpConfigDocument":
        return cls()

    def with_server(self, key: str, entry: McpServerEntry) -> "McpConfigDocument":
        """Return a copy with one server entry added or replaced."""
        servers = dict(self.mcp_servers)
        servers[key] = entry.model_dump()
        return self.model_copy(update={"mcp_servers": servers})

    def without_server(self, key: str) -> "McpConfigDocument":
        """Return a copy with one server entry removed."""
        servers = {k: v for k, v in self.mcp_servers.items() if k != key}
        return self.model_copy(update={"mcp_servers": servers})

    def to_json_dict(self) -> dict[str, Any]:
        """Serialize with the on-disk key names, extras included."""
        return self.model_dump(by_alias=True)
