"""Package manifest models.

A manifest has identity fields plus exactly one content payload. The payload
is a tagged union so consumers match on the variant instead of probing for
optional fields:

- RulesContent: markdown rules or a prompt, with optional file globs
- SkillContent: a slash command with its prompt
- McpContent: a server launch command for an MCP client
- None: the package ships no inline content (files only, or nothing at all)

The on-disk cpm.yaml shape is handled by cpm.io.manifest.
"""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from cpm.constants import PackageType


class Author(BaseModel):
    """Package author."""

    model_config = ConfigDict(frozen=True, extra="allow")

    name: str
    email: str | None = None
    url: str | None = None


class RulesContent(BaseModel):
    """Markdown rules or prompt content."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["rules"] = "rules"
    rules: str | None = None
    prompt: str | None = None
    globs: list[str] = Field(default_factory=list)

    @property
    def text(self) -> str | None:
        """Rules text if present, otherwise the prompt."""
        return self.rules or self.prompt


class SkillContent(BaseModel):
    """Slash command skill content."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["skill"] = "skill"
    command: str = Field(min_length=1)
    description: str = Field(min_length=1)
    prompt: str | None = None


class McpContent(BaseModel):
    """MCP server launch configuration."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["mcp"] = "mcp"
    transport: Literal["stdio", "http"] | None = None
    command: str = Field(min_length=1)
    args: list[str] = Field(default_factory=list)
    env: dict[str, str] = Field(default_factory=dict)


PackageContent = Annotated[
    RulesContent | SkillContent | McpContent,
    Field(discriminator="kind"),
]


class PackageManifest(BaseModel):
    """Validated package manifest.

    The declared type and the content variant must agree: skill packages carry
    SkillContent, mcp packages carry McpContent, and every other type carries
    RulesContent or no content.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    version: str = Field(min_length=1)
    description: str = Field(min_length=1)
    type: PackageType
    author: Author | None = None
    repository: str | None = None
    license: str | None = None
    keywords: list[str] = Field(default_factory=list)
    content: PackageContent | None = None

    @field_validator("author", mode="before")
    @classmethod
    def coerce_author(cls, v: Any) -> Any:
        """Accept a bare author name string."""
        if isinstance(v, str):
            return {"name": v}
        return v

    @model_validator(mode="after")
    def check_content_matches_type(self) -> "PackageManifest":
        """Reject content variants that contradict the declared type."""
        if self.type == "skill":
            if not isinstance(self.content, SkillContent):
                raise ValueError("skill packages require skill content")
        elif self.type == "mcp":
            if not isinstance(self.content, McpContent):
                raise ValueError("mcp packages require mcp content")
        elif self.content is not None and not isinstance(self.content, RulesContent):
            raise ValueError(f"{self.type} packages only carry rules content")
        return self

    @property
    def author_name(self) -> str | None:
        if self.author is None:
            return None
        return self.author.name
