"""Manifest document I/O.

A cpm.yaml document looks like:

    name: "@cpm/typescript-strict"
    version: 1.0.0
    description: Strict TypeScript conventions
    type: rules
    author: CPM Team
    universal:
      globs: ["**/*.ts"]
      rules: |
        # TypeScript
        ...

Skill documents add a `skill: {command, description}` section and mcp
documents an `mcp: {transport, command, args, env}` section. The document is
validated against its own schema first, then folded into a PackageManifest
with a single content payload.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from cpm.constants import PackageType
from cpm.errors import ManifestValidationError
from cpm.models.manifest import (
    Author,
    McpContent,
    PackageContent,
    PackageManifest,
    RulesContent,
    SkillContent,
)


class _UniversalSection(BaseModel):
    model_config = ConfigDict(extra="allow")

    rules: str | None = None
    globs: list[str] | None = None
    prompt: str | None = None


class _SkillSection(BaseModel):
    model_config = ConfigDict(extra="allow")

    command: str = Field(min_length=1)
    description: str = Field(min_length=1)


class _McpSection(BaseModel):
    model_config = ConfigDict(extra="allow")

    transport: str | None = None
    command: str = Field(min_length=1)
    args: list[str] | None = None
    env: dict[str, str] | None = None

    @model_validator(mode="after")
    def check_transport(self) -> "_McpSection":
        if self.transport is not None and self.transport not in ("stdio", "http"):
            raise ValueError("transport must be 'stdio' or 'http'")
        return self


class _ManifestDocument(BaseModel):
    """Schema of the cpm.yaml document as written by package authors."""

    model_config = ConfigDict(extra="allow")

    name: str = Field(min_length=1)
    version: str = Field(min_length=1)
    description: str = Field(min_length=1)
    type: PackageType
    author: str | Author | None = None
    repository: str | None = None
    license: str | None = None
    keywords: list[str] | None = None
    universal: _UniversalSection | None = None
    skill: _SkillSection | None = None
    mcp: _McpSection | None = None

    @model_validator(mode="before")
    @classmethod
    def coerce_version(cls, data: Any) -> Any:
        # YAML reads `version: 1.0` as a float
        if isinstance(data, dict) and isinstance(data.get("version"), int | float):
            data = {**data, "version": str(data["version"])}
        return data

    @model_validator(mode="after")
    def check_type_sections(self) -> "_ManifestDocument":
        if self.type == "skill" and self.skill is None:
            raise ValueError("skill packages require a 'skill' section")
        if self.type == "mcp" and self.mcp is None:
            raise ValueError("mcp packages require an 'mcp' section")
        return self


def _content_from_document(doc: _ManifestDocument) -> PackageContent | None:
    universal = doc.universal

    if doc.type == "skill":
        assert doc.skill is not None
        prompt = None
        if universal is not None:
            prompt = universal.prompt or universal.rules
        return SkillContent(
            command=doc.skill.command,
            description=doc.skill.description,
            prompt=prompt,
        )

    if doc.type == "mcp":
        assert doc.mcp is not None
        return McpContent(
            transport=doc.mcp.transport,  # type: ignore[arg-type]
            command=doc.mcp.command,
            args=doc.mcp.args or [],
            env=doc.mcp.env or {},
        )

    if universal is None:
        return None
    if universal.rules is None and universal.prompt is None and not universal.globs:
        return None
    return RulesContent(
        rules=universal.rules,
        prompt=universal.prompt,
        globs=universal.globs or [],
    )


def _first_error(error: ValidationError) -> ManifestValidationError:
    first = error.errors()[0]
    path = ".".join(str(part) for part in first.get("loc", ()))
    return ManifestValidationError(path, first.get("msg", "Invalid manifest"))


def parse_manifest(data: Any) -> PackageManifest:
    """Validate a parsed cpm.yaml document and build the manifest.

    Args:
        data: Output of yaml.safe_load for the document

    Returns:
        Validated PackageManifest

    Raises:
        ManifestValidationError: Naming the first offending field
    """
    if not isinstance(data, dict):
        raise ManifestValidationError("", "manifest must be a mapping")

    try:
        doc = _ManifestDocument.model_validate(data)
    except ValidationError as e:
        raise _first_error(e) from None

    author = doc.author
    if isinstance(author, str):
        author = Author(name=author)

    try:
        return PackageManifest(
            name=doc.name,
            version=doc.version,
            description=doc.description,
            type=doc.type,
            author=author,
            repository=doc.repository,
            license=doc.license,
            keywords=doc.keywords or [],
            content=_content_from_document(doc),
        )
    except ValidationError as e:
        raise _first_error(e) from None


def parse_manifest_text(text: str) -> PackageManifest:
    """Parse and validate cpm.yaml text.

    Raises:
        ManifestValidationError: If the YAML is malformed or fails validation
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ManifestValidationError("", f"invalid YAML: {e}") from None
    return parse_manifest(data)


def load_manifest_file(manifest_path: Path) -> PackageManifest:
    """Load and validate a cpm.yaml file."""
    with open(manifest_path, encoding="utf-8") as f:
        return parse_manifest_text(f.read())


def manifest_to_document(manifest: PackageManifest) -> dict[str, Any]:
    """Convert a manifest back into cpm.yaml document shape."""
    doc: dict[str, Any] = {
        "name": manifest.name,
        "version": manifest.version,
        "description": manifest.description,
        "type": manifest.type,
    }
    if manifest.author is not None:
        doc["author"] = manifest.author.model_dump(exclude_none=True)
    if manifest.repository is not None:
        doc["repository"] = manifest.repository
    if manifest.license is not None:
        doc["license"] = manifest.license
    if manifest.keywords:
        doc["keywords"] = list(manifest.keywords)

    match manifest.content:
        case SkillContent(command=command, description=description, prompt=prompt):
            doc["skill"] = {"command": command, "description": description}
            if prompt is not None:
                doc["universal"] = {"prompt": prompt}
        case McpContent() as mcp:
            doc["mcp"] = mcp.model_dump(exclude={"kind"}, exclude_none=True)
        case RulesContent() as rules:
            doc["universal"] = rules.model_dump(exclude={"kind"}, exclude_none=True)
        case None:
            pass

    return doc
