"""Tests for uninstall and list operations."""

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from cpm.context import CpmContext
from cpm.errors import SecurityValidationError
from cpm.models.manifest import McpContent, PackageManifest
from cpm.operations.install import install_manifest
from cpm.operations.list_installed import list_installed
from cpm.operations.uninstall import is_not_found, uninstall_package

ContextFactory = Callable[..., CpmContext]


def _mcp_manifest() -> PackageManifest:
    return PackageManifest(
        name="@cpm/github-mcp",
        version="1.0.0",
        description="GitHub",
        type="mcp",
        content=McpContent(command="npx", args=["-y", "server-github"]),
    )


async def test_uninstall_everywhere(
    make_context: ContextFactory, project: Path, rules_manifest: PackageManifest
) -> None:
    ctx = make_context()
    await install_manifest(ctx, rules_manifest, project, platforms=["claude-code", "cursor"])

    results = await uninstall_package(ctx, "@cpm/typescript-rules", project)

    assert [r.platform for r in results] == ["claude-code", "cursor"]
    assert not is_not_found(results)
    assert not (ctx.paths.claude_rules_dir / "typescript-rules").exists()
    assert not (project / ".cursor" / "rules" / "typescript-rules").exists()


async def test_uninstall_mcp_keeps_other_servers(
    make_context: ContextFactory, project: Path
) -> None:
    ctx = make_context()
    ctx.paths.claude_mcp_config.write_text(
        json.dumps({"mcpServers": {"mine": {"command": "uvx"}}}), encoding="utf-8"
    )
    await install_manifest(ctx, _mcp_manifest(), project, platforms=["claude-code"])

    results = await uninstall_package(ctx, "github-mcp", project, platforms=["claude-code"])

    assert results[0].paths == [ctx.paths.claude_mcp_config]
    data = json.loads(ctx.paths.claude_mcp_config.read_text(encoding="utf-8"))
    assert data["mcpServers"] == {"mine": {"command": "uvx"}}


async def test_uninstall_not_installed(make_context: ContextFactory, project: Path) -> None:
    results = await uninstall_package(make_context(), "nothing-here", project)

    assert is_not_found(results)
    assert all(r.success for r in results)


async def test_uninstall_rejects_unsafe_name(make_context: ContextFactory, project: Path) -> None:
    with pytest.raises(SecurityValidationError):
        await uninstall_package(make_context(), "..", project)


async def test_list_installed_across_platforms(
    make_context: ContextFactory, project: Path, rules_manifest: PackageManifest
) -> None:
    ctx = make_context()
    await install_manifest(ctx, rules_manifest, project, platforms=["claude-code", "cursor"])
    await install_manifest(ctx, _mcp_manifest(), project, platforms=["cursor"])

    everything = list_installed(ctx, project)
    cursor_only = list_installed(ctx, project, platforms=["cursor"])

    assert [(p.name, p.platform) for p in everything] == [
        ("@cpm/typescript-rules", "claude-code"),
        ("@cpm/typescript-rules", "cursor"),
        ("github-mcp", "cursor"),
    ]
    assert [p.type for p in cursor_only] == ["rules", "mcp"]
