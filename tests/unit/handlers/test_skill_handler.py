"""Tests for the Claude Code skill handler."""

from pathlib import Path

import frontmatter

from cpm.handlers.abc import InstallContext, UninstallContext
from cpm.handlers.skill import SkillHandler
from cpm.models.manifest import PackageManifest, SkillContent


def _skill_manifest() -> PackageManifest:
    return PackageManifest(
        name="@cpm/commit-skill",
        version="1.1.0",
        description="Commit helper",
        type="skill",
        content=SkillContent(
            command="/commit", description="Write a commit", prompt="Follow conventions."
        ),
    )


async def test_writes_skill_md(tmp_path: Path, install_context: InstallContext) -> None:
    handler = SkillHandler(tmp_path / "skills")

    written = await handler.install(_skill_manifest(), install_context)

    skill_path = tmp_path / "skills" / "commit-skill" / "SKILL.md"
    assert written[0] == skill_path
    post = frontmatter.load(skill_path)
    assert post.metadata == {
        "name": "@cpm/commit-skill",
        "command": "/commit",
        "description": "Write a commit",
        "version": "1.1.0",
    }
    assert "## Instructions\n\nFollow conventions." in post.content


async def test_package_markdown_replaces_generated_file(
    tmp_path: Path, project: Path
) -> None:
    package_dir = tmp_path / "pkg"
    package_dir.mkdir()
    (package_dir / "SKILL.md").write_text("---\nname: custom\n---\nCustom\n", encoding="utf-8")
    handler = SkillHandler(tmp_path / "skills")

    await handler.install(
        _skill_manifest(), InstallContext(project_root=project, package_dir=package_dir)
    )

    skill_path = tmp_path / "skills" / "commit-skill" / "SKILL.md"
    assert frontmatter.load(skill_path).metadata == {"name": "custom"}


async def test_uninstall(tmp_path: Path, install_context: InstallContext) -> None:
    handler = SkillHandler(tmp_path / "skills")
    await handler.install(_skill_manifest(), install_context)

    removed = await handler.uninstall(
        "commit-skill", UninstallContext(project_root=install_context.project_root)
    )

    assert removed == [tmp_path / "skills" / "commit-skill"]
    assert not (tmp_path / "skills" / "commit-skill").exists()
