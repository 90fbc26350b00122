"""Claude Code skill handler."""

import logging
from pathlib import Path

from cpm.handlers.abc import InstallContext, PackageHandler, UninstallContext
from cpm.handlers.files import (
    copy_markdown_files,
    package_markdown_files,
    remove_install_dir,
    with_metadata,
)
from cpm.io.frontmatter import render_frontmatter
from cpm.models.manifest import PackageManifest, SkillContent
from cpm.security.paths import sanitize_folder_name

logger = logging.getLogger(__name__)


def format_skill_md(manifest: PackageManifest, skill: SkillContent) -> str:
    """Render SKILL.md: frontmatter describing the command, then its instructions."""
    metadata = {
        "name": manifest.name,
        "command": skill.command or f"/{manifest.name}",
        "description": skill.description or manifest.description,
        "version": manifest.version,
    }
    instructions = (skill.prompt or "").strip()
    body = f"# {manifest.name}\n\n{manifest.description}\n\n## Instructions\n\n{instructions}"
    return render_frontmatter(metadata, body)


class SkillHandler(PackageHandler):
    """Installs skills into ~/.claude/skills/<package>/."""

    package_type = "skill"

    def __init__(self, skills_dir: Path) -> None:
        self._skills_dir = skills_dir

    async def install(self, manifest: PackageManifest, context: InstallContext) -> list[Path]:
        target_dir = self._skills_dir / sanitize_folder_name(manifest.name)

        markdown = package_markdown_files(context.package_dir)
        if markdown:
            target_dir.mkdir(parents=True, exist_ok=True)
            written = copy_markdown_files(markdown, target_dir)
            return with_metadata(written, target_dir, manifest)

        if not isinstance(manifest.content, SkillContent):
            logger.debug("No skill content in %s; nothing to write", manifest.name)
            return []

        target_dir.mkdir(parents=True, exist_ok=True)
        skill_path = target_dir / "SKILL.md"
        skill_path.write_text(format_skill_md(manifest, manifest.content), encoding="utf-8")
        return with_metadata([skill_path], target_dir, manifest)

    async def uninstall(self, package_name: str, context: UninstallContext) -> list[Path]:
        return remove_install_dir(self._skills_dir / sanitize_folder_name(package_name))
