"""Cursor rules handler.

Cursor reads project rules from .cursor/rules as .mdc files: markdown with a
frontmatter block holding a description, the globs the rule applies to, and
alwaysApply (true when there are no globs).
"""

import logging
from pathlib import Path

from cpm.handlers.abc import InstallContext, PackageHandler, UninstallContext
from cpm.handlers.files import (
    copy_markdown_files,
    package_markdown_files,
    remove_install_dir,
    with_metadata,
)
from cpm.handlers.rules import rules_text
from cpm.io.frontmatter import render_frontmatter
from cpm.models.manifest import PackageManifest, RulesContent
from cpm.paths import cursor_rules_dir
from cpm.security.globs import validate_globs
from cpm.security.paths import sanitize_folder_name

logger = logging.getLogger(__name__)


def to_mdc(description: str, globs: list[str], content: str) -> str:
    return render_frontmatter(
        {"description": description, "globs": list(globs), "alwaysApply": not globs},
        content,
    )


class CursorRulesHandler(PackageHandler):
    """Installs rules into <project>/.cursor/rules/<package>/."""

    package_type = "rules"

    async def install(self, manifest: PackageManifest, context: InstallContext) -> list[Path]:
        globs: list[str] = []
        if isinstance(manifest.content, RulesContent):
            globs = manifest.content.globs
        validate_globs(globs)

        target_dir = cursor_rules_dir(context.project_root) / sanitize_folder_name(manifest.name)
        description = manifest.description or manifest.name

        markdown = package_markdown_files(context.package_dir)
        if markdown:
            target_dir.mkdir(parents=True, exist_ok=True)
            written = copy_markdown_files(
                markdown,
                target_dir,
                rename=lambda name: name.removesuffix(".md") + ".mdc",
                transform=lambda text: to_mdc(description, globs, text),
            )
            return with_metadata(written, target_dir, manifest)

        text = rules_text(manifest)
        if not text:
            logger.warning("Package %s has no rules content for Cursor", manifest.name)
            return []

        target_dir.mkdir(parents=True, exist_ok=True)
        rules_path = target_dir / "RULES.mdc"
        rules_path.write_text(to_mdc(description, globs, text), encoding="utf-8")
        return with_metadata([rules_path], target_dir, manifest)

    async def uninstall(self, package_name: str, context: UninstallContext) -> list[Path]:
        target_dir = cursor_rules_dir(context.project_root) / sanitize_folder_name(package_name)
        return remove_install_dir(target_dir)
