"""Claude Code rules handler."""

import logging
from pathlib import Path

from cpm.handlers.abc import InstallContext, PackageHandler, UninstallContext
from cpm.handlers.files import (
    copy_markdown_files,
    package_markdown_files,
    remove_install_dir,
    with_metadata,
)
from cpm.models.manifest import PackageManifest, RulesContent
from cpm.security.paths import sanitize_folder_name

logger = logging.getLogger(__name__)


def rules_text(manifest: PackageManifest) -> str | None:
    """Rules (or prompt) text of a manifest with rules content."""
    if isinstance(manifest.content, RulesContent):
        return manifest.content.text
    return None


class RulesHandler(PackageHandler):
    """Installs rules into ~/.claude/rules/<package>/.

    Markdown files shipped with the package are copied as-is. Otherwise the
    manifest's rules text is written to RULES.md. A package with neither
    writes nothing.
    """

    package_type = "rules"

    def __init__(self, rules_dir: Path) -> None:
        self._rules_dir = rules_dir

    async def install(self, manifest: PackageManifest, context: InstallContext) -> list[Path]:
        target_dir = self._rules_dir / sanitize_folder_name(manifest.name)

        markdown = package_markdown_files(context.package_dir)
        if markdown:
            target_dir.mkdir(parents=True, exist_ok=True)
            written = copy_markdown_files(markdown, target_dir)
            return with_metadata(written, target_dir, manifest)

        text = rules_text(manifest)
        if not text:
            logger.debug("No rules content in %s; nothing to write", manifest.name)
            return []

        target_dir.mkdir(parents=True, exist_ok=True)
        rules_path = target_dir / "RULES.md"
        rules_path.write_text(
            f"# {manifest.name}\n\n{manifest.description}\n\n{text.strip()}\n",
            encoding="utf-8",
        )
        return with_metadata([rules_path], target_dir, manifest)

    async def uninstall(self, package_name: str, context: UninstallContext) -> list[Path]:
        return remove_install_dir(self._rules_dir / sanitize_folder_name(package_name))
