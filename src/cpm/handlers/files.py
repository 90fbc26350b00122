"""Copying a package's own markdown files into an install directory."""

import logging
import shutil
from collections.abc import Callable
from pathlib import Path

from cpm.errors import SecurityValidationError
from cpm.io.metadata import write_metadata
from cpm.models.manifest import PackageManifest
from cpm.security.paths import is_path_within_directory, sanitize_file_name

logger = logging.getLogger(__name__)


def package_markdown_files(package_dir: Path | None) -> list[Path]:
    """Top-level .md files shipped in a package directory, sorted by name."""
    if package_dir is None or not package_dir.is_dir():
        return []
    return sorted(p for p in package_dir.iterdir() if p.name.endswith(".md"))


def copy_markdown_files(
    sources: list[Path],
    target_dir: Path,
    *,
    rename: Callable[[str], str] | None = None,
    transform: Callable[[str], str] | None = None,
) -> list[Path]:
    """Copy package markdown files into target_dir.

    Unsafe names, symlinks, and anything that would land outside target_dir
    are skipped with a warning.

    Args:
        sources: Files from package_markdown_files
        target_dir: Install directory (must exist)
        rename: Optional mapping applied to the sanitized file name
        transform: Optional rewrite of the file text; when given the file is
            read and rewritten instead of copied byte for byte

    Returns:
        Paths written
    """
    written: list[Path] = []
    for source in sources:
        try:
            safe_name = sanitize_file_name(source.name)
        except SecurityValidationError as e:
            logger.warning("Skipping unsafe file: %s (%s)", source.name, e)
            continue

        if rename is not None:
            safe_name = rename(safe_name)
        dest = target_dir / safe_name
        if not is_path_within_directory(dest, target_dir):
            logger.warning("Blocked path traversal attempt: %s", source.name)
            continue

        if source.is_symlink():
            logger.warning("Blocked symlink in package: %s", source.name)
            continue

        if transform is None:
            shutil.copyfile(source, dest)
        else:
            dest.write_text(transform(source.read_text(encoding="utf-8")), encoding="utf-8")
        written.append(dest)
    return written


def remove_install_dir(path: Path) -> list[Path]:
    """Delete an install directory if present. Returns the removed path, if any."""
    if path.is_symlink():
        path.unlink()
        return [path]
    if not path.exists():
        return []
    shutil.rmtree(path)
    return [path]


def with_metadata(written: list[Path], target_dir: Path, manifest: PackageManifest) -> list[Path]:
    """Write .cpm.json into target_dir and append it to the written paths."""
    metadata_path = write_metadata(target_dir, manifest)
    if metadata_path is None:
        return written
    return [*written, metadata_path]
