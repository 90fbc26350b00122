"""Safe extraction of package archives.

Package archives are gzip-compressed tarballs whose members sit under a single
top-level directory ("package/cpm.yaml"). One leading component is stripped
and every member is checked against the destination before anything is
written. A member that would land outside the destination is logged and
skipped, and extraction carries on with the rest.
"""

import logging
import os
import posixpath
import shutil
import tarfile
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)


def _empty_str_list() -> list[str]:
    """Factory for empty string list (helps type inference)."""
    return []


@dataclass(frozen=True)
class ExtractionReport:
    """Member names written and member names refused."""

    extracted: list[str] = field(default_factory=_empty_str_list)
    blocked: list[str] = field(default_factory=_empty_str_list)


def _strip_components(name: str, count: int) -> str:
    parts = [p for p in name.replace("\\", "/").split("/") if p and p != "."]
    return "/".join(parts[count:])


def _is_within(path: Path, directory: Path) -> bool:
    return path == directory or path.is_relative_to(directory)


def _resolve_member_path(dest_root: Path, relative: str) -> Path | None:
    """Resolve a stripped member name under dest_root, or None if it escapes."""
    if relative.startswith("/") or posixpath.isabs(relative):
        return None
    target = (dest_root / relative).resolve()
    if not _is_within(target, dest_root):
        return None
    return target


def extract_archive(
    archive_path: Path,
    dest_dir: Path,
    *,
    strip_components: int = 1,
) -> ExtractionReport:
    """Extract a tarball into dest_dir without writing outside it.

    Args:
        archive_path: Path to a .tar.gz (or plain .tar) file
        dest_dir: Directory to extract into; created if missing
        strip_components: Leading path components to drop from every member

    Returns:
        ExtractionReport listing extracted and blocked member names

    Raises:
        tarfile.TarError: If the archive itself cannot be read
    """
    dest_dir.mkdir(parents=True, exist_ok=True)
    dest_root = dest_dir.resolve()
    extracted: list[str] = []
    blocked: list[str] = []

    with tarfile.open(archive_path, "r:*") as tar:
        for member in tar:
            relative = _strip_components(member.name, strip_components)
            if not relative:
                continue

            if member.name.startswith("/"):
                logger.warning("Blocked path traversal in archive: %s", member.name)
                blocked.append(member.name)
                continue

            target = _resolve_member_path(dest_root, relative)
            if target is None:
                logger.warning("Blocked path traversal in archive: %s", member.name)
                blocked.append(member.name)
                continue

            if member.isdir():
                target.mkdir(parents=True, exist_ok=True)
                extracted.append(member.name)
            elif member.isfile():
                target.parent.mkdir(parents=True, exist_ok=True)
                source = tar.extractfile(member)
                if source is None:
                    continue
                with source, open(target, "wb") as out:
                    shutil.copyfileobj(source, out)
                extracted.append(member.name)
            elif member.issym():
                link_target = (target.parent / member.linkname).resolve()
                if posixpath.isabs(member.linkname) or not _is_within(link_target, dest_root):
                    logger.warning("Blocked path traversal in archive: %s", member.name)
                    blocked.append(member.name)
                    continue
                target.parent.mkdir(parents=True, exist_ok=True)
                target.unlink(missing_ok=True)
                os.symlink(member.linkname, target)
                extracted.append(member.name)
            elif member.islnk():
                link_relative = _strip_components(member.linkname, strip_components)
                link_source = _resolve_member_path(dest_root, link_relative)
                if link_source is None or not link_source.is_file():
                    logger.warning("Blocked path traversal in archive: %s", member.name)
                    blocked.append(member.name)
                    continue
                target.parent.mkdir(parents=True, exist_ok=True)
                shutil.copyfile(link_source, target)
                extracted.append(member.name)
            else:
                logger.debug("Skipping special archive member: %s", member.name)

    return ExtractionReport(extracted=extracted, blocked=blocked)
