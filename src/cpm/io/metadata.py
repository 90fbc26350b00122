"""I/O for the .cpm.json sidecar written into installed package directories."""

import json
import logging
from datetime import UTC, datetime
from pathlib import Path

from pydantic import ValidationError

from cpm.constants import METADATA_FILE_NAME
from cpm.models.installation import PackageMetadata
from cpm.models.manifest import PackageManifest

logger = logging.getLogger(__name__)


def write_metadata(package_dir: Path, manifest: PackageManifest) -> Path | None:
    """Write .cpm.json describing the installed package.

    The sidecar only feeds list output, so a failed write is logged and the
    install carries on.

    Returns:
        Path of the written file, or None if the write failed
    """
    metadata = PackageMetadata(
        name=manifest.name,
        version=manifest.version,
        type=manifest.type,
        installed_at=datetime.now(UTC).isoformat(),
    )
    metadata_path = package_dir / METADATA_FILE_NAME
    try:
        with metadata_path.open("w", encoding="utf-8") as f:
            json.dump(metadata.model_dump(by_alias=True), f, indent=2)
            f.write("\n")
    except OSError as e:
        logger.warning("Could not write package metadata %s: %s", metadata_path, e)
        return None
    return metadata_path


def read_metadata(package_dir: Path) -> PackageMetadata | None:
    """Read .cpm.json from an installed package directory.

    Returns:
        Parsed metadata, or None if the file is missing or malformed
    """
    metadata_path = package_dir / METADATA_FILE_NAME
    if not metadata_path.is_file():
        return None
    try:
        return PackageMetadata.model_validate_json(metadata_path.read_text(encoding="utf-8"))
    except (OSError, ValidationError) as e:
        logger.debug("Ignoring unreadable metadata %s: %s", metadata_path, e)
        return None
