"""Fetch manifests from package archives."""

import logging
import tarfile
from urllib.parse import urlparse

from cpm.constants import (
    ARCHIVE_DOWNLOAD_TIMEOUT,
    ARCHIVE_FILE_NAME,
    MANIFEST_FILE_NAME,
    MAX_ARCHIVE_BYTES,
)
from cpm.errors import CpmError, InsecureURLError
from cpm.io.archive import extract_archive
from cpm.io.manifest import load_manifest_file
from cpm.models.installation import InstallStage
from cpm.models.manifest import PackageManifest
from cpm.models.registry import RegistryEntry
from cpm.sources.abc import FetchContext, ManifestSource

logger = logging.getLogger(__name__)


def require_https(url: str) -> None:
    """Raise InsecureURLError unless url uses the https scheme."""
    if urlparse(url).scheme != "https":
        raise InsecureURLError(url)


class ArchiveSource(ManifestSource):
    """Download the package tarball and read cpm.yaml from inside it.

    The extracted files stay in the scratch directory, so handlers can copy
    the package's markdown files from there.
    """

    name = "archive"
    priority = 2

    def __init__(self, max_bytes: int = MAX_ARCHIVE_BYTES) -> None:
        self._max_bytes = max_bytes

    def can_attempt(self, entry: RegistryEntry) -> bool:
        return bool(entry.tarball)

    async def resolve(
        self, entry: RegistryEntry, context: FetchContext
    ) -> PackageManifest | None:
        url = entry.tarball
        if not url:
            return None

        try:
            require_https(url)
        except InsecureURLError as e:
            logger.warning("%s", e)
            return None

        context.report_stage(InstallStage.FETCHING)
        try:
            body = await context.http.download(
                url, max_bytes=self._max_bytes, timeout=ARCHIVE_DOWNLOAD_TIMEOUT
            )
        except CpmError as e:
            logger.warning("Archive download failed for %s: %s", entry.name, e)
            return None

        archive_path = context.scratch_dir / ARCHIVE_FILE_NAME
        archive_path.write_bytes(body)

        context.report_stage(InstallStage.EXTRACTING)
        try:
            extract_archive(archive_path, context.scratch_dir)
        except (tarfile.TarError, OSError) as e:
            logger.warning("Could not extract archive for %s: %s", entry.name, e)
            return None

        manifest_path = context.scratch_dir / MANIFEST_FILE_NAME
        if not manifest_path.is_file():
            logger.debug("Archive for %s has no %s", entry.name, MANIFEST_FILE_NAME)
            return None

        try:
            return load_manifest_file(manifest_path)
        except CpmError as e:
            logger.warning("Invalid manifest in archive for %s: %s", entry.name, e)
            return None
