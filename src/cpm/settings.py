"""Environment-driven settings."""

import os
from dataclasses import dataclass

from cpm.constants import DEFAULT_PACKAGES_BASE_URL, DEFAULT_REGISTRY_URL


@dataclass(frozen=True)
class CpmSettings:
    """Remote endpoints cpm talks to.

    Attributes:
        registry_url: URL of the registry JSON index (CPM_REGISTRY_URL)
        packages_base_url: Base URL of the packages monorepo (CPM_PACKAGES_URL)
    """

    registry_url: str = DEFAULT_REGISTRY_URL
    packages_base_url: str = DEFAULT_PACKAGES_BASE_URL

    @classmethod
    def from_env(cls) -> "CpmSettings":
        """Load settings from environment variables, falling back to defaults."""
        return cls(
            registry_url=os.environ.get("CPM_REGISTRY_URL", DEFAULT_REGISTRY_URL),
            packages_base_url=os.environ.get(
                "CPM_PACKAGES_URL", DEFAULT_PACKAGES_BASE_URL
            ).rstrip("/"),
        )
