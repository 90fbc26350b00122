"""Exceptions raised by cpm.

Every error derives from CpmError so the CLI error boundary can render any of
them as a one-line message. Sources convert fetch and validation failures into
"no result" before they reach the resolver, so most of these never escape an
install.
"""


class CpmError(Exception):
    """Base class for all cpm errors."""


class InvalidPackageNameError(CpmError):
    """Raised when a package name fails validation."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid package name '{name}': {reason}")


class PackageNotFoundError(CpmError):
    """Raised when the registry has no entry for a package."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Package not found: {name}")


class RegistryUnavailableError(CpmError):
    """Raised when the registry index cannot be fetched and nothing is cached."""

    def __init__(self, url: str, cause: str) -> None:
        self.url = url
        self.cause = cause
        super().__init__(
            f"Unable to fetch package registry from {url}: {cause}. "
            "Check your network connection or set CPM_REGISTRY_URL."
        )


class ManifestValidationError(CpmError):
    """Raised when a manifest document does not match the schema."""

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        self.message = message
        location = path if path else "<root>"
        super().__init__(f"Invalid manifest: {location} - {message}")


class ManifestNotFoundError(CpmError):
    """Raised when every manifest source declined a package."""

    def __init__(self, name: str, tried: list[str]) -> None:
        self.name = name
        self.tried = tried
        super().__init__(f"No manifest source could resolve {name} (tried: {', '.join(tried)})")


class HttpError(CpmError):
    """Raised for transport failures and non-success HTTP responses."""

    def __init__(self, url: str, message: str, status_code: int | None = None) -> None:
        self.url = url
        self.status_code = status_code
        super().__init__(f"HTTP request to {url} failed: {message}")


class InsecureURLError(CpmError):
    """Raised when a download URL does not use HTTPS."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"Refusing non-HTTPS download: {url}")


class ArchiveTooLargeError(CpmError):
    """Raised when a download exceeds the size limit."""

    def __init__(self, url: str, limit_bytes: int) -> None:
        self.url = url
        self.limit_bytes = limit_bytes
        limit_mb = limit_bytes // (1024 * 1024)
        super().__init__(f"Download from {url} exceeds the {limit_mb}MB limit")


class LockTimeoutError(CpmError):
    """Raised when a file lock cannot be acquired in time."""

    def __init__(self, resource: str, timeout: float) -> None:
        self.resource = resource
        self.timeout = timeout
        super().__init__(f"Could not acquire lock for {resource} after {timeout:.1f}s")


class HandlerNotFoundError(CpmError):
    """Raised when no handler is registered for a package type."""

    def __init__(self, package_type: str) -> None:
        self.package_type = package_type
        super().__init__(f"No handler registered for package type: {package_type}")


class SecurityValidationError(CpmError):
    """Raised when package content violates the security policy."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)
