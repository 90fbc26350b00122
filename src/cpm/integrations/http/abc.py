"""Abstract base class for HTTP access."""

from abc import ABC, abstractmethod


class HttpClient(ABC):
    """Abstract interface for the HTTP requests cpm makes.

    Implementations include:
    - FakeHttpClient: Canned responses for testing
    - RealHttpClient: httpx.AsyncClient for production

    Every call takes its own timeout so a slow host delays only its own
    request.
    """

    @abstractmethod
    async def get_text(self, url: str, *, timeout: float) -> str:
        """Fetch a URL and return the body as text.

        Args:
            url: URL to fetch
            timeout: Seconds before the request is abandoned

        Returns:
            Response body decoded as text

        Raises:
            HttpError: On transport failure, timeout, or non-2xx status
        """
        ...

    @abstractmethod
    async def download(self, url: str, *, max_bytes: int, timeout: float) -> bytes:
        """Download a URL into memory, enforcing a size limit while streaming.

        A declared Content-Length above the limit aborts before the body is
        read. A body that crosses the limit while streaming aborts as soon as
        it does. The caller only receives complete, in-limit bodies.

        Args:
            url: URL to download
            max_bytes: Largest body accepted
            timeout: Seconds before the request is abandoned

        Returns:
            The complete response body

        Raises:
            HttpError: On transport failure, timeout, or non-2xx status
            ArchiveTooLargeError: If the body exceeds max_bytes
        """
        ...

    @abstractmethod
    async def aclose(self) -> None:
        """Release pooled connections."""
        ...
