"""In-memory fake implementation of HttpClient for testing."""

from cpm.errors import ArchiveTooLargeError, HttpError
from cpm.integrations.http.abc import HttpClient


class FakeHttpClient(HttpClient):
    """Serves canned responses keyed by URL.

    All state is provided via constructor using keyword arguments.
    This class has NO public setup methods.

    URLs without a canned response fail with a 404 HttpError. A response
    value that is an exception instance is raised instead of returned.
    """

    def __init__(
        self,
        *,
        responses: dict[str, str | bytes | Exception] | None = None,
    ) -> None:
        """Create FakeHttpClient.

        Args:
            responses: Mapping of URL -> body (str or bytes) or exception to raise
        """
        self._responses = dict(responses or {})
        self._requested_urls: list[str] = []
        self._closed = False

    @property
    def requested_urls(self) -> list[str]:
        """URLs requested so far, in order, for test assertions."""
        return self._requested_urls.copy()

    @property
    def closed(self) -> bool:
        return self._closed

    def _lookup(self, url: str) -> str | bytes:
        self._requested_urls.append(url)
        if url not in self._responses:
            raise HttpError(url, "404 Not Found", status_code=404)
        response = self._responses[url]
        if isinstance(response, Exception):
            raise response
        return response

    async def get_text(self, url: str, *, timeout: float) -> str:
        body = self._lookup(url)
        if isinstance(body, bytes):
            return body.decode("utf-8")
        return body

    async def download(self, url: str, *, max_bytes: int, timeout: float) -> bytes:
        body = self._lookup(url)
        if isinstance(body, str):
            body = body.encode("utf-8")
        if len(body) > max_bytes:
            raise ArchiveTooLargeError(url, max_bytes)
        return body

    async def aclose(self) -> None:
        self._closed = True
