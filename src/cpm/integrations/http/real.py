"""Production HTTP client backed by httpx."""

import logging

import httpx

from cpm.errors import ArchiveTooLargeError, HttpError
from cpm.integrations.http.abc import HttpClient
from cpm.version import __version__

logger = logging.getLogger(__name__)


class RealHttpClient(HttpClient):
    """HttpClient using a shared httpx.AsyncClient."""

    def __init__(self, client: httpx.AsyncClient | None = None) -> None:
        """Create RealHttpClient.

        Args:
            client: Optional preconfigured client (e.g. with a mock transport)
        """
        self._client = client or httpx.AsyncClient(
            follow_redirects=True,
            headers={"User-Agent": f"cpm/{__version__}"},
        )

    async def get_text(self, url: str, *, timeout: float) -> str:
        logger.debug("GET %s", url)
        try:
            response = await self._client.get(url, timeout=timeout)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise HttpError(url, str(e), status_code=e.response.status_code) from e
        except httpx.HTTPError as e:
            raise HttpError(url, str(e) or type(e).__name__) from e
        return response.text

    async def download(self, url: str, *, max_bytes: int, timeout: float) -> bytes:
        logger.debug("Downloading %s", url)
        try:
            async with self._client.stream("GET", url, timeout=timeout) as response:
                response.raise_for_status()

                declared = response.headers.get("content-length")
                if declared is not None and declared.isdigit() and int(declared) > max_bytes:
                    raise ArchiveTooLargeError(url, max_bytes)

                chunks: list[bytes] = []
                received = 0
                async for chunk in response.aiter_bytes():
                    received += len(chunk)
                    if received > max_bytes:
                        raise ArchiveTooLargeError(url, max_bytes)
                    chunks.append(chunk)
        except httpx.HTTPStatusError as e:
            raise HttpError(url, str(e), status_code=e.response.status_code) from e
        except httpx.HTTPError as e:
            raise HttpError(url, str(e) or type(e).__name__) from e
        return b"".join(chunks)

    async def aclose(self) -> None:
        await self._client.aclose()
