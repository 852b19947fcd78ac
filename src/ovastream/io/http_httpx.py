"""Remote download transport using httpx."""

import logging
from typing import Optional

import httpx

from ..core.model import NotFoundError
from .base import DEFAULT_CHUNK_SIZE, OpenResult, buffered
from .http_sync import _NOT_FOUND_STATUSES, _content_length

logger = logging.getLogger(__name__)


class HttpxTransport:
    """Streams HTTP(S) downloads through an httpx Client."""

    def __init__(self, client: Optional[httpx.Client] = None,
                 timeout: Optional[float] = None, chunk_size: int = DEFAULT_CHUNK_SIZE):
        self._owns_client = client is None
        self.client = client if client is not None else httpx.Client(timeout=timeout, follow_redirects=True)
        self.chunk_size = chunk_size

    def download(self, url: str) -> OpenResult:
        """Start a streaming GET for `url` and return (stream, length)."""
        logger.debug("GET %s", url)
        try:
            request = self.client.build_request("GET", url)
            response = self.client.send(request, stream=True)
        except httpx.HTTPError as e:
            raise IOError(f"GET request failed: {e}") from e

        if response.status_code >= 400:
            response.close()
            if response.status_code in _NOT_FOUND_STATUSES:
                raise NotFoundError(f"{url}: HTTP {response.status_code}")
            raise IOError(f"GET request failed with status {response.status_code}")

        def chunks():
            try:
                yield from response.iter_bytes(chunk_size=self.chunk_size)
            except httpx.HTTPError as e:
                raise IOError(f"GET request failed: {e}") from e

        stream = buffered(chunks(), response.close, self.chunk_size)
        return stream, _content_length(response.headers)

    def close(self):
        """Close the client if this transport created it."""
        if self._owns_client:
            self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
