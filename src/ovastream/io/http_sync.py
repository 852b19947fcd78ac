"""Remote download transport using requests."""

import logging
from typing import Optional

import requests

from ..core.model import NotFoundError
from .base import DEFAULT_CHUNK_SIZE, OpenResult, buffered

logger = logging.getLogger(__name__)

_NOT_FOUND_STATUSES = (404, 410)


def _content_length(headers) -> Optional[int]:
    value = headers.get("content-length")
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


class RequestsTransport:
    """Streams HTTP(S) downloads through a requests Session."""

    def __init__(self, session: Optional[requests.Session] = None,
                 timeout: Optional[float] = None, chunk_size: int = DEFAULT_CHUNK_SIZE):
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.chunk_size = chunk_size

    def download(self, url: str) -> OpenResult:
        """Start a streaming GET for `url` and return (stream, length)."""
        logger.debug("GET %s", url)
        try:
            response = self.session.get(url, stream=True, timeout=self.timeout)
        except requests.RequestException as e:
            raise IOError(f"GET request failed: {e}") from e

        if response.status_code >= 400:
            response.close()
            if response.status_code in _NOT_FOUND_STATUSES:
                raise NotFoundError(f"{url}: HTTP {response.status_code}")
            raise IOError(f"GET request failed with status {response.status_code}")

        def chunks():
            try:
                yield from response.iter_content(chunk_size=self.chunk_size)
            except requests.RequestException as e:
                raise IOError(f"GET request failed: {e}") from e

        stream = buffered(chunks(), response.close, self.chunk_size)
        return stream, _content_length(response.headers)

    def close(self):
        """Close the session if this transport created it."""
        if self._owns_session:
            self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

