"""I/O layer for ovastream - opens local paths and remote URLs as byte streams."""

import logging
from typing import Optional
from urllib.parse import urlparse

# Re-export these for import convenience
from .base import Transport, OpenResult, IteratorStream
from .local import open_local, canonical_path
from .http_sync import RequestsTransport
from .http_httpx import HttpxTransport
from ..core.model import UnsupportedError

logger = logging.getLogger(__name__)

REMOTE_SCHEMES = ("http://", "https://")


def is_remote_path(address: str) -> bool:
    """Return True only when `address` starts with a recognized URL scheme."""
    return str(address).startswith(REMOTE_SCHEMES)


class Opener:
    """Opens an address locally or through the configured remote transport."""

    def __init__(self, transport: Optional[Transport] = None):
        self.transport = transport

    def open_file(self, address: str) -> OpenResult:
        if is_remote_path(address):
            return self.open_remote(address)
        return self.open_local(address)

    def open_local(self, path: str) -> OpenResult:
        return open_local(path)

    def open_remote(self, link: str) -> OpenResult:
        if self.transport is None:
            raise UnsupportedError("remote path not supported")
        parsed = urlparse(link)
        if not parsed.netloc:
            raise ValueError(f"Invalid URL: {link!r}")
        logger.debug("Downloading %s", link)
        return self.transport.download(link)


def open_file(address: str, transport: Optional[Transport] = None) -> OpenResult:
    """Factory function: open `address` and return (stream, length)."""
    return Opener(transport).open_file(address)
