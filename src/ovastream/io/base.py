"""Base protocols and shared types for I/O layer."""

import io
from typing import BinaryIO, Callable, Iterator, Optional, Protocol, Tuple, runtime_checkable


DEFAULT_CHUNK_SIZE = 64 * 1024  # 64 KiB

OpenResult = Tuple[BinaryIO, Optional[int]]


@runtime_checkable
class Transport(Protocol):
    """Protocol for remote download backends."""

    def download(self, url: str) -> OpenResult:
        """Return (stream, length) for `url`; length is None when unknown.
        Closing the stream must release the underlying connection.
        """
        ...


class IteratorStream(io.RawIOBase):
    """Raw file object over an iterator of byte chunks.

    `on_close` is called once when the stream is closed, e.g. to hand the
    connection back to the HTTP client.
    """

    def __init__(self, chunks: Iterator[bytes], on_close: Optional[Callable[[], None]] = None):
        super().__init__()
        self._chunks = chunks
        self._on_close = on_close
        self._pending = b""

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        if not self._pending:
            try:
                self._pending = next(self._chunks)
                while not self._pending:
                    self._pending = next(self._chunks)
            except StopIteration:
                return 0
        n = min(len(buffer), len(self._pending))
        buffer[:n] = self._pending[:n]
        self._pending = self._pending[n:]
        return n

    def close(self) -> None:
        if self.closed:
            return
        try:
            if self._on_close is not None:
                self._on_close()
        finally:
            super().close()


def buffered(chunks: Iterator[bytes], on_close: Optional[Callable[[], None]] = None,
             buffer_size: int = DEFAULT_CHUNK_SIZE) -> BinaryIO:
    """Wrap a chunk iterator in a buffered binary stream."""
    return io.BufferedReader(IteratorStream(chunks, on_close), buffer_size=buffer_size)
