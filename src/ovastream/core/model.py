from __future__ import annotations
from collections.abc import Mapping
from dataclasses import dataclass
from typing import BinaryIO, Dict, Iterator, Optional


class NotFoundError(FileNotFoundError):
    """Raised when a path or archive entry does not exist."""
    pass


class InvalidPatternError(ValueError):
    """Raised when an entry pattern is not a well-formed shell glob."""
    pass


class UnsupportedError(RuntimeError):
    """Raised when a remote address is opened without a configured transport."""
    pass


class ArchiveError(OSError):
    """Raised when the tar framing of an archive is corrupt."""
    pass


class ManifestParseError(ValueError):
    """Raised when a manifest line cannot be parsed."""
    pass


@dataclass(frozen=True, slots=True)
class Checksum:
    algorithm: str
    value: str


class Manifest(Mapping):
    """Read-only mapping of entry name -> Checksum."""

    def __init__(self, entries: Optional[Dict[str, Checksum]] = None):
        self._entries = dict(entries or {})

    def __getitem__(self, name: str) -> Checksum:
        return self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Manifest({self._entries!r})"


class ResourceHandle:
    """Readable stream returned by an archive lookup.

    The handle owns the narrowed ``reader`` and, optionally, the
    ``underlying`` stream it was cut from (e.g. the whole tar archive).
    Closing the handle releases both, each exactly once.
    """

    def __init__(self, reader: BinaryIO, name: str, size: Optional[int],
                 underlying: Optional[BinaryIO] = None, extra: tuple = ()):
        self.name = name
        self.size = size
        self._reader = reader
        # closed in order after the reader, before the underlying stream
        self._extra = extra
        self._underlying = underlying
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def readable(self) -> bool:
        return not self._closed

    def read(self, size: int = -1) -> bytes:
        if self._closed:
            raise ValueError("I/O operation on closed resource handle")
        return self._reader.read(size)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._reader.close()
        finally:
            try:
                for resource in self._extra:
                    resource.close()
            finally:
                if self._underlying is not None and self._underlying is not self._reader:
                    self._underlying.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"<ResourceHandle {self.name!r} size={self.size} {state}>"
