"""Resolve entries inside a tar (OVA) archive with a single forward scan."""

from __future__ import annotations
import io
import logging
import tarfile
from typing import BinaryIO, Optional

from ..core.model import ArchiveError, NotFoundError, ResourceHandle
from ..core.pattern import compile_glob, match_base
from ..io import Opener

logger = logging.getLogger(__name__)


class _TailRecorder:
    """Pass-through reader that keeps the most recently read bytes.

    tarfile stops iterating at an unreadable header instead of raising, so
    the scan looks the stopping block up here to tell end-of-archive from a
    corrupt header.
    """

    def __init__(self, stream: BinaryIO, keep: int = 2 * tarfile.RECORDSIZE + tarfile.BLOCKSIZE):
        self._stream = stream
        self._keep = keep
        self._tail = bytearray()
        self._end = 0           # absolute offset just past self._tail
        self.recording = True

    def read(self, size: int = -1) -> bytes:
        data = self._stream.read(size)
        self._end += len(data)
        if self.recording:
            self._tail += data
            del self._tail[:-self._keep]
        return data

    def block_at(self, offset: int) -> Optional[bytes]:
        """Return up to one tar block at absolute `offset`, or None if no longer kept."""
        start = self._end - len(self._tail)
        if offset < start:
            return None
        return bytes(self._tail[offset - start:offset - start + tarfile.BLOCKSIZE])


class _EntryReader:
    """Member reader reporting tar framing errors as ArchiveError."""

    def __init__(self, reader: BinaryIO, path: str):
        self._reader = reader
        self._path = path

    def read(self, size: int = -1) -> bytes:
        try:
            return self._reader.read(size)
        except tarfile.TarError as e:
            raise ArchiveError(f"{self._path}: {e}") from e

    def close(self) -> None:
        self._reader.close()


class TapeArchive:
    """Entries are members of the tar archive at `path`.

    Tar has no index, so every `open` re-opens the archive and reads member
    headers in order until the first base name matching the pattern.
    """

    def __init__(self, path: str, opener: Optional[Opener] = None):
        self.path = path
        self.opener = opener if opener is not None else Opener()

    def open(self, name: str) -> ResourceHandle:
        """Return a handle for the first member whose base name matches `name`."""
        compile_glob(name)

        stream, _ = self.opener.open_file(self.path)
        tar = None
        try:
            recorder = _TailRecorder(stream)
            # stream mode: no seeking, works for HTTP bodies too
            tar = tarfile.open(fileobj=recorder, mode="r|")
            for member in tar:
                if not match_base(name, member.name):
                    logger.debug("Skipping %s in %s", member.name, self.path)
                    continue

                logger.debug("Matched %s in %s (%d bytes)", member.name, self.path, member.size)
                recorder.recording = False
                reader = tar.extractfile(member) if member.isreg() else None
                if reader is None:
                    reader = io.BytesIO(b"")
                return ResourceHandle(_EntryReader(reader, self.path), member.name, member.size,
                                      underlying=stream, extra=(tar,))
            _check_end_of_archive(recorder, tar.offset, self.path)
        except tarfile.TarError as e:
            _release(tar, stream)
            raise ArchiveError(f"{self.path}: {e}") from e
        except BaseException:
            _release(tar, stream)
            raise

        _release(tar, stream)
        raise NotFoundError(f"{name}: no matching entry in {self.path}")

    def __repr__(self) -> str:
        return f"TapeArchive({self.path!r})"


def _check_end_of_archive(recorder: _TailRecorder, offset: int, path: str) -> None:
    """Raise ArchiveError unless the block at `offset` is a zero block or EOF."""
    block = recorder.block_at(offset)
    if not block:
        return
    if len(block) < tarfile.BLOCKSIZE and block.count(0) != len(block):
        raise ArchiveError(f"{path}: truncated header at offset {offset}")
    if block.count(0) != len(block):
        raise ArchiveError(f"{path}: invalid header at offset {offset}")


def _release(tar, stream):
    try:
        if tar is not None:
            tar.close()
    finally:
        stream.close()
