"""Archive resolvers: one `open(name)` contract over tar and flat-file layouts."""

from typing import Optional

from .base import Archive
from .flat import FileArchive
from .tape import TapeArchive
from ..io import Opener

TAPE_EXTENSIONS = (".ova",)


def is_tape_path(path: str) -> bool:
    return str(path).lower().endswith(TAPE_EXTENSIONS)


def open_archive(path: str, opener: Optional[Opener] = None) -> Archive:
    """Factory function to create the resolver matching `path`."""
    if is_tape_path(path):
        return TapeArchive(path, opener)
    return FileArchive(path, opener)


__all__ = ["Archive", "FileArchive", "TapeArchive", "open_archive", "is_tape_path"]
