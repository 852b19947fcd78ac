"""Resolve entries as sibling files of a descriptor."""

from __future__ import annotations
import os
from typing import Optional

from ..core.model import ResourceHandle
from ..io import Opener


class FileArchive:
    """Entries live next to the primary path (a directory of loose files)."""

    def __init__(self, path: str, opener: Optional[Opener] = None):
        self.path = path
        self.opener = opener if opener is not None else Opener()

    def sibling_path(self, name: str) -> str:
        """Return the address of `name` in the directory of `self.path`."""
        if name == self.path:
            return name
        index = self.path.rfind("/")
        if os.sep != "/":
            index = max(index, self.path.rfind(os.sep))
        if index == -1:
            return name
        return self.path[:index + 1] + name

    def open(self, name: str) -> ResourceHandle:
        fpath = self.sibling_path(name)
        stream, size = self.opener.open_file(fpath)
        return ResourceHandle(stream, fpath, size)

    def __repr__(self) -> str:
        return f"FileArchive({self.path!r})"
