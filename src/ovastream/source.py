"""Import sources: an archive resolver plus the name of its OVF descriptor."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from .archive import Archive, FileArchive, TapeArchive, is_tape_path
from .core.model import Manifest, ResourceHandle
from .io import Opener
from .manifest import ManifestParser, load_manifest, parse_manifest

DESCRIPTOR_PATTERN = "*.ovf"


@dataclass(frozen=True)
class ImportSource:
    archive: Archive
    descriptor: str   # name (or pattern) the descriptor is opened with

    @classmethod
    def from_path(cls, path: str, opener: Optional[Opener] = None) -> "ImportSource":
        """OVA files are scanned for `*.ovf`; anything else is the descriptor itself."""
        if is_tape_path(path):
            return cls(TapeArchive(path, opener), DESCRIPTOR_PATTERN)
        return cls(FileArchive(path, opener), path)

    @property
    def path(self) -> str:
        return self.archive.path

    def open(self, name: str) -> ResourceHandle:
        return self.archive.open(name)

    def read_descriptor(self) -> bytes:
        with self.archive.open(self.descriptor) as handle:
            return handle.read()

    def load_manifest(self, parser: ManifestParser = parse_manifest) -> Manifest:
        return load_manifest(self.archive, self.descriptor, parser)
