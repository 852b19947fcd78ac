"""ovastream - read OVF descriptors, manifests and disks from OVA archives, folders or URLs."""

from .core.model import (                                             # re-export
    ResourceHandle, Manifest, Checksum,
    NotFoundError, InvalidPatternError, UnsupportedError, ArchiveError, ManifestParseError,
)
from .io import Opener, open_file, is_remote_path, RequestsTransport, HttpxTransport
from .archive import Archive, FileArchive, TapeArchive, open_archive
from .manifest import manifest_name, parse_manifest, load_manifest
from .source import ImportSource


def open_source(path: str, transport=None) -> ImportSource:
    """Create an ImportSource for a local path or URL."""
    return ImportSource.from_path(path, Opener(transport))


__all__ = [
    "open_source", "open_file", "open_archive", "is_remote_path",
    "Opener", "RequestsTransport", "HttpxTransport",
    "Archive", "FileArchive", "TapeArchive", "ImportSource",
    "manifest_name", "parse_manifest", "load_manifest",
    "ResourceHandle", "Manifest", "Checksum",
    "NotFoundError", "InvalidPatternError", "UnsupportedError", "ArchiveError", "ManifestParseError",
]
