"""Locate and parse the checksum manifest (.mf) belonging to a descriptor."""

from __future__ import annotations
import logging
import posixpath
import re
from typing import BinaryIO, Callable

from .archive.base import Archive
from .core.model import Checksum, Manifest, ManifestParseError

logger = logging.getLogger(__name__)

MANIFEST_EXT = ".mf"

# SHA256(disk1.vmdk)= 0a1b...
_LINE_RE = re.compile(r"^\s*(?P<algo>[A-Za-z0-9-]+)\((?P<name>.+)\)\s*=\s*(?P<digest>[0-9A-Fa-f]+)\s*$")

ManifestParser = Callable[[BinaryIO], Manifest]


def manifest_name(path: str) -> str:
    """Return the manifest base name for a descriptor or archive path."""
    base = posixpath.basename(str(path).replace("\\", "/"))
    stem, _ = posixpath.splitext(base)
    return stem + MANIFEST_EXT


def parse_manifest(stream: BinaryIO) -> Manifest:
    """Parse an OVF manifest stream into a Manifest."""
    entries = {}
    try:
        text = stream.read().decode("utf-8")
    except UnicodeDecodeError as e:
        raise ManifestParseError(f"manifest is not UTF-8: {e}") from e

    for lineno, line in enumerate(text.splitlines(), 1):
        if not line.strip():
            continue
        m = _LINE_RE.match(line)
        if m is None:
            raise ManifestParseError(f"line {lineno}: cannot parse {line!r}")
        entries[m.group("name")] = Checksum(m.group("algo").upper(), m.group("digest").lower())
    return Manifest(entries)


def load_manifest(archive: Archive, path: str, parser: ManifestParser = parse_manifest) -> Manifest:
    """Open the manifest next to (or inside) `archive` and parse it.

    A manifest that cannot be opened is logged and the error re-raised;
    no empty manifest is returned in its place.
    """
    name = manifest_name(path)
    try:
        handle = archive.open(name)
    except Exception as e:
        logger.error("manifest %r: %s", name, e)
        raise

    with handle:
        return parser(handle)
