"""Test helpers: tar builders and close-tracking fakes."""

import io
import tarfile

from ovastream.core.model import NotFoundError
from ovastream.io import Opener


OVF_XML = b'<?xml version="1.0"?>\n<Envelope xmlns="http://schemas.dmtf.org/ovf/envelope/1"/>\n'
DISK_DATA = b"\x00VMDK" * 300
MF_TEXT = (
    b"SHA256(appliance.ovf)= " + b"ab" * 32 + b"\n"
    b"SHA1(appliance-disk1.vmdk)= " + b"CD" * 20 + b"\n"
)


def build_tar(entries) -> bytes:
    """Build an uncompressed tar from (name, data) pairs, in order."""
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w", format=tarfile.USTAR_FORMAT) as tar:
        for name, data in entries:
            if data is None:
                info = tarfile.TarInfo(name)
                info.type = tarfile.DIRTYPE
                tar.addfile(info)
                continue
            info = tarfile.TarInfo(name)
            info.size = len(data)
            tar.addfile(info, io.BytesIO(data))
    return buf.getvalue()


class ClosingBytesIO(io.BytesIO):
    """BytesIO that counts close() calls."""

    def __init__(self, data=b""):
        super().__init__(data)
        self.close_count = 0

    def close(self):
        self.close_count += 1
        super().close()


class FakeOpener(Opener):
    """Opener serving in-memory blobs and remembering every stream it handed out."""

    def __init__(self, files):
        super().__init__(transport=None)
        self.files = dict(files)
        self.opened = []   # (address, stream)

    def open_file(self, address):
        if address not in self.files:
            raise NotFoundError(address)
        stream = ClosingBytesIO(self.files[address])
        self.opened.append((address, stream))
        return stream, len(self.files[address])

    def assert_all_closed_once(self):
        for address, stream in self.opened:
            assert stream.close_count == 1, f"{address} closed {stream.close_count} times"


