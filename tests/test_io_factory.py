"""Tests for local/remote dispatch."""

import io

import pytest

from ovastream.core.model import UnsupportedError
from ovastream.io import Opener, Transport, is_remote_path, open_file


class RecordingTransport:
    """Transport double that records requested URLs."""

    def __init__(self, data=b"remote", length=6):
        self.data = data
        self.length = length
        self.urls = []

    def download(self, url):
        self.urls.append(url)
        return io.BytesIO(self.data), self.length


class TestClassification:
    """Test remote/local classification."""

    @pytest.mark.parametrize("address", [
        "http://example.com/a.ova",
        "https://example.com/a.ova",
        "https://host:8443/dir/a.ovf?x=1",
    ])
    def test_remote(self, address):
        assert is_remote_path(address)

    @pytest.mark.parametrize("address", [
        "/data/a.ova",
        "a.ova",
        "./http://a.ova",
        "/mirror/http://example.com/a.ova",
        "ftp://example.com/a.ova",
        "HTTP://example.com/a.ova",
        "file:///data/a.ova",
    ])
    def test_local(self, address):
        assert not is_remote_path(address)


class TestOpener:
    """Test the Opener dispatch."""

    def test_local_path(self, tmp_path):
        path = tmp_path / "x.ovf"
        path.write_bytes(b"0123456789")
        transport = RecordingTransport()

        stream, size = Opener(transport).open_file(str(path))
        with stream:
            assert stream.read() == b"0123456789"
        assert size == 10
        assert transport.urls == []

    def test_path_containing_scheme_is_local(self, tmp_path):
        transport = RecordingTransport()
        with pytest.raises(FileNotFoundError):
            Opener(transport).open_file(f"{tmp_path}/http://example.com/x.ovf")
        assert transport.urls == []

    def test_remote_uses_transport(self):
        transport = RecordingTransport(b"abc", None)

        stream, size = Opener(transport).open_file("https://example.com/x.ovf")
        assert stream.read() == b"abc"
        assert size is None
        assert transport.urls == ["https://example.com/x.ovf"]

    def test_remote_without_transport_is_unsupported(self, monkeypatch):
        """No transport configured: fail before any network access."""
        import requests

        def no_network(*args, **kwargs):
            raise AssertionError("network call attempted")

        monkeypatch.setattr(requests.Session, "request", no_network)

        with pytest.raises(UnsupportedError, match="remote path not supported"):
            Opener().open_file("http://example.com/x.ova")

    def test_remote_without_host(self):
        with pytest.raises(ValueError):
            Opener(RecordingTransport()).open_file("http://")

    def test_transport_protocol(self):
        assert isinstance(RecordingTransport(), Transport)

    def test_open_file_factory(self, tmp_path):
        path = tmp_path / "x.mf"
        path.write_bytes(b"abc")
        stream, size = open_file(str(path))
        with stream:
            assert size == 3
        with pytest.raises(UnsupportedError):
            open_file("https://example.com/x.mf")
