"""Shared fixtures for archive tests."""

import pytest

from helpers import DISK_DATA, MF_TEXT, OVF_XML, build_tar


@pytest.fixture
def appliance_entries():
    return [
        ("appliance.ovf", OVF_XML),
        ("appliance.mf", MF_TEXT),
        ("appliance-disk1.vmdk", DISK_DATA),
    ]


@pytest.fixture
def ova_bytes(appliance_entries):
    return build_tar(appliance_entries)


@pytest.fixture
def ova_path(tmp_path, ova_bytes):
    path = tmp_path / "appliance.ova"
    path.write_bytes(ova_bytes)
    return path


@pytest.fixture
def ovf_dir(tmp_path, appliance_entries):
    folder = tmp_path / "appliance"
    folder.mkdir()
    for name, data in appliance_entries:
        (folder / name).write_bytes(data)
    return folder
