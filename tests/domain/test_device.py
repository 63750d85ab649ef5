"""Tests for opening a device and writing its tape."""

import shutil
from unittest.mock import patch

import pytest

from sampler_sync.core.exceptions import (
    RootNotFoundError,
    SourceNotFoundError,
    StructureInvalidError,
    TapeWriteError,
)
from sampler_sync.domain.device import Device
from sampler_sync.domain.models import SideSlot, TrackNumber
from sampler_sync.domain.structure import DeviceLayout


def make_sources(tmp_path, count=4):
    sources = []
    for n in range(1, count + 1):
        path = tmp_path / "sources" / f"new_{n}.aif"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(f"new track {n}".encode())
        sources.append(path)
    return sources


class TestDeviceOpen:
    """Validation on open."""

    def test_open_resolves_assets(self, device_root):
        device = Device.open(device_root)

        assert device.mount_path == device_root
        assert device.album.side_a.slot is SideSlot.A
        assert device.album.side_a.path == device_root / "album" / "side_a.aif"
        assert device.album.side_b.path == device_root / "album" / "side_b.aif"
        assert [t.name for t in device.tape.tracks()] == [
            "track_1",
            "track_2",
            "track_3",
            "track_4",
        ]
        assert device.tape.track(4).path == device_root / "tape" / "track_4.aif"
        assert device.tape.paths() == [
            device_root / "tape" / f"track_{n}.aif" for n in range(1, 5)
        ]

    def test_missing_drum_is_invalid(self, device_root):
        """Seven of eight entries is not enough."""
        shutil.rmtree(device_root / "drum")

        with pytest.raises(StructureInvalidError) as exc_info:
            Device.open(device_root)

        assert exc_info.value.missing == ["drum/"]
        assert exc_info.value.root == device_root

    def test_missing_mount(self, tmp_path):
        with pytest.raises(RootNotFoundError):
            Device.open(tmp_path / "not-mounted")

    def test_custom_layout(self, device_root):
        (device_root / "drum").rename(device_root / "kit")
        layout = DeviceLayout(required_dirs=("kit", "synth"))

        device = Device.open(device_root, layout)

        assert device.layout == layout

    def test_side_lookup(self, device_root):
        album = Device.open(device_root).album
        assert album.side(SideSlot.B) == album.side_b
        assert album.side(SideSlot.NEITHER).path is None


class TestWriteTape:
    """Loading four tracks onto the device."""

    def test_writes_all_tracks_in_order(self, device_root, tmp_path):
        device = Device.open(device_root)
        sources = make_sources(tmp_path)
        written = []

        device.write_tape(sources, on_track=written.append)

        assert [t.number for t in written] == list(TrackNumber)
        for n in range(1, 5):
            assert (device_root / "tape" / f"track_{n}.aif").read_bytes() == (
                f"new track {n}".encode()
            )

    def test_fewer_than_four_sources_writes_nothing(self, device_root, tmp_path):
        device = Device.open(device_root)
        sources = make_sources(tmp_path, count=3)

        with pytest.raises(TapeWriteError) as exc_info:
            device.write_tape(sources)

        assert exc_info.value.track_number == 4
        assert (device_root / "tape" / "track_1.aif").read_bytes() == b"track one"

    def test_stops_at_first_failure(self, device_root, tmp_path):
        device = Device.open(device_root)
        sources = make_sources(tmp_path)
        sources[2].unlink()

        with pytest.raises(TapeWriteError) as exc_info:
            device.write_tape(sources)

        assert exc_info.value.track_number == 3
        assert isinstance(exc_info.value.__cause__, SourceNotFoundError)
        # Earlier tracks stay overwritten, later ones untouched
        assert (device_root / "tape" / "track_1.aif").read_bytes() == b"new track 1"
        assert (device_root / "tape" / "track_2.aif").read_bytes() == b"new track 2"
        assert (device_root / "tape" / "track_4.aif").read_bytes() == b"track four"

    def test_copies_in_ascending_order(self, device_root, tmp_path):
        device = Device.open(device_root)
        sources = make_sources(tmp_path)

        with patch("sampler_sync.domain.device.copy_file") as mock_copy:
            device.write_tape(sources)

        targets = [call.args[1].name for call in mock_copy.call_args_list]
        assert targets == ["track_1.aif", "track_2.aif", "track_3.aif", "track_4.aif"]
