"""Shared fixtures: on-disk device and library trees."""

from pathlib import Path

import pytest

DEVICE_FILES = {
    "album/side_a.aif": b"side a audio",
    "album/side_b.aif": b"side b audio",
    "tape/track_1.aif": b"track one",
    "tape/track_2.aif": b"track two",
    "tape/track_3.aif": b"track three",
    "tape/track_4.aif": b"track four",
}
DEVICE_DIRS = ["drum", "synth"]


def build_device(root: Path) -> Path:
    """Create a complete device tree under root."""
    for relative, content in DEVICE_FILES.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
    for name in DEVICE_DIRS:
        (root / name).mkdir(parents=True, exist_ok=True)
    return root


@pytest.fixture
def device_root(tmp_path: Path) -> Path:
    return build_device(tmp_path / "device")


@pytest.fixture
def library_root(tmp_path: Path) -> Path:
    root = tmp_path / "library"
    (root / "songs").mkdir(parents=True)
    return root


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path: Path, monkeypatch):
    """Keep config and log lookups inside the test's temp directory."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg-data"))
    for name in ("SAMPLER_SYNC_DEVICE", "SAMPLER_SYNC_LIBRARY", "SAMPLER_SYNC_ARTIST"):
        monkeypatch.delenv(name, raising=False)
