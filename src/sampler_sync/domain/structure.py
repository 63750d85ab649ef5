"""
Directory shape validation.

A shape is a tuple of Entry requirements on a root's immediate children.
Directory entries may carry their own child requirements, checked one level
further down. Entries that cannot be read are treated as absent; only a root
that cannot be listed at all is an error.
"""

import os
from pathlib import Path
from typing import NamedTuple, Optional

from loguru import logger

from ..core.config import DeviceConfig
from ..core.exceptions import InaccessibleError, RootNotFoundError
from .paths import TRACK_COUNT, track_file_name

FILE = "file"
DIRECTORY = "directory"


class Entry(NamedTuple):
    """A required child of a directory."""

    name: str
    kind: str = FILE
    children: tuple["Entry", ...] = ()

    @classmethod
    def file(cls, name: str) -> "Entry":
        return cls(name, FILE)

    @classmethod
    def directory(cls, name: str, *children: "Entry") -> "Entry":
        return cls(name, DIRECTORY, tuple(children))


class DeviceLayout(NamedTuple):
    """Relative paths a mounted device must expose."""

    album_dir: str = "album"
    tape_dir: str = "tape"
    required_dirs: tuple[str, ...] = ("drum", "synth")
    extension: str = ".aif"

    @classmethod
    def from_config(cls, config: DeviceConfig) -> "DeviceLayout":
        return cls(
            album_dir=config.album_dir,
            tape_dir=config.tape_dir,
            required_dirs=tuple(config.required_dirs),
            extension=config.extension,
        )

    def side_file(self, side_name: str) -> str:
        return f"{side_name}{self.extension}"

    def side_path(self, side_name: str) -> str:
        return f"{self.album_dir}/{self.side_file(side_name)}"

    def track_path(self, number: int) -> str:
        return f"{self.tape_dir}/{track_file_name(number, self.extension)}"

    def shape(self) -> tuple[Entry, ...]:
        """The validation shape for this layout."""
        album = Entry.directory(
            self.album_dir,
            Entry.file(self.side_file("side_a")),
            Entry.file(self.side_file("side_b")),
        )
        tape = Entry.directory(
            self.tape_dir,
            *(
                Entry.file(track_file_name(n, self.extension))
                for n in range(1, TRACK_COUNT + 1)
            ),
        )
        presence = tuple(Entry.directory(name) for name in self.required_dirs)
        return (album, tape) + presence


LIBRARY_SONGS_DIR = "songs"
LIBRARY_SHAPE: tuple[Entry, ...] = (Entry.directory(LIBRARY_SONGS_DIR),)


def _list_children(directory: Path) -> dict[str, os.DirEntry]:
    """Map child names to their scandir entries."""
    with os.scandir(directory) as it:
        return {entry.name: entry for entry in it}


def _kind_of(entry: os.DirEntry) -> Optional[str]:
    """Return FILE, DIRECTORY, or None when the entry cannot be stat'ed."""
    try:
        if entry.is_dir():
            return DIRECTORY
        if entry.is_file():
            return FILE
    except OSError as e:
        logger.debug(f"Treating unreadable entry as absent: {entry.path} ({e})")
    return None


def _missing_under(
    directory: Path, shape: tuple[Entry, ...], prefix: str = ""
) -> list[str]:
    try:
        children = _list_children(directory)
    except OSError as e:
        logger.debug(f"Cannot list {directory}: {e}")
        children = {}

    missing = []
    for required in shape:
        relative = f"{prefix}{required.name}"
        entry = children.get(required.name)
        if entry is None or _kind_of(entry) != required.kind:
            missing.append(relative + ("/" if required.kind == DIRECTORY else ""))
            # Children of an absent directory are reported individually too
            missing.extend(
                f"{relative}/{child.name}" + ("/" if child.kind == DIRECTORY else "")
                for child in required.children
            )
            continue
        if required.children:
            missing.extend(
                _missing_under(Path(entry.path), required.children, f"{relative}/")
            )
    return missing


def find_missing(root: Path, shape: tuple[Entry, ...]) -> list[str]:
    """
    List the required entries absent (or wrongly typed) under root.

    Args:
        root: Directory to inspect
        shape: Requirements on root's children

    Returns:
        Relative paths of missing entries; directories end with "/".
        Empty when the structure is complete.

    Raises:
        RootNotFoundError: If root does not exist or is not a directory
        InaccessibleError: If root exists but cannot be listed
    """
    root = Path(root)
    try:
        _list_children(root)
    except (FileNotFoundError, NotADirectoryError) as e:
        raise RootNotFoundError(root, f"No such directory: {root}") from e
    except OSError as e:
        raise InaccessibleError(root) from e

    return _missing_under(root, shape)


def check_structure(root: Path, shape: tuple[Entry, ...]) -> bool:
    """Return True only if every required entry exists with the right type."""
    return not find_missing(root, shape)
