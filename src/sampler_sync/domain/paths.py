"""
Slugs and library path layout.

Every on-disk location of a saved song is derived from the library's songs
root and the song's slug by plain joins; nothing here touches the disk.

    <root>/<slug>/<slug>.aif
    <root>/<slug>/<slug>.mp3
    <root>/<slug>/tape/track_<n>.aif
"""

import re
import unicodedata
from pathlib import Path
from typing import NamedTuple

TAPE_DIR_NAME = "tape"
AUDIO_EXTENSION = ".aif"
ENCODED_EXTENSION = ".mp3"
TRACK_COUNT = 4


def slugify(name: str) -> str:
    """Return a deterministic filesystem-safe ASCII slug for a song name.

    Accented letters are transliterated, everything else that is not
    a-z or 0-9 collapses into single hyphens. Two names that slugify alike
    address the same library entry.

    Example:
        "Über Bass!" -> "uber-bass"
    """
    normalized = unicodedata.normalize("NFKD", name)
    ascii_only = normalized.encode("ascii", "ignore").decode("ascii")
    lowered = ascii_only.lower()
    collapsed = re.sub(r"[^a-z0-9]+", "-", lowered)
    return collapsed.strip("-")


def track_file_name(number: int, extension: str = AUDIO_EXTENSION) -> str:
    """File name of tape track ``number`` (1-4)."""
    return f"track_{number}{extension}"


def song_dir(root: Path, slug: str) -> Path:
    return Path(root) / slug


def tape_dir(root: Path, slug: str) -> Path:
    return song_dir(root, slug) / TAPE_DIR_NAME


def tape_track_path(root: Path, slug: str, number: int) -> Path:
    return tape_dir(root, slug) / track_file_name(int(number))


def aif_path(root: Path, slug: str) -> Path:
    return song_dir(root, slug) / f"{slug}{AUDIO_EXTENSION}"


def mp3_path(root: Path, slug: str) -> Path:
    return song_dir(root, slug) / f"{slug}{ENCODED_EXTENSION}"


class LibraryPaths(NamedTuple):
    """Every path belonging to one slug. Derived on demand, never stored."""

    song_dir: Path
    tape_dir: Path
    tape_tracks: tuple[Path, Path, Path, Path]
    aif: Path
    mp3: Path


def library_paths(root: Path, slug: str) -> LibraryPaths:
    """Compute the full path set for ``slug`` under ``root``."""
    return LibraryPaths(
        song_dir=song_dir(root, slug),
        tape_dir=tape_dir(root, slug),
        tape_tracks=tuple(
            tape_track_path(root, slug, n) for n in range(1, TRACK_COUNT + 1)
        ),
        aif=aif_path(root, slug),
        mp3=mp3_path(root, slug),
    )
