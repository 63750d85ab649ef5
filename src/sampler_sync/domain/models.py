"""
Sampler asset models.

Fixed-slot value types for the two album sides and the four tape tracks,
plus the Song record that names a library entry.
"""

from enum import Enum, IntEnum
from pathlib import Path
from typing import NamedTuple, Optional

from .paths import slugify


class SideSlot(Enum):
    """Which half of the album a Side refers to."""

    A = "side_a"
    B = "side_b"
    NEITHER = "NO SIDE"


class Side(NamedTuple):
    """One album side on the device.

    A and B carry the path of their audio file; NEITHER carries no path and
    stands for "no side was picked".
    """

    slot: SideSlot
    path: Optional[Path] = None

    @property
    def name(self) -> str:
        return self.slot.value

    def __str__(self) -> str:
        return self.slot.value


NO_SIDE = Side(SideSlot.NEITHER)


class Album(NamedTuple):
    """The two validated album sides of a device."""

    side_a: Side
    side_b: Side

    def sides(self) -> list[Side]:
        return [self.side_a, self.side_b]

    def side(self, slot: SideSlot) -> Side:
        """Look up a side by slot; NEITHER yields NO_SIDE."""
        if slot is SideSlot.A:
            return self.side_a
        if slot is SideSlot.B:
            return self.side_b
        return NO_SIDE


class TrackNumber(IntEnum):
    """Tape channel 1-4."""

    ONE = 1
    TWO = 2
    THREE = 3
    FOUR = 4

    @property
    def display_name(self) -> str:
        return f"track_{int(self)}"


class Track(NamedTuple):
    """One tape track.

    ``path`` is device-side when read from a Device and library-side when
    read from a Library. ``name`` (``track_1``...) is used for on-disk
    naming and progress output.
    """

    number: TrackNumber
    path: Path

    @property
    def name(self) -> str:
        return self.number.display_name

    def __str__(self) -> str:
        return self.name


class Tape(NamedTuple):
    """Four tracks, always in ascending track order."""

    track_1: Track
    track_2: Track
    track_3: Track
    track_4: Track

    @classmethod
    def from_paths(cls, paths: "list[Path] | tuple[Path, ...]") -> "Tape":
        """Build a tape from exactly four paths, track 1 first."""
        if len(paths) != len(TrackNumber):
            raise ValueError(f"A tape needs {len(TrackNumber)} tracks, got {len(paths)}")
        return cls(
            *(Track(number, Path(path)) for number, path in zip(TrackNumber, paths))
        )

    def tracks(self) -> list[Track]:
        return list(self)

    def track(self, number: int) -> Track:
        return self[int(number) - 1]

    def paths(self) -> list[Path]:
        return [track.path for track in self]


class Song(NamedTuple):
    """A named, artist-attributed library entry.

    Built right before a save or load; the slug comes from ``name`` unless
    the title is replaced afterwards (tagging an existing slug).
    """

    name: str
    slug: str
    artist: str

    @classmethod
    def create(cls, name: str, artist: str) -> "Song":
        """Create a song from a human-entered name.

        Raises:
            ValueError: If the name has no characters that survive slugification
        """
        slug = slugify(name)
        if not slug:
            raise ValueError(f"Song name {name!r} has no usable characters for a slug")
        return cls(name=name, slug=slug, artist=artist)

    @property
    def display_name(self) -> str:
        return f"{self.artist} - {self.name}"
