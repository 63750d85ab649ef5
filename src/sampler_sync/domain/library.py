"""
Local song archive.

The library root must contain a ``songs`` directory; each saved song lives
in ``songs/<slug>/``. Songs whose names slugify alike share a directory and
the last save wins.
"""

import os
from pathlib import Path
from typing import Callable, Iterable, Optional

from loguru import logger

from ..core.exceptions import DestinationUnwritableError, InaccessibleError, NotFoundError
from . import paths
from .collaborators import Encoder, Publisher, TagWriter
from .models import Song, Track
from .structure import LIBRARY_SHAPE, LIBRARY_SONGS_DIR, find_missing
from .transfer import CopyProgressCallback, copy_file


def _make_dir(directory: Path) -> None:
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DestinationUnwritableError(
            directory, directory, f"Cannot create {directory}: {e}"
        ) from e


class Library:
    """A validated library root and the tools songs are handed to."""

    def __init__(
        self,
        root: Path,
        encoder: Optional[Encoder] = None,
        tagger: Optional[TagWriter] = None,
        publisher: Optional[Publisher] = None,
    ):
        self.root = Path(root)
        self.songs_root = self.root / LIBRARY_SONGS_DIR
        self.encoder = encoder or Encoder()
        self.tagger = tagger or TagWriter()
        self.publisher = publisher or Publisher()

    @classmethod
    def open(
        cls,
        root: Path,
        encoder: Optional[Encoder] = None,
        tagger: Optional[TagWriter] = None,
        publisher: Optional[Publisher] = None,
    ) -> "Library":
        """Open a library root, requiring a songs directory under it.

        Raises:
            RootNotFoundError: If root itself does not exist
            InaccessibleError: If root cannot be listed
            NotFoundError: If root has no songs directory
        """
        root = Path(root)
        if find_missing(root, LIBRARY_SHAPE):
            raise NotFoundError(
                root / LIBRARY_SONGS_DIR, f"{root} has no {LIBRARY_SONGS_DIR} directory"
            )
        logger.info(f"Opened library at {root}")
        return cls(root, encoder=encoder, tagger=tagger, publisher=publisher)

    # Paths

    def paths_for(self, slug: str) -> paths.LibraryPaths:
        return paths.library_paths(self.songs_root, slug)

    def aif_path(self, song: Song) -> Path:
        return paths.aif_path(self.songs_root, song.slug)

    def mp3_path(self, song: Song) -> Path:
        return paths.mp3_path(self.songs_root, song.slug)

    def remote_target(self, song: Song) -> str:
        """Where ``publish`` puts the song's mp3."""
        return self.publisher.remote_target(self.mp3_path(song).name)

    def load_tape_track_paths(self, slug: str) -> list[Path]:
        """The four track paths of a saved tape; existence is not checked."""
        return list(self.paths_for(slug).tape_tracks)

    # Listing

    def list_songs(self) -> list[str]:
        """Slugs of every song directory, sorted. Unreadable entries are skipped.

        Raises:
            NotFoundError: If the songs directory is gone or no longer a directory
            InaccessibleError: If the songs directory cannot be listed
        """
        names = []
        try:
            with os.scandir(self.songs_root) as it:
                for entry in it:
                    try:
                        if entry.is_dir():
                            names.append(entry.name)
                    except OSError as e:
                        logger.debug(f"Skipping unreadable entry {entry.path}: {e}")
        except (FileNotFoundError, NotADirectoryError) as e:
            raise NotFoundError(self.songs_root, f"No such directory: {self.songs_root}") from e
        except OSError as e:
            raise InaccessibleError(self.songs_root) from e
        return sorted(names)

    def list_tapes(self) -> list[str]:
        """Slugs of songs that have a tape directory."""
        return [
            slug
            for slug in self.list_songs()
            if paths.tape_dir(self.songs_root, slug).is_dir()
        ]

    # Saving

    def save_album(
        self,
        song: Song,
        source: Path,
        progress: Optional[CopyProgressCallback] = None,
    ) -> Path:
        """Copy an album side into the song's aif file.

        Returns:
            The aif path written
        """
        _make_dir(paths.song_dir(self.songs_root, song.slug))

        target = self.aif_path(song)
        logger.info(f"Saving album {source} -> {target}")
        copy_file(Path(source), target, progress=progress)
        return target

    def save_tape(
        self,
        song: Song,
        tracks: Iterable[Track],
        progress: Optional[CopyProgressCallback] = None,
        on_track: Optional[Callable[[Track], None]] = None,
    ) -> list[Path]:
        """Copy tracks into the song's tape directory in the order given.

        Each track lands at ``tape/<track name>.aif``; neither order nor
        count is checked.

        Returns:
            The track paths written
        """
        _make_dir(paths.tape_dir(self.songs_root, song.slug))

        written = []
        for track in tracks:
            if on_track:
                on_track(track)
            target = paths.tape_track_path(self.songs_root, song.slug, track.number)
            logger.info(f"Saving {track} {track.path} -> {target}")
            copy_file(track.path, target, progress=progress)
            written.append(target)
        return written

    # Hand-off to external tools

    def encode(self, song: Song) -> Path:
        """Encode the song's aif into its mp3."""
        target = self.mp3_path(song)
        self.encoder.encode(self.aif_path(song), target)
        logger.info(f"Encoded {target}")
        return target

    def tag(self, song: Song) -> Path:
        """Write title, artist and comment into the song's mp3."""
        target = self.mp3_path(song)
        self.tagger.write(target, title=song.name, artist=song.artist)
        return target

    def publish(self, song: Song) -> str:
        """Sync the song's mp3 to the remote; local files are left as they are."""
        return self.publisher.publish(self.mp3_path(song))

    def __repr__(self) -> str:
        return f"Library({str(self.root)!r})"
