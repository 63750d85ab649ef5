"""Tests for slugs and library path layout."""

from pathlib import Path

import pytest

from sampler_sync.domain.models import Song
from sampler_sync.domain.paths import (
    aif_path,
    library_paths,
    mp3_path,
    slugify,
    song_dir,
    tape_dir,
    tape_track_path,
)


class TestSlugify:
    """Tests for slugify."""

    def test_lowercases_and_hyphenates(self):
        assert slugify("My First Song") == "my-first-song"

    def test_collapses_punctuation_runs(self):
        assert slugify("Hello,   World!!  (Live)") == "hello-world-live"

    def test_transliterates_accents(self):
        assert slugify("Über!") == "uber"
        assert slugify("café crème") == "cafe-creme"

    def test_strips_leading_and_trailing_separators(self):
        assert slugify("--- edge ---") == "edge"

    def test_keeps_digits(self):
        assert slugify("Track 808") == "track-808"

    @pytest.mark.parametrize(
        "name", ["Über!", "a  b  c", "Déjà Vu (2019 mix)", "already-a-slug", "x"]
    )
    def test_idempotent(self, name):
        once = slugify(name)
        assert slugify(once) == once

    def test_deterministic(self):
        assert slugify("Same Name") == slugify("Same Name")

    def test_colliding_names(self):
        """Different names can share a slug; they address one library entry."""
        assert slugify("Über!") == slugify("uber")

    def test_nothing_usable(self):
        assert slugify("!!!") == ""


class TestPathScheme:
    """Tests for path derivation from root and slug."""

    root = Path("/lib/songs")

    def test_song_dir(self):
        assert song_dir(self.root, "tune") == Path("/lib/songs/tune")

    def test_tape_dir(self):
        assert tape_dir(self.root, "tune") == Path("/lib/songs/tune/tape")

    def test_tape_track_path(self):
        assert tape_track_path(self.root, "tune", 3) == Path(
            "/lib/songs/tune/tape/track_3.aif"
        )

    def test_aif_and_mp3(self):
        assert aif_path(self.root, "tune") == Path("/lib/songs/tune/tune.aif")
        assert mp3_path(self.root, "tune") == Path("/lib/songs/tune/tune.mp3")

    def test_library_paths_bundle(self):
        paths = library_paths(self.root, "tune")
        assert paths.song_dir == Path("/lib/songs/tune")
        assert [p.name for p in paths.tape_tracks] == [
            "track_1.aif",
            "track_2.aif",
            "track_3.aif",
            "track_4.aif",
        ]
        assert paths.mp3.parent == paths.aif.parent == paths.song_dir

    def test_stable_for_same_inputs(self):
        assert library_paths(self.root, "tune") == library_paths(self.root, "tune")

    def test_empty_root_is_still_a_path(self):
        assert aif_path(Path(""), "tune") == Path("tune/tune.aif")


class TestSong:
    """Tests for Song.create."""

    def test_create_slugifies(self):
        song = Song.create("Night Drive", "quiet party")
        assert song.slug == "night-drive"
        assert song.name == "Night Drive"
        assert song.display_name == "quiet party - Night Drive"

    def test_rejects_unusable_name(self):
        with pytest.raises(ValueError):
            Song.create("???", "artist")
