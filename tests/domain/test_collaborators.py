"""Tests for the external tool wrappers."""

import subprocess
from unittest.mock import MagicMock, patch

import pytest
from mutagen.id3 import ID3

from sampler_sync.core.exceptions import (
    EncodeError,
    NotFoundError,
    PreviewError,
    TagWriteError,
)
from sampler_sync.domain.collaborators import Encoder, Previewer, Publisher, TagWriter


class TestEncoder:
    def test_command(self, tmp_path):
        encoder = Encoder(binary="/opt/ffmpeg", bitrate="192k")
        command = encoder.command(tmp_path / "in.aif", tmp_path / "out.mp3")
        assert command == [
            "/opt/ffmpeg",
            "-y",
            "-i",
            str(tmp_path / "in.aif"),
            "-ab",
            "192k",
            str(tmp_path / "out.mp3"),
        ]

    def test_binary_missing(self, tmp_path):
        source = tmp_path / "in.aif"
        source.write_bytes(b"aif")
        encoder = Encoder(binary=str(tmp_path / "no-such-ffmpeg"))

        with pytest.raises(EncodeError) as exc_info:
            encoder.encode(source, tmp_path / "out.mp3")

        assert exc_info.value.returncode is None

    def test_missing_source_not_run(self, tmp_path):
        with patch("sampler_sync.domain.collaborators.subprocess.run") as mock_run:
            with pytest.raises(NotFoundError):
                Encoder().encode(tmp_path / "in.aif", tmp_path / "out.mp3")
        mock_run.assert_not_called()


class TestTagWriter:
    """Tags are written with mutagen and read back."""

    def test_write_tags(self, tmp_path):
        mp3 = tmp_path / "song.mp3"
        mp3.write_bytes(b"\x00" * 256)

        TagWriter().write(mp3, title="Night Drive", artist="someone")

        tags = ID3(str(mp3))
        assert str(tags["TIT2"]) == "Night Drive"
        assert str(tags["TPE1"]) == "someone"
        assert tags.getall("COMM")[0].text == ["large rabbit"]
        assert not (tmp_path / "song.mp3.tmp").exists()

    def test_rewrite_replaces_frames(self, tmp_path):
        mp3 = tmp_path / "song.mp3"
        mp3.write_bytes(b"\x00" * 256)
        writer = TagWriter(comment="first")
        writer.write(mp3, title="Old", artist="a")

        TagWriter(comment="second").write(mp3, title="New", artist="b")

        tags = ID3(str(mp3))
        assert tags.getall("TIT2")[0].text == ["New"]
        assert len(tags.getall("COMM")) == 1
        assert tags.getall("COMM")[0].text == ["second"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(NotFoundError):
            TagWriter().write(tmp_path / "absent.mp3", title="x", artist="y")

    def test_failure_cleans_temp(self, tmp_path):
        mp3 = tmp_path / "song.mp3"
        mp3.write_bytes(b"\x00" * 256)

        with patch("sampler_sync.domain.collaborators.os.replace", side_effect=OSError("busy")):
            with pytest.raises(TagWriteError):
                TagWriter().write(mp3, title="x", artist="y")

        assert not (tmp_path / "song.mp3.tmp").exists()
        assert mp3.read_bytes() == b"\x00" * 256


class TestPublisher:
    @pytest.mark.parametrize(
        "destination, expected",
        [
            ("snoot:music", "snoot:music/a.mp3"),
            ("snoot:music/", "snoot:music/a.mp3"),
        ],
    )
    def test_remote_target(self, destination, expected):
        assert Publisher(destination=destination).remote_target("a.mp3") == expected

    def test_custom_args(self, tmp_path):
        mp3 = tmp_path / "a.mp3"
        mp3.write_bytes(b"mp3")
        publisher = Publisher(destination="host:dir", args=["-a", "--partial"])

        with patch("sampler_sync.domain.collaborators.subprocess.run") as mock_run:
            publisher.publish(mp3)

        assert mock_run.call_args.args[0] == ["rsync", "-a", "--partial", str(mp3), "host:dir"]


class TestPreviewer:
    def test_start_failure(self, tmp_path):
        previewer = Previewer(binary=str(tmp_path / "no-such-mpv"))
        with pytest.raises(PreviewError):
            previewer.start(tmp_path / "side_a.aif")

    def test_stop_running_process(self):
        process = MagicMock()
        process.poll.return_value = None

        Previewer().stop(process)

        process.terminate.assert_called_once()
        process.wait.assert_called_once_with(timeout=2)

    def test_stop_kills_after_timeout(self):
        process = MagicMock()
        process.poll.return_value = None
        process.wait.side_effect = [subprocess.TimeoutExpired("mpv", 2), 0]

        Previewer().stop(process)

        process.kill.assert_called_once()

    def test_stop_finished_process(self):
        process = MagicMock()
        process.poll.return_value = 0

        Previewer().stop(process)

        process.terminate.assert_not_called()
