"""
External tools a library hands saved songs to.

- Encoder: ffmpeg, aif -> constant-bitrate mp3
- TagWriter: mutagen, ID3 title/artist/comment
- Publisher: rsync, mp3 -> remote directory
- Previewer: mpv, plays an album side

All of them block until the tool exits. Failures are raised as
CollaboratorError subclasses carrying the command and its stderr.
"""

import os
import shutil
import subprocess
from pathlib import Path
from typing import Optional, Sequence

from loguru import logger
from mutagen import MutagenError
from mutagen.id3 import COMM, ID3, TIT2, TPE1, ID3NoHeaderError

from ..core.config import EncoderConfig, PreviewConfig, PublishConfig, TaggingConfig
from ..core.exceptions import (
    CollaboratorError,
    EncodeError,
    NotFoundError,
    PreviewError,
    PublishError,
    TagWriteError,
)


def _run(command: Sequence[str], error_cls: type[CollaboratorError]) -> subprocess.CompletedProcess:
    """Run a command to completion, raising ``error_cls`` on any failure."""
    logger.debug(f"Running: {' '.join(command)}")
    try:
        return subprocess.run(command, capture_output=True, text=True, check=True)
    except subprocess.CalledProcessError as e:
        logger.error(f"{command[0]} exited with {e.returncode}: {e.stderr}")
        raise error_cls(
            f"{command[0]} exited with status {e.returncode}",
            command=command,
            returncode=e.returncode,
            stderr=e.stderr or "",
        ) from e
    except OSError as e:
        logger.error(f"Could not start {command[0]}: {e}")
        raise error_cls(f"Could not start {command[0]}: {e}", command=command) from e


class Encoder:
    """Encodes aif files to mp3 with ffmpeg."""

    def __init__(self, binary: str = "ffmpeg", bitrate: str = "320k"):
        self.binary = binary
        self.bitrate = bitrate

    @classmethod
    def from_config(cls, config: EncoderConfig) -> "Encoder":
        return cls(binary=config.binary, bitrate=config.bitrate)

    def command(self, source: Path, target: Path) -> list[str]:
        # -y: an existing mp3 for the same slug is replaced
        return [
            self.binary,
            "-y",
            "-i",
            str(source),
            "-ab",
            self.bitrate,
            str(target),
        ]

    def encode(self, source: Path, target: Path) -> None:
        """
        Encode source into target.

        Raises:
            NotFoundError: If source does not exist
            EncodeError: If ffmpeg fails or cannot be started
        """
        if not Path(source).exists():
            raise NotFoundError(source, f"Nothing to encode, {source} does not exist")
        _run(self.command(source, target), EncodeError)


class TagWriter:
    """Writes title, artist and a fixed comment into an mp3's ID3 tag."""

    def __init__(self, comment: str = "large rabbit"):
        self.comment = comment

    @classmethod
    def from_config(cls, config: TaggingConfig) -> "TagWriter":
        return cls(comment=config.comment)

    def write(self, mp3_path: Path, title: str, artist: str) -> None:
        """Tag mp3_path in place using a temp copy and atomic replace.

        Raises:
            NotFoundError: If the mp3 does not exist
            TagWriteError: If the tag cannot be written
        """
        mp3_path = Path(mp3_path)
        if not mp3_path.exists():
            raise NotFoundError(mp3_path, f"Cannot tag missing file {mp3_path}")

        temp_path = mp3_path.with_name(mp3_path.name + ".tmp")
        try:
            shutil.copy2(mp3_path, temp_path)

            try:
                tags = ID3(str(temp_path))
            except ID3NoHeaderError:
                tags = ID3()

            tags.delall("TIT2")
            tags.delall("TPE1")
            tags.delall("COMM")
            tags.add(TIT2(encoding=3, text=title))
            tags.add(TPE1(encoding=3, text=artist))
            tags.add(COMM(encoding=3, lang="eng", desc="", text=self.comment))
            tags.save(str(temp_path))

            os.replace(temp_path, mp3_path)
        except (OSError, MutagenError) as e:
            if temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError:
                    logger.warning(f"Could not remove temp file {temp_path}")
            raise TagWriteError(f"Could not tag {mp3_path}: {e}") from e

        logger.info(f"Tagged {mp3_path}: {artist} - {title}")


class Publisher:
    """Pushes files to a remote directory with rsync."""

    def __init__(
        self,
        destination: str = "snoot:music",
        binary: str = "rsync",
        args: Optional[Sequence[str]] = None,
    ):
        self.destination = destination
        self.binary = binary
        self.args = list(args) if args is not None else ["-av"]

    @classmethod
    def from_config(cls, config: PublishConfig) -> "Publisher":
        return cls(destination=config.destination, binary=config.binary, args=config.args)

    def remote_target(self, file_name: str) -> str:
        """Where a file of this name ends up on the remote."""
        return f"{self.destination.rstrip('/')}/{file_name}"

    def publish(self, path: Path) -> str:
        """
        Sync path to the remote destination.

        Returns:
            Remote target path

        Raises:
            NotFoundError: If path does not exist
            PublishError: If rsync fails or cannot be started
        """
        path = Path(path)
        if not path.exists():
            raise NotFoundError(path, f"Nothing to publish, {path} does not exist")
        _run([self.binary, *self.args, str(path), self.destination], PublishError)
        target = self.remote_target(path.name)
        logger.info(f"Published {path} -> {target}")
        return target


class Previewer:
    """Plays audio through mpv."""

    def __init__(self, binary: str = "mpv"):
        self.binary = binary

    @classmethod
    def from_config(cls, config: PreviewConfig) -> "Previewer":
        return cls(binary=config.binary)

    def start(self, path: Path) -> subprocess.Popen:
        """Start playback in the background; caller stops it with ``stop``."""
        command = [self.binary, "--no-video", "--really-quiet", str(path)]
        try:
            return subprocess.Popen(
                command,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                stdin=subprocess.DEVNULL,
            )
        except OSError as e:
            raise PreviewError(f"Could not start {self.binary}: {e}", command=command) from e

    def stop(self, process: subprocess.Popen) -> None:
        if process.poll() is not None:
            return
        process.terminate()
        try:
            process.wait(timeout=2)
        except subprocess.TimeoutExpired:
            process.kill()
            process.wait()
