"""
sampler-sync CLI - entry point

Runs the interactive menu by default; subcommands cover each step for
scripted use.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger

from .context import AppContext, open_device, open_library
from .core.config import Config, load_config
from .core.console import TransferReporter, get_console, make_transfer_progress
from .core.exceptions import SamplerSyncError, StructureInvalidError
from .core.output import log, setup_from_config, setup_loguru
from .domain.models import SideSlot, Song
from .domain.paths import library_paths, slugify
from .domain.structure import LIBRARY_SONGS_DIR
from .workflows import SaveOptions, load_tape, save_song


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sampler-sync",
        description="Move album sides and tapes between a sampler and a song library",
    )
    parser.add_argument("--config", type=Path, help="Path to config.toml")
    parser.add_argument("--device", help="Device mount path (overrides config)")
    parser.add_argument("--library", help="Library root (overrides config)")
    parser.add_argument("--artist", help="Artist name for tags (overrides config)")
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Log debug output to stderr"
    )

    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("menu", help="Interactive menu (default)")
    subparsers.add_parser("check", help="Validate the device and library")
    subparsers.add_parser("songs", help="List saved songs")
    subparsers.add_parser("tapes", help="List saved songs that have a tape")

    paths_parser = subparsers.add_parser("paths", help="Show library paths for a name")
    paths_parser.add_argument("name", help="Song name")

    save_parser = subparsers.add_parser("save", help="Save an album side as a song")
    save_parser.add_argument("side", choices=["a", "b"], help="Album side")
    save_parser.add_argument("name", help="Song name (slugified for paths)")
    save_parser.add_argument("--tape", action="store_true", help="Also copy the tape")
    save_parser.add_argument("--no-encode", action="store_true", help="Skip mp3 encoding")
    save_parser.add_argument("--no-tag", action="store_true", help="Skip mp3 tagging")
    save_parser.add_argument("--publish", action="store_true", help="Upload the mp3")

    encode_parser = subparsers.add_parser("encode", help="Encode a saved song to mp3")
    encode_parser.add_argument("slug")

    tag_parser = subparsers.add_parser("tag", help="Tag a saved song's mp3")
    tag_parser.add_argument("slug")
    tag_parser.add_argument("name", help="Title to write")

    publish_parser = subparsers.add_parser("publish", help="Upload a saved song's mp3")
    publish_parser.add_argument("slug")

    load_parser = subparsers.add_parser("load-tape", help="Write a saved tape onto the device")
    load_parser.add_argument("slug")
    load_parser.add_argument("--yes", "-y", action="store_true", help="Do not ask for confirmation")

    return parser


def apply_overrides(config: Config, args: argparse.Namespace) -> Config:
    if args.device:
        config.device.mount_path = str(Path(args.device).expanduser())
    if args.library:
        config.library.root = str(Path(args.library).expanduser())
    if args.artist:
        config.library.artist = args.artist
    if args.verbose:
        config.logging.level = "DEBUG"
        config.logging.console_output = True
    return config


def cmd_check(config: Config) -> int:
    ok = True
    try:
        device = open_device(config)
        log(f"Device OK: {device.mount_path}", "success")
    except StructureInvalidError as e:
        log(f"Device at {e.root} is missing:", "error")
        for entry in e.missing:
            log(f"  {entry}", "error")
        ok = False
    except SamplerSyncError as e:
        log(f"Device: {e}", "error")
        ok = False

    try:
        library = open_library(config)
        log(f"Library OK: {library.root} ({len(library.list_songs())} songs)", "success")
    except SamplerSyncError as e:
        log(f"Library: {e}", "error")
        ok = False

    return 0 if ok else 1


def cmd_paths(config: Config, name: str) -> int:
    slug = slugify(name)
    if not slug:
        log(f"{name!r} has no usable characters for a slug", "error")
        return 1
    paths = library_paths(Path(config.library.root) / LIBRARY_SONGS_DIR, slug)
    console = get_console()
    console.print(f"slug:  {slug}")
    console.print(f"dir:   {paths.song_dir}")
    console.print(f"aif:   {paths.aif}")
    console.print(f"mp3:   {paths.mp3}")
    console.print(f"tape:  {paths.tape_dir}")
    for track_path in paths.tape_tracks:
        console.print(f"       {track_path}")
    return 0


def cmd_save(ctx: AppContext, args: argparse.Namespace) -> int:
    slot = SideSlot.A if args.side == "a" else SideSlot.B
    options = SaveOptions(
        with_tape=args.tape,
        encode=not args.no_encode,
        tag=not args.no_tag,
        publish=args.publish,
    )
    with make_transfer_progress() as progress:
        reporter = TransferReporter(progress)
        result = save_song(
            ctx.device,
            ctx.library,
            ctx.device.album.side(slot),
            args.name,
            ctx.artist,
            options,
            progress=reporter,
            on_step=reporter.label,
        )

    log(result.song.display_name, "success")
    log(str(result.mp3 or result.aif))
    if result.remote:
        log(f"Uploaded to {result.remote}", "success")
    return 0


def cmd_load_tape(ctx: AppContext, slug: str, assume_yes: bool) -> int:
    if slug not in ctx.library.list_tapes():
        log(f"No tape saved for {slug!r}", "error")
        return 1
    if not assume_yes:
        from .menu import ask

        if not ask(f"overwrite the device tape with {slug}?"):
            return 1

    with make_transfer_progress() as progress:
        reporter = TransferReporter(progress)
        load_tape(ctx.device, ctx.library, slug, progress=reporter, on_step=reporter.label)
    log(f"Loaded {slug} onto the device", "success")
    return 0


def run(args: argparse.Namespace, config: Config) -> int:
    command = args.command or "menu"

    if command == "check":
        return cmd_check(config)
    if command == "paths":
        return cmd_paths(config, args.name)

    needs_device = command in {"menu", "save", "load-tape"}
    ctx = AppContext.create(config, with_device=needs_device, console=get_console())

    if command == "menu":
        from .menu import run_menu

        return run_menu(ctx)
    if command == "songs":
        for slug in ctx.library.list_songs():
            get_console().print(slug)
        return 0
    if command == "tapes":
        for slug in ctx.library.list_tapes():
            get_console().print(slug)
        return 0
    if command == "save":
        return cmd_save(ctx, args)
    if command == "encode":
        log(str(ctx.library.encode(Song.create(args.slug, ctx.artist))), "success")
        return 0
    if command == "tag":
        # Directory from SLUG, title from NAME
        song = Song.create(args.slug, ctx.artist)._replace(name=args.name)
        log(str(ctx.library.tag(song)), "success")
        return 0
    if command == "publish":
        remote = ctx.library.publish(Song.create(args.slug, ctx.artist))
        log(f"Uploaded to {remote}", "success")
        return 0
    if command == "load-tape":
        return cmd_load_tape(ctx, args.slug, args.yes)

    raise ValueError(f"Unknown command: {command}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the sampler-sync command."""
    args = build_parser().parse_args(argv)
    # Default sink until the configured one is known
    setup_loguru()
    config = apply_overrides(load_config(args.config), args)
    setup_from_config(config.logging)

    try:
        return run(args, config)
    except SamplerSyncError as e:
        logger.exception("Command failed")
        log(f"Error: {e}", "error")
        return 1
    except ValueError as e:
        log(f"Error: {e}", "error")
        return 1
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
