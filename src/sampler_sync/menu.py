"""
Interactive menu.

Pick an album side, then save it (optionally with the tape), preview it, or
go back; or pick a saved tape and load it onto the device.
"""

from typing import Optional, Sequence

from loguru import logger
from prompt_toolkit import PromptSession
from prompt_toolkit.shortcuts import confirm
from prompt_toolkit.styles import Style

from .completers import ChoiceCompleter, TapeCompleter
from .context import AppContext
from .core.console import TransferReporter, get_console, make_transfer_progress
from .core.exceptions import SamplerSyncError
from .core.output import log
from .domain.models import NO_SIDE, Side
from .workflows import SaveOptions, load_tape, save_song

PROMPT_STYLE = Style.from_dict({
    'prompt': '#00aa00 bold',
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
})

LOAD_TAPE = "load tape"
EXIT = "exit"


def ask(question: str) -> bool:
    """Yes/no question; Ctrl-C or Ctrl-D counts as no."""
    try:
        return confirm(question)
    except (KeyboardInterrupt, EOFError):
        return False


def choose(title: str, choices: Sequence[str]) -> Optional[str]:
    """Show numbered choices and read one by number or name.

    Returns:
        The chosen label, or None if input was cancelled
    """
    console = get_console()
    console.print(f"[bold]{title}[/bold]")
    for index, label in enumerate(choices, 1):
        console.print(f"  {index}. {label}")

    session = PromptSession(completer=ChoiceCompleter(choices), style=PROMPT_STYLE)
    while True:
        try:
            answer = session.prompt("> ").strip()
        except (KeyboardInterrupt, EOFError):
            return None
        if answer.isdigit() and 1 <= int(answer) <= len(choices):
            return choices[int(answer) - 1]
        for label in choices:
            if answer.lower() == label.lower():
                return label
        console.print(f"Pick 1-{len(choices)}", style="yellow")


def read_name() -> Optional[str]:
    console = get_console()
    console.print("(name will be slugified for filename)", style="dim")
    try:
        name = PromptSession(style=PROMPT_STYLE).prompt("name: ").strip()
    except (KeyboardInterrupt, EOFError):
        return None
    return name or None


def preview(ctx: AppContext, side: Side) -> None:
    """Play a side until the user says it sounds right."""
    previewer = ctx.previewer()
    process = previewer.start(side.path)
    log(f"Playing {side}")
    try:
        while not ask("all good?"):
            pass
    finally:
        previewer.stop(process)


def save_side(ctx: AppContext, side: Side) -> None:
    """Name the song, copy it over, encode, tag, and offer to upload."""
    name = read_name()
    if name is None:
        return
    with_tape = ask("bring tape?")

    with make_transfer_progress() as progress:
        reporter = TransferReporter(progress)
        result = save_song(
            ctx.device,
            ctx.library,
            side,
            name,
            ctx.artist,
            SaveOptions(with_tape=with_tape),
            progress=reporter,
            on_step=reporter.label,
        )

    log(result.song.display_name, "success")
    log(str(result.mp3))

    if ask("upload?"):
        remote = ctx.library.publish(result.song)
        log(f"Uploaded to {remote}", "success")


def side_menu(ctx: AppContext, side: Side) -> None:
    while True:
        action = choose(str(side), ["save", "preview", "back"])
        if action == "save":
            save_side(ctx, side)
            return
        if action == "preview":
            preview(ctx, side)
            continue
        return


def tape_menu(ctx: AppContext) -> None:
    tapes = ctx.library.list_tapes()
    if not tapes:
        log("No saved tapes in the library", "warning")
        return

    session = PromptSession(
        completer=TapeCompleter(ctx.library.list_tapes),
        style=PROMPT_STYLE,
        complete_while_typing=True,
    )
    try:
        slug = session.prompt("tape: ").strip()
    except (KeyboardInterrupt, EOFError):
        return
    if slug not in tapes:
        log(f"No tape named {slug!r}", "warning")
        return
    if not ask(f"overwrite the device tape with {slug}?"):
        return

    with make_transfer_progress() as progress:
        reporter = TransferReporter(progress)
        load_tape(ctx.device, ctx.library, slug, progress=reporter, on_step=reporter.label)
    log(f"Loaded {slug} onto the device", "success")


def run_menu(ctx: AppContext) -> int:
    """Main menu loop. Returns the process exit code."""
    sides = {str(side): side for side in ctx.device.album.sides()}
    choices = [*sides, LOAD_TAPE, EXIT]

    while True:
        picked = choose("Choose a side", choices)
        if picked is None or picked == EXIT:
            return 0
        try:
            if picked == LOAD_TAPE:
                tape_menu(ctx)
            else:
                side_menu(ctx, sides.get(picked, NO_SIDE))
        except (SamplerSyncError, ValueError) as e:
            logger.exception("Menu action failed")
            log(f"Error: {e}", "error")
