"""
prompt_toolkit completers for the interactive menu
"""

from typing import Callable, Iterable, Sequence

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document


class ChoiceCompleter(Completer):
    """Completes one of a fixed set of menu choices."""

    def __init__(self, choices: Sequence[str]):
        self.choices = list(choices)

    def get_completions(self, document: Document, complete_event) -> Iterable[Completion]:
        word = document.text_before_cursor.lower()
        for choice in self.choices:
            if choice.lower().startswith(word):
                yield Completion(choice, start_position=-len(word), display=choice)


class TapeCompleter(Completer):
    """Completes saved tape slugs, matching anywhere in the slug."""

    def __init__(self, list_tapes: Callable[[], list[str]]):
        self.list_tapes = list_tapes

    def get_completions(self, document: Document, complete_event) -> Iterable[Completion]:
        word = document.text_before_cursor.strip().lower()
        for slug in self.list_tapes():
            if not word or word in slug:
                yield Completion(
                    slug,
                    start_position=-len(document.text_before_cursor),
                    display=slug,
                    display_meta="tape",
                )
