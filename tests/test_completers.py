"""Tests for menu completers."""

from prompt_toolkit.document import Document

from sampler_sync.completers import ChoiceCompleter, TapeCompleter


def completions(completer, text):
    return [c.text for c in completer.get_completions(Document(text), None)]


class TestChoiceCompleter:
    def test_prefix_match_ignores_case(self):
        completer = ChoiceCompleter(["side_a", "side_b", "load tape", "exit"])
        assert completions(completer, "SIDE") == ["side_a", "side_b"]

    def test_empty_lists_all(self):
        completer = ChoiceCompleter(["save", "preview", "back"])
        assert completions(completer, "") == ["save", "preview", "back"]


class TestTapeCompleter:
    def test_substring_match(self):
        completer = TapeCompleter(lambda: ["night-drive", "day-drive", "keeper"])
        assert completions(completer, "drive") == ["night-drive", "day-drive"]

    def test_reads_tapes_each_time(self):
        tapes = ["one"]
        completer = TapeCompleter(lambda: list(tapes))
        tapes.append("two")
        assert completions(completer, "") == ["one", "two"]
