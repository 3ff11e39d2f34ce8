"""Terminal narration sink and yes/no prompt."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import TextIO

_YES: Final[frozenset[str]] = frozenset({"y", "yes"})
_NO: Final[frozenset[str]] = frozenset({"n", "no"})


class TerminalNarrator:
    """Report hook writing narration lines to a text stream."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream or sys.stdout

    def __call__(self, message: str) -> None:
        self.stream.write(message)
        self.stream.flush()


class TerminalPrompt:
    """Ask a yes/no question until the answer is one of the two.

    End of input counts as a rejection.
    """

    def __init__(
        self,
        *,
        input_fn: Callable[[str], str] = input,
        max_attempts: int = 3,
    ) -> None:
        self.input_fn = input_fn
        self.max_attempts = max_attempts

    def __call__(self, prompt: str) -> bool:
        for _ in range(self.max_attempts):
            try:
                answer = self.input_fn(f"{prompt} [y/N] ").strip().lower()
            except EOFError:
                return False
            if answer in _YES:
                return True
            if answer in _NO or not answer:
                return False
        return False


def interactive_prompt(stream: TextIO | None = None) -> TerminalPrompt | None:
    """Return a prompt if ``stream`` (stdin by default) is a terminal."""

    target = stream or sys.stdin
    if not target.isatty():
        return None
    return TerminalPrompt()
