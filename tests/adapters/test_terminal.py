from __future__ import annotations

import io

import pytest

from identipy.adapters.terminal import TerminalNarrator, TerminalPrompt, interactive_prompt


def _answers(*replies: str):
    pending = list(replies)
    asked: list[str] = []

    def _input(prompt: str) -> str:
        asked.append(prompt)
        if not pending:
            raise EOFError
        return pending.pop(0)

    return _input, asked


def test_narrator_writes_messages_verbatim() -> None:
    stream = io.StringIO()
    narrator = TerminalNarrator(stream)

    narrator("✔ public key fingerprint: 0123\n")
    narrator("✖ dns example.com\n")

    assert stream.getvalue() == "✔ public key fingerprint: 0123\n✖ dns example.com\n"


@pytest.mark.parametrize(
    ("replies", "expected"),
    [(("y",), True), (("YES",), True), (("n",), False), (("",), False), ((), False)],
)
def test_prompt_answers(replies: tuple[str, ...], expected: bool) -> None:
    input_fn, asked = _answers(*replies)

    assert TerminalPrompt(input_fn=input_fn)("Is this you?") is expected
    assert asked == ["Is this you? [y/N] "]


def test_prompt_repeats_until_answer_is_understood() -> None:
    input_fn, asked = _answers("maybe", "sure", "y")

    assert TerminalPrompt(input_fn=input_fn)("Is this you?") is True
    assert len(asked) == 3


def test_prompt_gives_up_after_max_attempts() -> None:
    input_fn, asked = _answers("maybe", "perhaps", "y")

    assert TerminalPrompt(input_fn=input_fn, max_attempts=2)("Is this you?") is False
    assert len(asked) == 2


def test_interactive_prompt_requires_a_terminal() -> None:
    assert interactive_prompt(io.StringIO()) is None
