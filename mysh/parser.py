"""Turning a typed line into commands, arguments and redirections."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field

from mysh.redirect import RedirectType

_BLANKS = " \t"
_WORD_STOPS = " \t<>"
_QUOTES = "\"'"
_VARIABLE_NAME = re.compile(r"[A-Za-z0-9_]*")


@dataclass
class Command:
    """One command of a pipeline: its arguments and where its I/O goes."""

    name: str = ""
    args: list[str] = field(default_factory=list)
    input_file: str | None = None
    output_file: str | None = None
    is_background: bool = False
    redirect_type: RedirectType = RedirectType.NONE


def _skip_blanks(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] in _BLANKS:
        pos += 1
    return pos


def _read_until(text: str, pos: int, stops: str) -> tuple[str, int]:
    end = pos
    while end < len(text) and text[end] not in stops:
        end += 1
    return text[pos:end], end


def _read_word(text: str, pos: int) -> tuple[str, int]:
    if pos < len(text) and text[pos] in _QUOTES:
        quote = text[pos]
        close = text.find(quote, pos + 1)
        if close == -1:
            return text[pos + 1:], len(text)
        return text[pos + 1:close], close + 1
    return _read_until(text, pos, _WORD_STOPS)


def parse_command(text: str) -> Command:
    """Parse one pipeline segment into a Command.

    Words split on spaces and tabs; a word may be quoted with ``"`` or ``'``.
    A word starting with ``$NAME`` becomes the value of that environment
    variable, or is dropped if it is unset. ``<``, ``>`` and ``>>`` take the
    following word as a file name, and a final ``&`` runs the command in the
    background.
    """
    command = Command()
    pos = 0
    while True:
        pos = _skip_blanks(text, pos)
        if pos >= len(text):
            break

        if text[pos] in "<>":
            if text[pos] == "<":
                redirect_type = RedirectType.INPUT
                pos += 1
            elif text.startswith(">>", pos):
                redirect_type = RedirectType.APPEND
                pos += 2
            else:
                redirect_type = RedirectType.OUTPUT
                pos += 1
            pos = _skip_blanks(text, pos)
            filename, pos = _read_until(text, pos, _BLANKS)
            if redirect_type is RedirectType.INPUT:
                command.input_file = filename
            else:
                command.output_file = filename
            command.redirect_type = redirect_type
            continue

        expansion = None
        if text[pos] == "$":
            match = _VARIABLE_NAME.match(text, pos + 1)
            pos = match.end()
            expansion = os.environ.get(match.group()) if match.group() else None
            if expansion is None:
                continue

        word, pos = _read_word(text, pos)
        token = word if expansion is None else expansion
        if not command.args:
            command.name = token
        command.args.append(token)

    if command.args and command.args[-1] == "&":
        command.is_background = True
        command.args.pop()
    return command


def parse_line(text: str) -> list[Command]:
    """Split *text* on ``|`` and parse each non-empty segment."""
    commands = []
    for segment in text.split("|"):
        segment = segment.lstrip(" ").rstrip(" \n")
        if segment:
            commands.append(parse_command(segment))
    return commands