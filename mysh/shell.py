"""The interactive shell: prompt, line editing with history, and the main loop."""

from __future__ import annotations

import argparse
import codecs
import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Protocol, TextIO

from mysh.executor import ExecutionError, execute_commands
from mysh.history import History
from mysh.parser import parse_line

try:
    import termios
except ImportError:
    termios = None

DEFAULT_HISTORY_FILE = "history.txt"
_ERASE = "\b \b"
_ESCAPE = "\x1b"
_BACKSPACES = ("\x7f", "\b")


class _CharSource(Protocol):
    def read(self, size: int = ..., /) -> str: ...


class LineEditor:
    """Builds one line from typed characters, echoing them to *output*.

    Backspace removes the last character; the up and down arrow keys step
    through *history*. A finished, non-empty line is added to the history.
    """

    def __init__(self, history: History, output: TextIO) -> None:
        self.history = history
        self.output = output
        self._chars: list[str] = []
        self._escape: list[str] | None = None

    @property
    def buffer(self) -> str:
        """The text typed so far."""
        return "".join(self._chars)

    def _write(self, text: str) -> None:
        if text:
            self.output.write(text)
            self.output.flush()

    def _replace(self, erase: int, entry: str) -> None:
        self._write(_ERASE * erase)
        self._chars = list(entry)
        self._write(entry)

    def _browse(self, key: str) -> None:
        if not len(self.history):
            return
        erase = len(self.history.current())
        if key == "A":
            entry = self.history.older()
        elif key == "B":
            entry = self.history.newer()
        else:
            return
        if entry is not None:
            self._replace(erase, entry)

    def feed(self, char: str) -> str | None:
        """Take one typed character; return the line once Enter is pressed."""
        if self._escape is not None:
            self._escape.append(char)
            if len(self._escape) < 2:
                return None
            introducer, key = self._escape
            self._escape = None
            if introducer == "[":
                self._browse(key)
            return None

        if char == "\n":
            line = self.buffer
            self._chars = []
            if line:
                self.history.add(line)
            self._write("\n")
            return line
        if char in _BACKSPACES:
            if self._chars:
                self._chars.pop()
                self._write(_ERASE)
            return None
        if char == _ESCAPE:
            self._escape = []
            return None
        self._chars.append(char)
        self._write(char)
        return None


def read_line(history: History, source: _CharSource, output: TextIO) -> str | None:
    """Read one edited line from *source*; None when the input ends first."""
    editor = LineEditor(history, output)
    while True:
        char = source.read(1)
        if not char:
            return None
        line = editor.feed(char)
        if line is not None:
            return line


def prompt_text() -> str:
    """The prompt showing the current directory."""
    try:
        return f"mysh::{os.getcwd()}> "
    except OSError:
        return "mysh::~> "


class _FdReader:
    """Reads one decoded character at a time straight from a descriptor."""

    def __init__(self, fd: int, encoding: str) -> None:
        self._fd = fd
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")

    def read(self, size: int = 1) -> str:
        while True:
            data = os.read(self._fd, 1)
            if not data:
                return ""
            text = self._decoder.decode(data)
            if text:
                return text


@contextmanager
def _terminal_input(source: TextIO) -> Iterator[_CharSource]:
    """Put a terminal into character-at-a-time mode without echo while reading."""
    try:
        fd = source.fileno()
        interactive = termios is not None and os.isatty(fd)
    except (AttributeError, OSError, ValueError):
        interactive = False
    if not interactive:
        yield source
        return
    original = termios.tcgetattr(fd)
    raw = list(original)
    raw[3] &= ~(termios.ICANON | termios.ECHO)
    termios.tcsetattr(fd, termios.TCSAFLUSH, raw)
    try:
        yield _FdReader(fd, getattr(source, "encoding", None) or "utf-8")
    finally:
        termios.tcsetattr(fd, termios.TCSAFLUSH, original)


def _is_exit(line: str) -> bool:
    return line.split("|", 1)[0].rstrip(" \n") == "exit"


def main(argv: list[str] | None = None) -> int:
    """Run the interactive shell until ``exit`` or the end of input."""
    parser = argparse.ArgumentParser(prog="mysh", description="A small interactive shell.")
    parser.add_argument(
        "--history-file",
        default=DEFAULT_HISTORY_FILE,
        help="file the command history is loaded from and saved to",
    )
    args = parser.parse_args(argv)

    history = History()
    history.load(args.history_file)
    source = sys.stdin
    output = sys.stdout

    while True:
        output.write(prompt_text())
        output.flush()
        with _terminal_input(source) as reader:
            line = read_line(history, reader, output)
        if line is None:
            break

        commands = parse_line(line)
        if _is_exit(line):
            history.save(args.history_file)
            print("Bye!", file=output, flush=True)
            break

        try:
            execute_commands(commands)
        except ExecutionError as exc:
            print(exc, file=sys.stderr)
    return 0