"""Command history with a cursor for stepping through earlier entries."""

from __future__ import annotations

import os
from collections.abc import Iterator


class History:
    """An ordered list of commands and a browsing cursor.

    The cursor rests one past the newest entry until the user steps back;
    adding a command puts it there again.
    """

    def __init__(self) -> None:
        self._entries: list[str] = []
        self._cursor = 0

    def add(self, command: str) -> None:
        """Append *command* and reset the cursor past the newest entry."""
        self._entries.append(command)
        self._cursor = len(self._entries)

    def older(self) -> str | None:
        """Step to the previous entry and return it, or None if there is none."""
        if self._cursor == 0:
            return None
        self._cursor -= 1
        return self._entries[self._cursor]

    def newer(self) -> str | None:
        """Step towards the newest entry.

        Returns the entry now under the cursor, ``""`` when the cursor has
        moved past the newest entry, or None when it was already there.
        """
        if self._cursor >= len(self._entries):
            return None
        self._cursor += 1
        return self.current()

    def current(self) -> str:
        """The entry under the cursor, or ``""`` past the newest entry."""
        if self._cursor < len(self._entries):
            return self._entries[self._cursor]
        return ""

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def save(self, path: str | os.PathLike[str]) -> None:
        """Write every entry to *path*, one per line; an unwritable path is ignored."""
        try:
            with open(path, "w", encoding="utf-8", newline="\n") as handle:
                for command in self._entries:
                    handle.write(f"{command}\n")
        except OSError:
            return

    def load(self, path: str | os.PathLike[str]) -> None:
        """Append the lines of *path* as entries; an unreadable path is ignored."""
        try:
            with open(path, encoding="utf-8", errors="replace", newline="\n") as handle:
                for line in handle:
                    self.add(line.split("\n", 1)[0])
        except OSError:
            return