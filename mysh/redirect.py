"""Opening the files behind the shell's ``<``, ``>`` and ``>>`` redirections."""

from __future__ import annotations

import enum
import os
from typing import BinaryIO

_FILE_MODE = 0o644


class RedirectType(enum.Enum):
    """Kind of redirection a command asks for."""

    NONE = "none"
    INPUT = "<"
    OUTPUT = ">"
    APPEND = ">>"


def open_input(path: str | os.PathLike[str]) -> BinaryIO:
    """Open *path* for reading, to be used as a command's standard input."""
    return open(path, "rb")


def _open_for_writing(path: str | os.PathLike[str], extra_flags: int) -> BinaryIO:
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | extra_flags, _FILE_MODE)
    try:
        return os.fdopen(fd, "wb")
    except BaseException:
        os.close(fd)
        raise


def open_output(path: str | os.PathLike[str]) -> BinaryIO:
    """Open *path* for writing, creating it or discarding what it held."""
    return _open_for_writing(path, os.O_TRUNC)


def open_append(path: str | os.PathLike[str]) -> BinaryIO:
    """Open *path* for writing at its end, creating it if needed."""
    return _open_for_writing(path, os.O_APPEND)


def open_redirect(redirect_type: RedirectType, path: str | os.PathLike[str]) -> BinaryIO:
    """Open *path* the way *redirect_type* requires.

    Raises ValueError for ``RedirectType.NONE``, which names no file.
    """
    if redirect_type is RedirectType.INPUT:
        return open_input(path)
    if redirect_type is RedirectType.OUTPUT:
        return open_output(path)
    if redirect_type is RedirectType.APPEND:
        return open_append(path)
    raise ValueError(f"no file to open for redirection {redirect_type!r}")