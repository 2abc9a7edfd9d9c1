"""Running parsed commands: built-ins in the shell, the rest as child processes."""

from __future__ import annotations

import os
import subprocess
import sys
from collections.abc import Sequence
from contextlib import ExitStack
from typing import IO

from mysh.parser import Command
from mysh.redirect import RedirectType, open_redirect

_background: list[subprocess.Popen] = []


class ExecutionError(Exception):
    """A command of a pipeline could not be started or did not succeed."""

    def __init__(self, message: str, returncode: int | None = None) -> None:
        super().__init__(message)
        self.returncode = returncode


def _arg(command: Command, index: int) -> str | None:
    return command.args[index] if len(command.args) > index else None


def _cd(command: Command) -> bool:
    target = _arg(command, 1)
    if target is None:
        print("cd: a path is required.", file=sys.stderr)
        return True
    try:
        os.chdir(target)
    except OSError as exc:
        print(f"cd failed: {exc.strerror or exc}", file=sys.stderr)
    return True


def _pwd(command: Command) -> bool:
    try:
        print(os.getcwd())
    except OSError as exc:
        print(f"pwd failed: {exc.strerror or exc}", file=sys.stderr)
    return True


def _export(command: Command) -> bool:
    assignment = _arg(command, 1)
    if assignment is None:
        print("export: use the form NAME=VALUE.", file=sys.stderr)
        return True
    key, sign, value = assignment.partition("=")
    if not sign:
        print("export: not in the form NAME=VALUE.", file=sys.stderr)
        return True
    try:
        os.environ[key] = value
    except (OSError, ValueError) as exc:
        print(f"setting environment variable failed: {exc}", file=sys.stderr)
    return True


def _unset(command: Command) -> bool:
    key = _arg(command, 1)
    if key is None:
        print("unset: name the environment variable to remove.", file=sys.stderr)
        return False
    try:
        os.environ.pop(key, None)
    except (OSError, ValueError) as exc:
        print(f"removing environment variable failed: {exc}", file=sys.stderr)
    return True


_BUILTINS = {"cd": _cd, "pwd": _pwd, "export": _export, "unset": _unset}


def handle_builtin(command: Command) -> bool:
    """Run *command* if it is a built-in and report whether it was handled.

    ``unset`` without a name reports the problem but is not handled, so it
    falls through to an external command of that name.
    """
    builtin = _BUILTINS.get(command.name)
    if builtin is None:
        return False
    return builtin(command)


def _reap_background() -> None:
    _background[:] = [process for process in _background if process.poll() is None]


def _open_redirection(command: Command, stack: ExitStack) -> IO[bytes] | None:
    if command.redirect_type is RedirectType.NONE:
        return None
    if command.redirect_type is RedirectType.INPUT:
        path = command.input_file
    else:
        path = command.output_file
    if path is None:
        return None
    try:
        return stack.enter_context(open_redirect(command.redirect_type, path))
    except OSError as exc:
        raise ExecutionError(
            f"{command.redirect_type.value}: {path}: {exc.strerror or exc}"
        ) from exc


def _run(command: Command, previous: IO[bytes] | None, last: bool) -> IO[bytes] | None:
    """Start *command*, wait for it unless it runs in the background.

    Returns the readable end of its output pipe, or None for the last command.
    """
    with ExitStack() as stack:
        if previous is not None:
            stack.callback(previous.close)
        redirected = _open_redirection(command, stack)

        stdin = previous
        stdout = None
        if redirected is not None:
            if command.redirect_type is RedirectType.INPUT:
                if stdin is None:
                    stdin = redirected
            else:
                stdout = redirected
        if not last:
            stdout = subprocess.PIPE

        if not command.args:
            raise ExecutionError("no command to run")
        try:
            process = subprocess.Popen(command.args, stdin=stdin, stdout=stdout)
        except OSError as exc:
            raise ExecutionError(f"{command.name}: {exc.strerror or exc}") from exc

    if command.is_background:
        print(f"[background] {process.pid}", flush=True)
        _background.append(process)
        return process.stdout

    returncode = process.wait()
    if returncode != 0:
        if process.stdout is not None:
            process.stdout.close()
        if returncode > 0:
            raise ExecutionError(
                f"'{command.name}' exited with code {returncode}", returncode
            )
        raise ExecutionError(
            f"'{command.name}' was terminated by signal {-returncode}", returncode
        )
    return process.stdout


def execute_commands(commands: Sequence[Command]) -> None:
    """Run *commands* as a pipeline, one after another.

    Each command's output feeds the next one's input; a pipe takes
    precedence over a file redirection. Raises ExecutionError at the first
    command that cannot start or fails.
    """
    _reap_background()
    previous: IO[bytes] | None = None
    try:
        for index, command in enumerate(commands):
            last = index == len(commands) - 1
            if handle_builtin(command):
                if previous is not None:
                    previous.close()
                    previous = None
                continue
            current, previous = previous, None
            previous = _run(command, current, last)
    finally:
        if previous is not None:
            previous.close()