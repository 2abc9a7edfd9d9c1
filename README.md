# mysh

mysh is a small interactive shell for POSIX systems. It runs programs and
connects them with pipes. It can redirect input and output to files. It has a
few builtin commands and keeps a history of the lines you enter.

## Installation

```
pip install .
```

## Usage

Start the shell:

```
mysh
```

The prompt shows the current directory, for example `mysh::/home/me> `.

Type `exit` to leave. This saves the history to `history.txt` in the current
directory, and the next session loads it again. To use a different file, start
the shell with `mysh --history-file PATH`. If the input ends before `exit`,
the shell stops without saving the history.

### Features

- **Pipes:** `ls -l | grep py | wc -l`. Each command's output feeds the next
  command's input. When a command has both a pipe and a `<` redirection, the
  pipe wins.
- **Redirection:**
  - `sort < input.txt` reads standard input from a file.
  - `ls > out.txt` writes standard output to a file and overwrites it.
  - `echo more >> out.txt` adds to the end of a file.
  - Files are created with mode `0644`.
- **Quoting:** a word that starts with `"` or `'` runs to the matching quote
  and stays one argument, so `echo "hello world"` passes one argument.
- **Environment variables:** a word that starts with `$NAME` is replaced by
  the value of that variable. If the variable is not set, the word is dropped.
- **Background jobs:** a command that ends in `&` runs without waiting. The
  shell prints `[background] PID`.
- **Builtins:**
  - `cd DIR`
  - `pwd`
  - `export NAME=VALUE`
  - `unset NAME`. With no name it reports the problem and then runs an
    external `unset` instead.
- **Line editing:** the Up and Down arrow keys step through the history, and
  Backspace erases the last character. On a terminal, input is read one
  character at a time with echo turned off.

When a command cannot start, or exits with a non-zero code or because of a
signal, the shell prints a message to standard error. It does not run the rest
of the line.

### What it does not do

The shell has no `&&`, `||` or `;`. It has no globbing, no backslash escapes
and no job control beyond starting background commands. A `|` inside quotes
still splits the line.

## Using it as a library

Each part of the shell can be used on its own:

```python
from mysh.parser import parse_line
from mysh.executor import ExecutionError, execute_commands
from mysh.history import History

commands = parse_line("echo hello | tr a-z A-Z")
try:
    execute_commands(commands)
except ExecutionError as exc:
    print("failed:", exc, exc.returncode)

history = History()
history.add("ls -l")
history.older()          # "ls -l"
history.save("history.txt")
```

The modules are:

- `mysh.parser`:
  - `parse_line` splits a line on `|`.
  - `parse_command` parses one segment into a `Command`, which has `name`,
    `args`, `input_file`, `output_file`, `is_background` and `redirect_type`.
- `mysh.redirect`:
  - `RedirectType`.
  - `open_input`, `open_output`, `open_append` and `open_redirect`.
- `mysh.executor`:
  - `handle_builtin` runs builtins.
  - `execute_commands` runs a pipeline and raises `ExecutionError` on failure.
- `mysh.history`:
  - `History`, with `add`, `older`, `newer`, `current`, `save` and `load`.
- `mysh.shell`:
  - `LineEditor` and `read_line` handle line editing.
  - `prompt_text` builds the prompt.
  - `main` is the command entry point.

## Running the tests

```
pip install .[test]
pytest
```