"""A small interactive shell with pipes, redirection, builtins and history."""

__version__ = "0.1.0"
__all__ = ["redirect", "history", "parser", "executor", "shell"]