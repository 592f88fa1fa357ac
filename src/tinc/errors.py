"""Tinc exceptions and CLI error exits."""

from __future__ import annotations

import sys
from typing import NoReturn

import typer
from jinja2 import TemplateError


class TincError(Exception):
    """Base exception for all tinc errors."""

    def __init__(self, message: str, exit_code: int = 1) -> None:
        self.message = message
        self.exit_code = exit_code
        super().__init__(message)


class TemplateParseError(TincError):
    """Raised when a template has malformed syntax."""

    def __init__(self, message: str, lineno: int | None = None, filename: str | None = None):
        self.lineno = lineno
        self.filename = filename
        where = filename or "<template>"
        if lineno is not None:
            where = f"{where}:{lineno}"
        super().__init__(f"Template syntax error in {where}: {message}")


class MissingEnvVarError(TincError):
    """Raised when a template reads an env var that is unset or empty."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'env var "{name}" is not defined')


class FileReadError(TincError):
    """Raised when a template or an included file can't be read."""

    def __init__(self, path: str, parent: str | None = None, reason: str | None = None):
        self.path = path
        self.parent = parent
        msg = f"file not found: {path}"
        if reason:
            msg = f"failed to read {path}: {reason}"
        if parent:
            msg = f"{msg} (included from {parent})"
        super().__init__(msg)


class CyclicInclusionError(TincError):
    """Raised when a file includes itself through its ancestors."""

    def __init__(self, path: str, parent: str, chain: tuple[str, ...] = ()):
        self.path = path
        self.parent = parent
        self.chain = chain
        trail = " -> ".join([*chain, path]) if chain else path
        super().__init__(
            f"cyclic dependency: file {parent!r} includes {path!r} ({trail})"
        )


class MultipleCallsOnLineError(TincError):
    """Raised when the inclusion function is called twice on one line."""

    def __init__(self, lineno: int, function_name: str, reason: str | None = None):
        self.lineno = lineno
        self.function_name = function_name
        reason = reason or f'multiple "{function_name}" calls found on a single line'
        super().__init__(f"Invalid template: line {lineno}: {reason}")


class QueueDesynchronizationError(TincError):
    """Raised when call sites and located prefixes fall out of step."""

    pass


def exit_with_error(message: str, exit_code: int = 1) -> NoReturn:
    """Exit the program with an error message."""
    typer.secho(f"Error: {message}", err=True, fg=typer.colors.RED)
    sys.exit(exit_code)


def handle_error(error: Exception) -> NoReturn:
    """Handle and exit on tinc errors."""
    if isinstance(error, TincError):
        exit_with_error(error.message, error.exit_code)
    elif isinstance(error, TemplateError):
        exit_with_error(f"Template error: {error}")
    else:
        # Unexpected error
        typer.secho(f"Unexpected error: {error}", err=True, fg=typer.colors.RED)
        sys.exit(1)
