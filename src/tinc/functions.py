"""Template globals: env lookup, manual indent and plain file reads.

These run at render time. Each one fails loudly: a template that asks
for something missing must not render at all.
"""

from __future__ import annotations

import os
from pathlib import Path

from tinc.errors import FileReadError, MissingEnvVarError

# Spaces per indent level for indent().
INDENT_UNIT = 2


def indent_lines(text: str, prefix: str) -> str:
    """Insert ``prefix`` after every line break in ``text``.

    The first line is left alone; whatever precedes the text in the
    output is expected to have placed it already.
    """
    if not prefix:
        return text
    return text.replace("\n", "\n" + prefix)


def indent(level: int, text: str) -> str:
    """Indent every line after the first by ``level`` units.

    Example:
        {{ indent(3, "line1\\nline2") }}  ->  "line1\\n      line2"
    """
    return indent_lines(text, " " * (int(level) * INDENT_UNIT))


def get_env(name: str) -> str:
    """Get an environment variable value.

    Raises:
        MissingEnvVarError: If the variable is unset or blank.
    """
    value = os.environ.get(name, "")
    if not value.strip():
        raise MissingEnvVarError(name)
    return value


def read_text(path: str | os.PathLike[str], parent: str | None = None) -> str:
    """Read a file as UTF-8, reporting failures as FileReadError."""
    p = Path(path).expanduser()

    if not p.exists():
        raise FileReadError(os.fspath(path), parent=parent)
    if not p.is_file():
        raise FileReadError(os.fspath(path), parent=parent, reason="not a file")

    try:
        return p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FileReadError(os.fspath(path), parent=parent, reason=str(e)) from e


def read_file(path: str) -> str:
    """Include file contents verbatim, without rendering or indentation.

    Example:
        script: |
          {{ read_file("scripts/setup.sh") }}
    """
    return read_text(path)
