"""Path normalization for ancestry comparisons."""

from __future__ import annotations

import os
import re
from pathlib import Path

# `C:\` or `C:/`; a bare `a:b` is an ordinary relative name.
DRIVE = re.compile(r"^[A-Za-z]:[\\/]")


def has_drive(path: str) -> bool:
    """True if the path carries a Windows drive designator like ``C:\\``."""
    return DRIVE.match(path) is not None


def to_abs_path(path: str | os.PathLike[str], cwd: Path | None = None) -> str:
    """Resolve a template path to the form used as its identity.

    Relative paths are joined to the current working directory and
    normalized. Absolute paths, ``~`` paths and drive-qualified paths are
    returned unchanged.
    """
    p = os.fspath(path)
    if p.startswith("/") or has_drive(p):
        return p
    if p == "~" or p.startswith("~/"):
        return p

    base = cwd or Path.cwd()
    return os.path.normpath(os.path.join(base, p))
