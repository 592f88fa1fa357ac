"""Output sink: stdout or an atomically replaced file."""

from __future__ import annotations

import logging
import os
import stat
import sys
import tempfile
from pathlib import Path
from typing import Optional

log = logging.getLogger(__name__)


def resolve_output(output: Path, cwd: Optional[Path] = None) -> Path:
    """Resolve an output path against the working directory."""
    output = Path(output).expanduser()
    if output.is_absolute():
        return output
    return (cwd or Path.cwd()) / output


def _target_mode(path: Path) -> int:
    """Permission bits for the replaced file.

    An existing target keeps its mode; a new file gets 0666 minus the umask,
    like a plain open() would create it.
    """
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def atomic_write_text(path: Path, text: str, encoding: str = "utf-8") -> None:
    """Write ``text`` to ``path`` via a temp file in the same directory.

    The target is only replaced once the whole text is on disk; a failed
    write leaves any previous file untouched and no temp file behind.
    The written file keeps the permissions of the file it replaces.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    tmp_path: Optional[Path] = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding=encoding,
            dir=str(path.parent),
            prefix=f".{path.name}.",
            delete=False,
        ) as f:
            tmp_path = Path(f.name)
            f.write(text)
            f.flush()
            os.fsync(f.fileno())

        os.chmod(tmp_path, _target_mode(path))
        os.replace(tmp_path, path)
        tmp_path = None
    finally:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()


def write_output(text: str, output: Optional[Path] = None) -> None:
    """Write rendered text to ``output``, or to stdout when it's None."""
    if output is None:
        sys.stdout.write(text)
        sys.stdout.flush()
        return

    target = resolve_output(output)
    atomic_write_text(target, text)
    log.info("Wrote %s", target)
