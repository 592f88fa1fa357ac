"""Dotenv loading before render.

Files are loaded in priority order and never override a variable that
is already set, so the first file defining a name wins:

1. ``<dir>/.env.properties`` for each $CONF directory, last one first
2. ``.env.properties`` in the working directory
3. ``.env.default.properties`` in the working directory
"""

from __future__ import annotations

import logging
from pathlib import Path

from dotenv import load_dotenv

from tinc.config import Settings

log = logging.getLogger(__name__)


def load_env_file(path: Path) -> bool:
    """Load one dotenv file if it exists. Returns True if it was loaded."""
    if not path.is_file():
        log.debug("Skipping missing env file %s", path)
        return False

    log.debug("Loading env file %s", path)
    load_dotenv(path, override=False)
    return True


def load_env_files(settings: Settings) -> list[Path]:
    """Load all dotenv files for a run. Returns the files actually loaded."""
    candidates = settings.conf_env_files() + [Path(p) for p in settings.env_files]
    return [path for path in candidates if load_env_file(path)]
