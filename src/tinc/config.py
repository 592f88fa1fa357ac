"""Configuration for a tinc run.

Settings come from the command line and the environment:
- template: entry template path
- output: output file, stdout if unset
- conf: extra directories with a .env.properties file, from $CONF
  (comma-separated), e.g. ``CONF=conf/one,conf/two tinc app.yaml.tmpl``
- env_files: dotenv files loaded from the working directory
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

CONF_VAR = "CONF"
ENV_FILE_NAME = ".env.properties"
DEFAULT_ENV_FILES = [ENV_FILE_NAME, ".env.default.properties"]


def comma_split(text: str | None) -> list[str]:
    """Split a comma-separated string, dropping blank items."""
    if not text:
        return []
    return [item.strip() for item in text.split(",") if item.strip()]


class Settings(BaseModel):
    """Options for rendering one entry template."""

    template: Path = Field(description="Path to the entry template")
    output: Path | None = Field(
        default=None, description="Output file path. Stdout if not set."
    )
    conf: list[str] = Field(
        default_factory=list,
        description="Directories holding an extra .env.properties file",
    )
    env_files: list[str] = Field(
        default_factory=lambda: list(DEFAULT_ENV_FILES),
        description="Dotenv files loaded from the working directory",
    )

    @field_validator("conf", mode="before")
    @classmethod
    def split_conf(cls, value: Any) -> Any:
        """Accept the raw comma-separated $CONF value."""
        if value is None:
            return []
        if isinstance(value, str):
            return comma_split(value)
        return value

    @classmethod
    def from_env(cls, template: Path, output: Path | None = None) -> "Settings":
        """Build settings, taking extra dotenv directories from $CONF."""
        return cls(template=template, output=output, conf=os.environ.get(CONF_VAR))

    def conf_env_files(self) -> list[Path]:
        """Dotenv files from $CONF directories, last directory first."""
        return [Path(base) / ENV_FILE_NAME for base in reversed(self.conf)]
