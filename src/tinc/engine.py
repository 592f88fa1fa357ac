"""Jinja2 environment setup for tinc templates."""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional

from jinja2 import Environment, StrictUndefined, TemplateSyntaxError, nodes

from tinc.errors import TemplateParseError
from tinc.functions import get_env, indent, read_file

# Name of the indentation-aware inclusion global.
INCLUDE_FUNCTION = "include"
READ_FILE_FUNCTION = "read_file"


def make_environment(
    extra_globals: Optional[Mapping[str, Callable[..., Any]]] = None,
) -> Environment:
    """Create a Jinja2 Environment with the tinc globals registered.

    Templates are plain text: no autoescaping, trailing newlines kept, and
    any undefined name is an error.

    Args:
        extra_globals: Additional globals, e.g. the per-render include().

    Returns:
        Configured Jinja2 Environment.
    """
    env = Environment(
        autoescape=False,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )

    env.globals["env"] = get_env
    env.globals["indent"] = indent
    env.globals[READ_FILE_FUNCTION] = read_file
    if extra_globals:
        env.globals.update(extra_globals)

    return env


def parse_source(
    environment: Environment, source: str, filename: Optional[str] = None
) -> nodes.Template:
    """Parse template source into a Jinja2 syntax tree without evaluating it.

    Raises:
        TemplateParseError: If the source is not valid template syntax.
    """
    try:
        return environment.parse(source, filename=filename)
    except TemplateSyntaxError as e:
        raise TemplateParseError(e.message or str(e), e.lineno, filename) from e
