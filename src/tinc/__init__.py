"""Tinc - template include preprocessor"""

from tinc._version import __version__
from tinc.engine import INCLUDE_FUNCTION, make_environment
from tinc.errors import (
    CyclicInclusionError,
    FileReadError,
    MissingEnvVarError,
    MultipleCallsOnLineError,
    QueueDesynchronizationError,
    TemplateParseError,
    TincError,
)
from tinc.functions import INDENT_UNIT, get_env, indent, read_file
from tinc.indent_queue import IndentQueue
from tinc.locator import locate
from tinc.renderer import Renderer, render_file
from tinc.validate import validate

__all__ = [
    "__version__",
    # engine
    "INCLUDE_FUNCTION",
    "make_environment",
    # core
    "IndentQueue",
    "Renderer",
    "locate",
    "render_file",
    "validate",
    # functions
    "INDENT_UNIT",
    "get_env",
    "indent",
    "read_file",
    # errors
    "CyclicInclusionError",
    "FileReadError",
    "MissingEnvVarError",
    "MultipleCallsOnLineError",
    "QueueDesynchronizationError",
    "TemplateParseError",
    "TincError",
]
