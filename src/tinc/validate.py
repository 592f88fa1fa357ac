"""Validation pass run before a template is located and rendered.

A call site's indentation is read from its physical line, so each line
may hold at most one inclusion call, and the call must sit on the same
line as the ``{{`` (or ``{%``) that opens its expression.
"""

from __future__ import annotations

from typing import Optional, Set

from jinja2 import Environment, TemplateSyntaxError

from tinc.engine import INCLUDE_FUNCTION, make_environment
from tinc.errors import MultipleCallsOnLineError, TemplateParseError

OPENERS = {"variable_begin", "block_begin", "line_statement_begin"}
SKIPPED = {"whitespace"}
NOT_GLOBAL = {("operator", "."), ("operator", "|")}


def validate(
    source: str,
    function_name: str = INCLUDE_FUNCTION,
    environment: Optional[Environment] = None,
    filename: Optional[str] = None,
) -> None:
    """Reject templates whose call sites can't be given a single prefix.

    Works on lexer tokens, so text outside template tags never counts and
    no referenced file has to exist.

    Raises:
        MultipleCallsOnLineError: Two calls share a line, or a call is on a
            later line than its opening delimiter.
        TemplateParseError: If the source can't be tokenized.
    """
    env = environment or make_environment()

    open_line: Optional[int] = None
    seen: Set[int] = set()
    pending: Optional[int] = None
    prev: tuple[str, str] = ("", "")

    try:
        for lineno, kind, value in env.lex(source, filename=filename):
            if kind in SKIPPED:
                continue
            if kind in OPENERS:
                open_line = lineno

            if pending is not None and kind == "operator" and value == "(":
                _check_call(pending, open_line, seen, function_name)
            pending = None

            # `x.include(...)` and `x | include(...)` are not the global.
            if kind == "name" and value == function_name and prev not in NOT_GLOBAL:
                pending = lineno
            prev = (kind, value)
    except TemplateSyntaxError as e:
        raise TemplateParseError(e.message or str(e), e.lineno, filename) from e


def _check_call(
    lineno: int, open_line: Optional[int], seen: Set[int], function_name: str
) -> None:
    if open_line is not None and open_line != lineno:
        raise MultipleCallsOnLineError(
            lineno,
            function_name,
            f'"{function_name}" call is on a different line than its opening '
            f"delimiter (line {open_line})",
        )
    if lineno in seen:
        raise MultipleCallsOnLineError(lineno, function_name)
    seen.add(lineno)
