"""Locator - finds inclusion call sites and the indentation of their lines.

The prefix of a call site is the run of spaces and tabs that starts the
source line the call sits on. Call sites are found by walking the parsed
Jinja2 tree, not by scanning text, so calls nested in if/for/with blocks
and their else branches are all found, and a function name that only
appears as an argument or inside literal text is ignored.
"""

from __future__ import annotations

import re
from typing import Iterator, List, Optional

from jinja2 import Environment, nodes

from tinc.engine import INCLUDE_FUNCTION, make_environment, parse_source

LEADING_WS = re.compile(r"[ \t]*")
# Same line breaks the Jinja2 lexer counts.
LINE_BREAK = re.compile(r"\r\n|\r|\n")


def is_call_to(node: nodes.Node, function_name: str) -> bool:
    """True if ``node`` calls ``function_name`` directly, e.g. ``include(...)``."""
    return (
        isinstance(node, nodes.Call)
        and isinstance(node.node, nodes.Name)
        and node.node.name == function_name
    )


def _walk(node: nodes.Node) -> Iterator[nodes.Node]:
    """Depth-first, pre-order traversal of a Jinja2 syntax tree."""
    yield node
    for child in node.iter_child_nodes():
        yield from _walk(child)


def iter_call_sites(
    tree: nodes.Template, function_name: str = INCLUDE_FUNCTION
) -> List[nodes.Call]:
    """Return every call to ``function_name`` in ``tree``, in source order.

    Jinja2 lists some node fields out of source order (a for-loop's filter
    comes after its body), so the walk result is stably sorted by line.
    """
    calls = [n for n in _walk(tree) if is_call_to(n, function_name)]
    return sorted(calls, key=call_lineno)


def call_lineno(call: nodes.Call) -> int:
    """Line of the callee name, which is where the call's prefix is read."""
    return call.node.lineno or call.lineno


def line_prefix(source: str, lineno: int) -> str:
    """Leading whitespace of 1-based line ``lineno`` in ``source``.

    A line made only of spaces and tabs is returned whole.
    """
    lines = LINE_BREAK.split(source)
    if not 1 <= lineno <= len(lines):
        raise IndexError(f"line {lineno} out of range (source has {len(lines)} lines)")
    match = LEADING_WS.match(lines[lineno - 1])
    return match.group(0) if match else ""


def locate_in_tree(
    source: str, tree: nodes.Template, function_name: str = INCLUDE_FUNCTION
) -> List[str]:
    """Prefixes for each call site of an already parsed template."""
    return [line_prefix(source, call_lineno(c)) for c in iter_call_sites(tree, function_name)]


def locate(
    source: str,
    function_name: str = INCLUDE_FUNCTION,
    environment: Optional[Environment] = None,
) -> List[str]:
    """Indentation prefix of every ``function_name`` call site in ``source``.

    Parses only; nothing is evaluated.

    Args:
        source: Template source text.
        function_name: Name of the called global to look for.
        environment: Environment whose syntax settings to parse with.

    Returns:
        One prefix per call site in source order, empty if there are none.

    Raises:
        TemplateParseError: If the source is not valid template syntax.

    Example:
        >>> locate('a:\\n  {{ include("b.yaml") }}')
        ['  ']
    """
    env = environment or make_environment()
    tree = parse_source(env, source)
    return locate_in_tree(source, tree, function_name)
