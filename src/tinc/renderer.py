"""Renderer - renders a template file, expanding include() recursively.

Each include() call site gets the indentation of its own source line as
a literal ``prefix=`` argument before the template is compiled. The
included file is rendered as a full template of its own and every line
after its first is shifted right by that prefix, so nested YAML, shell
heredocs and the like keep their structure.

Example:
    # main.yaml
    services:
      {{ include("web.yaml") }}

    # web.yaml
    web:
      image: nginx

    # output
    services:
      web:
        image: nginx
"""

from __future__ import annotations

import io
import logging
import os
from pathlib import Path
from typing import Callable, Optional, TextIO, Tuple

from jinja2 import Environment, nodes

from tinc.engine import (
    INCLUDE_FUNCTION,
    READ_FILE_FUNCTION,
    make_environment,
    parse_source,
)
from tinc.errors import CyclicInclusionError, QueueDesynchronizationError
from tinc.functions import indent_lines, read_text
from tinc.indent_queue import IndentQueue
from tinc.locator import iter_call_sites, locate_in_tree
from tinc.paths import to_abs_path
from tinc.validate import validate

log = logging.getLogger(__name__)

# Keyword argument that carries a call site's prefix.
PREFIX_ARG = "prefix"

Ancestry = Tuple[str, ...]


class Renderer:
    """Renders template files with indentation-aware recursive inclusion."""

    def __init__(
        self,
        function_name: str = INCLUDE_FUNCTION,
        cwd: Optional[Path] = None,
    ):
        """Initialize renderer.

        Args:
            function_name: Name of the inclusion global in templates.
            cwd: Base directory for relative paths. Defaults to the process
                cwd at the time each path is resolved.
        """
        self.function_name = function_name
        self.cwd = cwd

    def render(
        self,
        path: str | os.PathLike[str],
        sink: TextIO,
        ancestry: Ancestry = (),
    ) -> None:
        """Render the template at ``path`` into ``sink``.

        Args:
            path: Template file to render.
            sink: Writable text stream receiving the output.
            ancestry: Resolved paths of the files currently including this
                one, outermost first. Empty for the entry template.

        Raises:
            FileReadError: The file can't be read.
            TemplateParseError: The file is not valid template syntax.
            MultipleCallsOnLineError: An include() line is ambiguous.
            CyclicInclusionError: An include() would recurse into an ancestor.
            MissingEnvVarError: An env() lookup failed.
        """
        current = to_abs_path(path, self.cwd)
        parent = ancestry[-1] if ancestry else None
        source = read_text(current, parent=parent)

        log.debug("Rendering %s (depth %d)", current, len(ancestry))

        env = make_environment(
            {
                READ_FILE_FUNCTION: self._bind_read_file(current),
                self.function_name: self._bind_include(current, ancestry),
            }
        )
        validate(source, self.function_name, env, filename=current)

        tree = parse_source(env, source, filename=current)
        self._pin_prefixes(source, tree, env)

        template = env.from_string(tree)
        template.stream().dump(sink)

    def render_to_string(
        self, path: str | os.PathLike[str], ancestry: Ancestry = ()
    ) -> str:
        """Render the template at ``path`` and return the output."""
        buf = io.StringIO()
        self.render(path, buf, ancestry)
        return buf.getvalue()

    def _pin_prefixes(self, source: str, tree: nodes.Template, env: Environment) -> None:
        """Attach each call site's line prefix to the call as ``prefix=``.

        A call that already passes a prefix keeps it.
        """
        queue = IndentQueue(locate_in_tree(source, tree, self.function_name))

        for call in iter_call_sites(tree, self.function_name):
            prefix = queue.pop()
            if self._passes_prefix(call):
                continue
            keyword = nodes.Keyword(
                PREFIX_ARG, nodes.Const(prefix, lineno=call.lineno), lineno=call.lineno
            )
            call.kwargs.append(keyword.set_environment(env))

        if queue:
            raise QueueDesynchronizationError(
                f"{len(queue)} located prefix(es) left without a call site"
            )

    @staticmethod
    def _passes_prefix(call: nodes.Call) -> bool:
        """True if the call may already supply a prefix itself.

        Argument unpacking (``*args``, ``**kwargs``) counts: its contents are
        only known at render time.
        """
        return (
            len(call.args) > 1
            or any(kw.key == PREFIX_ARG for kw in call.kwargs)
            or call.dyn_args is not None
            or call.dyn_kwargs is not None
        )

    def _bind_read_file(self, current: str) -> Callable[[str], str]:
        """Build the read_file() global for one render of ``current``."""

        def read_file(path: str) -> str:
            return read_text(to_abs_path(path, self.cwd), parent=current)

        return read_file

    def _bind_include(self, current: str, ancestry: Ancestry) -> Callable[..., str]:
        """Build the include() global for one render of ``current``."""
        chain = ancestry + (current,)

        def include(path: str, prefix: Optional[str] = None) -> str:
            target = to_abs_path(path, self.cwd)
            if target in chain:
                raise CyclicInclusionError(target, current, chain)

            log.debug("Including %s from %s with prefix %r", target, current, prefix)
            buf = io.StringIO()
            self.render(target, buf, chain)
            return indent_lines(buf.getvalue(), prefix or "")

        return include


def render_file(path: str | os.PathLike[str], function_name: str = INCLUDE_FUNCTION) -> str:
    """Render one template file to a string."""
    return Renderer(function_name=function_name).render_to_string(path)
