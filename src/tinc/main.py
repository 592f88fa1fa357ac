"""Tinc CLI Main Entry Point

Tinc - template include preprocessor.
Use any text file as a Jinja2 template: inline values from env, include
other files with indentation preserved, call functions and more.

Usage:
    tinc <template>                 # Render to stdout
    tinc -o out.yaml <template>     # Render to file
    tinc -v <template>              # Verbose logging to stderr
    tinc help | -h | --help         # Show this help
    tinc --version                  # Show version

Template functions:
    {{ env("NAME") }}               # env var, fails if unset or empty
    {{ read_file("path") }}         # file contents, verbatim
    {{ indent(2, text) }}           # indent lines after the first by 2*2 spaces
    {{ include("path") }}           # render path, indented like this line
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from tinc._version import __version__
from tinc.config import Settings
from tinc.envfiles import load_env_files
from tinc.errors import handle_error
from tinc.renderer import Renderer
from tinc.sink import write_output

log = logging.getLogger(__name__)

# stdout is the output sink; diagnostics go to stderr.
console = Console(stderr=True)

DEBUG_VAR = "TINC_DEBUG"


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the tinc CLI.

    Log levels:
    - Normal: Only warnings/errors shown
    - Verbose (-v): INFO level - shows written output files
    - Debug (TINC_DEBUG=1): DEBUG level - shows every render and include
    """
    debug = bool(os.environ.get(DEBUG_VAR))
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=console,
        show_time=verbose,
        show_path=debug,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    tinc_logger = logging.getLogger("tinc")
    tinc_logger.setLevel(level)
    tinc_logger.handlers = [handler]
    tinc_logger.propagate = False


typer_app = typer.Typer(
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@typer_app.command()
def cli(
    ctx: typer.Context,
    template: Optional[str] = typer.Argument(
        None, help="Path to the template file.", show_default=False
    ),
    output: Optional[Path] = typer.Option(
        None, "-o", "--output", help="Output path to file. Stdout if not set."
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logging."),
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    """Render a template file, expanding env vars and indented includes.

    \b
    Examples:
        tinc deploy.yaml.tmpl             Render to stdout
        tinc -o deploy.yaml deploy.tmpl   Render to deploy.yaml
        CONF=conf/prod tinc app.tmpl      Also load conf/prod/.env.properties
    """
    if version:
        typer.echo(f"tinc {__version__}")
        raise typer.Exit()

    if template == "help":
        typer.echo(ctx.get_help())
        raise typer.Exit()

    if template is None:
        typer.secho(
            "Error: missing template path. Try 'tinc --help'.",
            err=True,
            fg=typer.colors.RED,
        )
        raise typer.Exit(code=1)

    setup_logging(verbose)

    try:
        settings = Settings.from_env(Path(template), output)
        loaded = load_env_files(settings)
        log.info("Loaded env files: %s", ", ".join(map(str, loaded)) or "none")

        # Render fully before writing so a failure emits nothing.
        text = Renderer().render_to_string(settings.template)
        write_output(text, settings.output)
    except Exception as exc:
        log.debug("Render failed", exc_info=True)
        handle_error(exc)


def app(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI."""
    typer_app(args=argv)


if __name__ == "__main__":
    app()
