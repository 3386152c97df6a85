"""CLI command: dotstyle format -- print a file in canonical form."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from dotstyle.cli.check import load_file
from dotstyle.config import DotStyleConfig
from dotstyle.model.graph import Graph
from dotstyle.parser import ParseError
from dotstyle.printer import print_graph, print_stylesheet


@click.command("format")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.pass_obj
def format_(config: DotStyleConfig, file: str) -> None:
    """Print the canonical form of a DOT graph, or of a ``.dss`` stylesheet.

    Canonical output quotes every atom and parses back to the same tree.
    """
    try:
        parsed = load_file(Path(file), config.encoding)
    except ParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)

    if isinstance(parsed, Graph):
        click.echo(print_graph(parsed, indent=config.indent), nl=False)
    else:
        click.echo(print_stylesheet(parsed, indent=config.indent), nl=False)
