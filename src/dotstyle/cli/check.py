"""CLI command: dotstyle check -- verify that DOT and DSS files parse."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from dotstyle.config import DotStyleConfig
from dotstyle.model.graph import Graph
from dotstyle.parser import ParseError, parse_graph
from dotstyle.stylesheet import Stylesheet, parse_stylesheet

STYLESHEET_SUFFIX = ".dss"


def load_file(path: Path, encoding: str) -> Graph | Stylesheet:
    """Parse *path* as a stylesheet if it ends in ``.dss``, as a DOT graph otherwise."""
    source = path.read_text(encoding=encoding)
    if path.suffix == STYLESHEET_SUFFIX:
        return parse_stylesheet(source)
    return parse_graph(source)


@click.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.pass_obj
def check(config: DotStyleConfig, files: tuple[str, ...]) -> None:
    """Parse each DOT or DSS file and report whether it is well formed.

    Exits with code 1 if any file fails to parse.
    """
    failures = 0
    for name in files:
        try:
            load_file(Path(name), config.encoding)
        except ParseError as exc:
            failures += 1
            click.echo(f"FAIL: {name}: {exc}")
        else:
            click.echo(f"OK: {name}")

    if failures:
        click.echo()
        click.echo(f"Summary: {failures} of {len(files)} file(s) failed to parse")
        sys.exit(1)
