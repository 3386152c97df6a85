"""CLI command: dotstyle style -- apply a DSS stylesheet to a DOT graph."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from dotstyle.config import DotStyleConfig
from dotstyle.parser import ParseError, parse_graph
from dotstyle.printer import print_graph
from dotstyle.stylesheet import parse_stylesheet
from dotstyle.transforms import apply_stylesheet


@click.command()
@click.option(
    "-s",
    "--stylesheet",
    "stylesheet_file",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="DSS stylesheet to apply.",
)
@click.option(
    "-i",
    "--input",
    "input_file",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="DOT graph to style.",
)
@click.option(
    "-o",
    "--output",
    "output_file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Where to write the styled graph (default: stdout).",
)
@click.pass_obj
def style(
    config: DotStyleConfig, stylesheet_file: str, input_file: str, output_file: str | None
) -> None:
    """Apply a DSS stylesheet to a DOT graph and print the result.

    Values set explicitly in the graph always win over the stylesheet.
    """
    try:
        stylesheet = parse_stylesheet(
            Path(stylesheet_file).read_text(encoding=config.encoding)
        )
    except ParseError as exc:
        click.echo(f"Parse error: {stylesheet_file}: {exc}", err=True)
        sys.exit(1)

    try:
        graph = parse_graph(Path(input_file).read_text(encoding=config.encoding))
    except ParseError as exc:
        click.echo(f"Parse error: {input_file}: {exc}", err=True)
        sys.exit(1)

    output = print_graph(apply_stylesheet(stylesheet, graph), indent=config.indent)
    if output_file is None:
        click.echo(output, nl=False)
    else:
        Path(output_file).write_text(output, encoding=config.encoding)
