"""dotstyle CLI entry point: Click group with subcommands."""

import logging

import click

from dotstyle import __version__
from dotstyle.config import DotStyleConfig


@click.group()
@click.version_option(version=__version__, prog_name="dotstyle")
@click.option("-v", "--verbose", is_flag=True, help="Log parsing and cascade details.")
@click.option(
    "--indent",
    type=click.IntRange(min=0),
    default=2,
    show_default=True,
    help="Spaces per nesting level in printed output.",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, indent: int) -> None:
    """dotstyle - style Graphviz DOT graphs with CSS-like DSS stylesheets."""
    config = DotStyleConfig(indent=indent, log_level="DEBUG" if verbose else "WARNING")
    logging.basicConfig(
        level=config.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = config


# Import and register subcommands
from dotstyle.cli.style import style  # noqa: E402
from dotstyle.cli.format import format_  # noqa: E402
from dotstyle.cli.check import check  # noqa: E402

cli.add_command(style)
cli.add_command(format_)
cli.add_command(check)
