"""
pwnedaudit CLI - Main entry point for the command-line interface.

Copyright (c) 2025 The pwnedaudit authors.
Licensed under the MIT License.
"""

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from pwnedaudit import __version__
from pwnedaudit.hibp.cli import add_hibp_commands

console = Console(stderr=True)


def setup_logging(verbose: bool = False) -> None:
    """Route log records to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )
    if verbose:
        # aiohttp is chatty at debug level
        logging.getLogger("aiohttp").setLevel(logging.WARNING)


@click.group()
@click.version_option(version=__version__, prog_name="pwnedaudit")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """pwnedaudit - Pwned Passwords audit tool

    Checks candidate passwords against the Have I Been Pwned breach
    corpus using k-anonymity; passwords never leave this machine.
    """
    ctx.ensure_object(dict)
    ctx.obj["console"] = console
    setup_logging(verbose)


add_hibp_commands(main)


if __name__ == "__main__":
    main()
