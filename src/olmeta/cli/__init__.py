# ABOUTME: CLI package for olmeta, built on Click.
# ABOUTME: Defines the root command group, logging setup, and registers subcommands.

import logging

import click
from rich.logging import RichHandler

from olmeta.cli.commands import images_cmd, lookup_cmd


@click.group()
@click.version_option(package_name="olmeta")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """olmeta - look up book metadata and covers on Open Library."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(show_path=False)],
        )


cli.add_command(lookup_cmd.lookup)
cli.add_command(images_cmd.images)
