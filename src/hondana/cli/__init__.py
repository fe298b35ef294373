# ABOUTME: CLI package for Hondana, built on Click.
# ABOUTME: Defines the root command group, logging setup, and registers subcommands.

import logging

import click
from rich.logging import RichHandler

from hondana.cli.commands import (
    add_cmd,
    edit_cmd,
    info_cmd,
    ls_cmd,
    prefs_cmd,
    rm_cmd,
    search_cmd,
    stats_cmd,
)


@click.group()
@click.version_option(package_name="hondana")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Hondana - track the books you own and avoid buying them twice."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )


cli.add_command(search_cmd.search)
cli.add_command(add_cmd.add)
cli.add_command(add_cmd.check)
cli.add_command(ls_cmd.ls)
cli.add_command(info_cmd.info)
cli.add_command(edit_cmd.edit)
cli.add_command(edit_cmd.read)
cli.add_command(edit_cmd.rate)
cli.add_command(edit_cmd.note)
cli.add_command(rm_cmd.rm)
cli.add_command(stats_cmd.stats)
cli.add_command(prefs_cmd.prefs)
