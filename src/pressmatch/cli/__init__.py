# ABOUTME: CLI package for pressmatch, built on Click.
# ABOUTME: Defines the root command group and registers subcommands.

import logging

import click

from pressmatch.cli.commands import identify_cmd, ls_cmd, price_cmd


@click.group()
@click.version_option(package_name="pressmatch")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log debug output.")
def cli(verbose: bool) -> None:
    """pressmatch - identify the exact pressing of a record or CD."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


cli.add_command(identify_cmd.identify)
cli.add_command(price_cmd.price)
cli.add_command(ls_cmd.ls)
