"""CLI entry point for prdocs.

Commands:
  update   — regenerate a documentation file from a pull request's review comments
  init     — interactive setup wizard writing .prdocs.yml and a CI workflow
"""

from __future__ import annotations

import importlib.metadata
import logging

import click

from prdocs_cli.commands.init import init_cmd
from prdocs_cli.commands.update import update_cmd


@click.group()
@click.version_option(
    version=importlib.metadata.version("prdocs"),
    prog_name="prdocs",
)
@click.option(
    "--config",
    "config_path",
    default=".prdocs.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="PRDOCS_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """Keep agent documentation in sync with PR review discussions."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s - %(levelname)s - %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


main.add_command(update_cmd)
main.add_command(init_cmd)
