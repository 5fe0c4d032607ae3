import logging
import os

import click

from metagit.cli.commands.config import config_group
from metagit.cli.commands.status import status_cmd
from metagit.cli.commands.tree import tree_cmd
from metagit.cli.output import user_output
from metagit.core.context import create_context

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="metagit")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Show git status with Unity-style .meta files folded into their assets."""
    if os.getenv("METAGIT_DEBUG"):
        logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")

    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        try:
            ctx.obj = create_context()
        except ValueError as e:
            user_output(click.style("Error: ", fg="red") + str(e))
            raise SystemExit(1) from e


cli.add_command(config_group)
cli.add_command(status_cmd)
cli.add_command(tree_cmd)


def main() -> None:
    """CLI entry point used by the `metagit` console script."""
    cli()
