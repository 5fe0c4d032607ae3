"""Output utilities for CLI commands with clear intent.

user_output() is for humans and goes to stderr; machine_output() is for
structured data (JSON) and goes to stdout so it can be piped.
"""

import click


def user_output(message: str = "", nl: bool = True) -> None:
    click.echo(message, err=True, nl=nl)


def machine_output(message: str, nl: bool = True) -> None:
    click.echo(message, nl=nl)
