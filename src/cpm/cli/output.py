"""Output helpers for CLI commands.

user_output is for messages aimed at a person (progress, confirmations,
warnings, errors) and goes to stderr. machine_output is for the data a
command produces (listings, settings) and goes to stdout so it can be piped.
"""

import click


def user_output(message: str = "", nl: bool = True) -> None:
    """Write a human-facing message to stderr."""
    click.echo(message, nl=nl, err=True)


def machine_output(message: str = "", nl: bool = True) -> None:
    """Write command data to stdout."""
    click.echo(message, nl=nl)
