"""
loxexpr CLI utilities.
"""

import platform

import typer

from loxexpr._version import get_version


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"loxexpr version {get_version()}")
        typer.echo(f"  Python:        {platform.python_implementation()} {platform.python_version()}")
        raise typer.Exit()
