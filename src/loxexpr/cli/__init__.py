"""
loxexpr CLI package.

- run.py: file mode and interactive prompt
- utils.py: version helpers
"""

import typer

from loxexpr.cli.run import run_command
from loxexpr.cli.utils import version_callback

app = typer.Typer(
    help="loxexpr - scan, parse and evaluate Lox expressions",
    add_completion=False,
)
app.command()(run_command)


def main() -> None:
    app()


__all__ = ["app", "main", "run_command", "version_callback"]
