"""
Run command: execute a script file or start the interactive prompt.
"""

import logging
import sys
from pathlib import Path

import typer

from loxexpr.cli.utils import version_callback
from loxexpr.core.diagnostics import Diagnostic, Diagnostics
from loxexpr.core.errors import ConfigError
from loxexpr.core.manifest import (
    LoxConfig,
    RunMode,
    find_config,
    load_config,
    parse_log_level,
)
from loxexpr.core.runner import run_source

logger = logging.getLogger(__name__)

# sysexits.h
EX_USAGE = 64
EX_DATAERR = 65
EX_NOINPUT = 66
EX_SOFTWARE = 70

USAGE = "Usage: loxexpr [script]"


def _report(diagnostic: Diagnostic) -> None:
    typer.echo(diagnostic.format(), err=True)


def run_file(path: Path, config: LoxConfig, diagnostics: Diagnostics) -> None:
    """Run a whole file once; exit non-zero if it raised a diagnostic."""
    try:
        source = path.read_text(encoding="utf-8")
    except OSError as e:
        typer.echo(f"Could not read {path}: {e.strerror}", err=True)
        raise typer.Exit(EX_NOINPUT) from e

    logger.debug("Running %s (%d chars)", path, len(source))
    output = run_source(source, diagnostics, config.run.mode)
    if output is not None:
        typer.echo(output)

    if diagnostics.had_error:
        raise typer.Exit(EX_DATAERR)
    if diagnostics.had_runtime_error:
        raise typer.Exit(EX_SOFTWARE)


def run_prompt(config: LoxConfig, diagnostics: Diagnostics) -> None:
    """Read-eval-print loop; errors on one line never end the session."""
    while True:
        typer.echo(config.repl.prompt, nl=False)
        line = sys.stdin.readline()
        if not line:
            # Ctrl-D
            typer.echo()
            break

        output = run_source(line.removesuffix("\n"), diagnostics, config.run.mode)
        if output is not None:
            typer.echo(output)
        diagnostics.reset()


def _resolve_config(config_path: Path | None) -> LoxConfig:
    if config_path is None:
        config_path = find_config(Path.cwd())
        if config_path is None:
            return LoxConfig()
    logger.debug("Loading config from %s", config_path)
    return load_config(config_path)


def run_command(
    scripts: list[Path] | None = typer.Argument(  # noqa: B008
        None,
        help="Script to run. Omit to start the interactive prompt.",
        show_default=False,
    ),
    evaluate: bool = typer.Option(
        False,
        "--eval",
        "-e",
        help="Evaluate expressions instead of printing their parsed tree.",
    ),
    config_path: Path | None = typer.Option(  # noqa: B008
        None,
        "--config",
        "-c",
        help="Path to loxexpr.toml (default: ./loxexpr.toml if present).",
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Logging level for diagnostics on stderr (DEBUG, INFO, WARNING, ...).",
    ),
    version: bool | None = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
) -> None:
    """Scan, parse and print (or evaluate) a Lox expression."""
    scripts = scripts or []
    if len(scripts) > 1:
        typer.echo(USAGE)
        raise typer.Exit(EX_USAGE)

    try:
        config = _resolve_config(config_path)
        if log_level is not None:
            config.logging.level = parse_log_level(log_level)
    except (ConfigError, OSError) as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(2) from e

    if evaluate:
        config.run.mode = RunMode.EVAL

    logging.basicConfig(
        level=config.logging.level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    diagnostics = Diagnostics(reporter=_report)
    if scripts:
        run_file(scripts[0], config, diagnostics)
    else:
        run_prompt(config, diagnostics)
