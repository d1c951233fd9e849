import tomllib
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Any

from loxexpr.core.errors import ConfigError

MANIFEST_NAME = "loxexpr.toml"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class RunMode(StrEnum):
    """What the pipeline does with a successfully parsed expression."""

    AST = "ast"  # print the parenthesized tree
    EVAL = "eval"  # evaluate and print the value


@dataclass
class ReplConfig:
    """Interactive loop configuration."""

    prompt: str = "> "


@dataclass
class RunConfig:
    mode: RunMode = RunMode.AST


@dataclass
class LoggingConfig:
    level: str = "WARNING"


@dataclass
class LoxConfig:
    """Configuration loaded from loxexpr.toml.

    Example:

        [repl]
        prompt = "lox> "

        [run]
        mode = "eval"

        [logging]
        level = "DEBUG"
    """

    repl: ReplConfig = field(default_factory=ReplConfig)
    run: RunConfig = field(default_factory=RunConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def parse_run_mode(value: str, path: Path | None = None) -> RunMode:
    try:
        return RunMode(value)
    except ValueError:
        choices = ", ".join(m.value for m in RunMode)
        raise ConfigError(f"Unknown run mode {value!r} (expected one of: {choices})", path) from None


def parse_log_level(value: str, path: Path | None = None) -> str:
    level = value.upper()
    if level not in _LOG_LEVELS:
        raise ConfigError(f"Unknown log level {value!r}", path)
    return level


def _table(data: dict[str, Any], name: str, path: Path) -> dict[str, Any]:
    value = data.get(name, {})
    if not isinstance(value, dict):
        raise ConfigError(f"[{name}] must be a table", path)
    return value


def load_config(path: Path) -> LoxConfig:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML: {e}", path) from e

    repl_data = _table(data, "repl", path)
    run_data = _table(data, "run", path)
    logging_data = _table(data, "logging", path)

    prompt = repl_data.get("prompt", "> ")
    if not isinstance(prompt, str):
        raise ConfigError("repl.prompt must be a string", path)

    return LoxConfig(
        repl=ReplConfig(prompt=prompt),
        run=RunConfig(mode=parse_run_mode(str(run_data.get("mode", "ast")), path)),
        logging=LoggingConfig(level=parse_log_level(str(logging_data.get("level", "WARNING")), path)),
    )


def find_config(directory: Path) -> Path | None:
    """Return the loxexpr.toml in ``directory`` if there is one."""
    candidate = directory / MANIFEST_NAME
    return candidate if candidate.is_file() else None
