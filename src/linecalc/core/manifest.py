import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from linecalc.core.errors import ConfigError

MANIFEST_NAME = "linecalc.toml"
CONFIG_ENV_VAR = "LINECALC_CONFIG"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class InterpreterConfig:
    """Evaluation behaviour."""

    legacy_zero_lookup: bool = False  # treat variables holding 0 as unassigned


@dataclass
class LoggingConfig:
    """Logging configuration for the CLI."""

    level: str = "WARNING"
    format: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    @property
    def level_number(self) -> int:
        return int(logging.getLevelName(self.level))


@dataclass
class ReplConfig:
    """Interactive prompt configuration."""

    prompt: str = "> "


@dataclass
class LinecalcManifest:
    """
    Configuration loaded from linecalc.toml.

    Every section is optional; a missing file yields the defaults.
    """

    interpreter: InterpreterConfig = field(default_factory=InterpreterConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    repl: ReplConfig = field(default_factory=ReplConfig)
    path: Path | None = None


def _expect(section: str, key: str, value: object, kind: type) -> None:
    if not isinstance(value, kind):
        raise ConfigError(
            f"[{section}] {key} must be {kind.__name__}, got {type(value).__name__}"
        )


def _section(data: dict, name: str) -> dict:
    value = data.get(name, {})
    if not isinstance(value, dict):
        raise ConfigError(f"[{name}] must be a table, got {type(value).__name__}")
    return value


def load_manifest(path: Path) -> LinecalcManifest:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    interpreter_data = _section(data, "interpreter")
    logging_data = _section(data, "logging")
    repl_data = _section(data, "repl")

    legacy_zero_lookup = interpreter_data.get("legacy_zero_lookup", False)
    _expect("interpreter", "legacy_zero_lookup", legacy_zero_lookup, bool)

    level = logging_data.get("level", "WARNING")
    _expect("logging", "level", level, str)
    level = level.upper()
    if level not in _LOG_LEVELS:
        raise ConfigError(f"[logging] level must be one of {', '.join(_LOG_LEVELS)}, got {level!r}")

    log_format = logging_data.get("format", LoggingConfig.format)
    _expect("logging", "format", log_format, str)

    prompt = repl_data.get("prompt", "> ")
    _expect("repl", "prompt", prompt, str)

    return LinecalcManifest(
        interpreter=InterpreterConfig(legacy_zero_lookup=legacy_zero_lookup),
        logging=LoggingConfig(level=level, format=log_format),
        repl=ReplConfig(prompt=prompt),
        path=path,
    )


def find_manifest(start: Path | None = None) -> Path | None:
    """Locate linecalc.toml: $LINECALC_CONFIG first, then walk up from ``start``."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        path = Path(env_path)
        if not path.is_file():
            raise ConfigError(f"{CONFIG_ENV_VAR} points to a missing file: {path}")
        return path

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / MANIFEST_NAME
        if candidate.is_file():
            return candidate
    return None


def resolve_manifest(path: Path | None = None, start: Path | None = None) -> LinecalcManifest:
    """Load an explicit manifest, or the discovered one, or the defaults."""
    if path is None:
        path = find_manifest(start)
    if path is None:
        return LinecalcManifest()
    return load_manifest(path)
