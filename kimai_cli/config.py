import logging
import os
import tomllib
from dataclasses import dataclass
from datetime import time
from pathlib import Path
from typing import Any, Mapping, Optional

from kimai_cli.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "kimai.toml"
ENV_PREFIX = "KIMAI_"
DEFAULT_START_TIME = time(9, 0)


@dataclass(frozen=True)
class Config:
    endpoint: str
    token: str
    default_start_time: time = DEFAULT_START_TIME


def load_config(path: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> Config:
    """
    Build the Config from a TOML file overlaid with KIMAI_* environment variables.

    The file defaults to kimai.toml in the working directory (or KIMAI_CONFIG)
    and may be absent when the environment supplies everything.
    """
    environ = os.environ if environ is None else environ
    path = path or environ.get(f"{ENV_PREFIX}CONFIG") or DEFAULT_CONFIG_FILE

    values = _read_file(Path(path))
    for key in ("endpoint", "token", "default_start_time"):
        env_value = environ.get(f"{ENV_PREFIX}{key.upper()}")
        if env_value is not None:
            values[key] = env_value

    return Config(
        endpoint=_required(values, "endpoint"),
        token=_required(values, "token"),
        default_start_time=_start_time(values.get("default_start_time")),
    )


def _read_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        logger.debug(f"No config file at {path}, using environment only")
        return {}
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Failed to load configuration from {path}: {e}") from e


def _required(values: dict[str, Any], key: str) -> str:
    value = values.get(key)
    if value is None or value == "":
        raise ConfigError(
            f"Failed to load configuration: '{key}' is missing "
            f"(set it in {DEFAULT_CONFIG_FILE} or {ENV_PREFIX}{key.upper()})"
        )
    if not isinstance(value, str):
        raise ConfigError(f"Failed to load configuration: '{key}' must be a string, got {type(value).__name__}")
    return value


def _start_time(value: Any) -> time:
    if value is None:
        return DEFAULT_START_TIME
    if isinstance(value, str):
        try:
            value = time.fromisoformat(value)
        except ValueError:
            pass
    if isinstance(value, time):
        if value.tzinfo is not None:
            raise ConfigError(
                f"Failed to load configuration: default_start_time {value} must be a local time without offset"
            )
        return value
    raise ConfigError(f"Failed to load configuration: invalid default_start_time {value!r}, expected HH:MM")
