"""User configuration for sgit.

Settings come from built-in defaults, then an optional TOML file
(`$SGIT_CONFIG`, else `~/.config/sgit/config.toml`), then environment
variables. Example file:

    default_remote = "upstream"
    color = false
    log_level = "INFO"

    [log]
    short_count = 10
    full_count = 25
"""

import logging
import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

DEFAULT_CONFIG_PATH = Path("~/.config/sgit/config.toml")

_LOG_LEVELS = frozenset(logging.getLevelNamesMapping())


def _positive_int(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{name} must be a positive integer, got {value!r}")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be a positive integer, got {value!r}") from None
    if number < 1:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")
    return number


def _flag(value: Any, name: str) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("1", "true", "yes", "on"):
        return True
    if text in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"{name} must be 0 or 1, got {value!r}")


def _log_level(value: Any) -> str:
    level = str(value).upper()
    if level not in _LOG_LEVELS:
        raise ValueError(f"unknown log level {value!r}")
    return level


@dataclass(frozen=True)
class SgitConfig:
    """Resolved settings for one sgit invocation."""

    default_remote: str = "origin"
    log_short_count: int = 20
    log_full_count: int = 40
    color: bool = True
    log_level: str = "WARNING"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SgitConfig":
        """Parse and validate a config mapping into SgitConfig."""
        defaults = cls()
        log_section = data.get("log", {})
        if not isinstance(log_section, Mapping):
            raise TypeError("[log] must be a table")

        remote = data.get("default_remote", defaults.default_remote)
        if not isinstance(remote, str) or not remote.strip():
            raise ValueError(f"default_remote must be a non-empty string, got {remote!r}")

        return cls(
            default_remote=remote.strip(),
            log_short_count=_positive_int(
                log_section.get("short_count", defaults.log_short_count), "log.short_count"
            ),
            log_full_count=_positive_int(
                log_section.get("full_count", defaults.log_full_count), "log.full_count"
            ),
            color=_flag(data.get("color", defaults.color), "color"),
            log_level=_log_level(data.get("log_level", defaults.log_level)),
        )


def config_path(environ: Mapping[str, str] | None = None) -> Path:
    env = os.environ if environ is None else environ
    override = env.get("SGIT_CONFIG")
    if override:
        return Path(override).expanduser()
    return DEFAULT_CONFIG_PATH.expanduser()


def _apply_env(config: SgitConfig, env: Mapping[str, str]) -> SgitConfig:
    try:
        if env.get("SGIT_DEFAULT_REMOTE"):
            config = replace(config, default_remote=env["SGIT_DEFAULT_REMOTE"].strip())
        if env.get("SGIT_LOG_SHORT"):
            config = replace(config, log_short_count=_positive_int(env["SGIT_LOG_SHORT"], "SGIT_LOG_SHORT"))
        if env.get("SGIT_LOG_FULL"):
            config = replace(config, log_full_count=_positive_int(env["SGIT_LOG_FULL"], "SGIT_LOG_FULL"))
        if env.get("SGIT_COLOR"):
            config = replace(config, color=_flag(env["SGIT_COLOR"], "SGIT_COLOR"))
        if env.get("SGIT_LOG_LEVEL"):
            config = replace(config, log_level=_log_level(env["SGIT_LOG_LEVEL"]))
    except ValueError as e:
        raise RuntimeError(f"Invalid sgit environment setting: {e}") from e
    return config


def load_config(
    path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> SgitConfig:
    """Load settings from the config file (if present) and the environment.

    Args:
        path: Explicit config file; defaults to `config_path()`
        environ: Environment mapping; defaults to `os.environ`

    Returns:
        SgitConfig with defaults for anything not set

    Raises:
        RuntimeError: If the config file or an environment value is invalid
    """
    env = os.environ if environ is None else environ
    toml_path = path or config_path(env)

    config = SgitConfig()
    if toml_path.exists():
        try:
            with open(toml_path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise RuntimeError(f"Malformed TOML config at {toml_path}: {e}") from e
        try:
            config = SgitConfig.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise RuntimeError(f"Invalid config structure in {toml_path}: {e}") from e

    return _apply_env(config, env)
