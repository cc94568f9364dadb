"""XDG config loading."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Literal, cast

from pydantic import BaseModel, ConfigDict, Field, field_validator

if sys.version_info >= (3, 11):
    import tomllib
else:  # pragma: no cover
    import tomli as tomllib

from tabsets.errors import ConfigError
from tabsets.logging import LOG_LEVELS
from tabsets.paths import PathStyle

DEFAULT_CONFIG_PATH = Path("~/.config/tabsets/config.toml").expanduser()
TABSETS_DIR_ENV = "TABSETS_DIR"

_VALID_PATH_STYLES = {style.value for style in PathStyle}


def host_config_dir() -> Path:
    base = os.getenv("XDG_CONFIG_HOME", "").strip()
    root = Path(base).expanduser() if base else Path("~/.config").expanduser()
    return root / "tmux"


def default_tabsets_dir() -> str:
    return str(host_config_dir() / "tabsets")


class AppConfig(BaseModel):
    """Read-only settings, built once at start-up and handed to each component."""

    model_config = ConfigDict(frozen=True)

    tabsets_dir: str = Field(default_factory=default_tabsets_dir)
    restore_colors: bool = False
    restore_dimensions: bool = False
    fuzzy_selector: bool = False
    path_style: Literal["posix", "windows"] = "posix"
    log_level: str = "INFO"

    @field_validator("tabsets_dir")
    @classmethod
    def _validate_tabsets_dir(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("tabsets_dir must not be empty")
        return str(Path(value.strip()).expanduser())

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized = value.upper()
        if normalized not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {value}")
        return normalized

    @property
    def path_style_enum(self) -> PathStyle:
        return PathStyle(self.path_style)


def get_config_path(path: str | Path | None = None) -> Path:
    if path is None:
        return DEFAULT_CONFIG_PATH
    return Path(path).expanduser()


def _sanitize(raw: dict[str, object]) -> AppConfig:
    values: dict[str, object] = {}

    tabsets_dir = raw.get("tabsets_dir")
    if isinstance(tabsets_dir, str) and tabsets_dir.strip():
        values["tabsets_dir"] = tabsets_dir
    env_dir = os.getenv(TABSETS_DIR_ENV, "").strip()
    if env_dir:
        values["tabsets_dir"] = env_dir

    for flag in ("restore_colors", "restore_dimensions", "fuzzy_selector"):
        value = raw.get(flag)
        if isinstance(value, bool):
            values[flag] = value

    path_style = raw.get("path_style")
    if isinstance(path_style, str) and path_style.lower() in _VALID_PATH_STYLES:
        values["path_style"] = cast(Literal["posix", "windows"], path_style.lower())

    log_level = raw.get("log_level")
    if isinstance(log_level, str) and log_level.upper() in LOG_LEVELS:
        values["log_level"] = log_level

    return AppConfig(**values)


def load_config(path: str | Path | None = None, *, required: bool = False) -> AppConfig:
    """Load settings from ``path``, falling back to defaults for anything unusable.

    A missing file means defaults, unless ``required`` is set: a path the user
    named explicitly must exist.
    """
    resolved = get_config_path(path)
    if not resolved.exists():
        if required:
            raise ConfigError(
                f"Config file not found: {resolved}",
                hint="Create the file or drop --config to use the default location.",
            )
        return _sanitize({})
    try:
        with resolved.open("rb") as handle:
            raw = tomllib.load(handle)
    except (tomllib.TOMLDecodeError, OSError):
        return _sanitize({})
    if not isinstance(raw, dict):
        return _sanitize({})
    return _sanitize(raw)
