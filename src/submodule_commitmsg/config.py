"""Configuration resolution.

Uses environment variables when available, falls back to a YAML file at
the superproject root, then to built-in defaults.

Environment variables:
    SUBMODULE_COMMITMSG_CONFIG — YAML config file (default: <superproject>/.submodule-commitmsg.yaml)
    SUBMODULE_COMMITMSG_GIT — git executable (default: git)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import yaml

CONFIG_FILENAME = ".submodule-commitmsg.yaml"
DEFAULT_TITLE_PREFIX = "Update"
DEFAULT_PLACEHOLDER = "???????"


class ConfigError(ValueError):
    """The configuration file is unreadable or malformed."""


@dataclass(frozen=True)
class Config:
    title_prefix: str = DEFAULT_TITLE_PREFIX
    placeholder: str = DEFAULT_PLACEHOLDER
    exclude: tuple[str, ...] = ()


def git_executable() -> str:
    """Return the git executable to run."""
    return os.environ.get("SUBMODULE_COMMITMSG_GIT") or "git"


def config_path(root: Path | str | None = None) -> Path | None:
    """Return the config file to read, or None if there is none.

    An explicit SUBMODULE_COMMITMSG_CONFIG is returned even when the file
    is missing, so that a typo is reported rather than ignored.
    """
    env = os.environ.get("SUBMODULE_COMMITMSG_CONFIG")
    if env:
        return Path(env).expanduser()
    if root is not None:
        candidate = Path(root) / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def _string(data: dict, key: str, default: str, path: Path) -> str:
    value = data.get(key, default)
    if not isinstance(value, str):
        raise ConfigError(f"{path}: '{key}' must be a string")
    return value


def read_config(path: Path | str) -> Config:
    """Read and validate a YAML config file.

    Args:
        path: Path to the config file.

    Returns:
        Parsed Config. Keys missing from the file keep their defaults.

    Raises:
        ConfigError: If the file is missing, is not valid YAML, is not a
            mapping, or holds values of the wrong type.
    """
    cfg_path = Path(path)
    try:
        with open(cfg_path) as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"cannot read {cfg_path}: {e.strerror or e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"{cfg_path} is not valid YAML: {e}") from e

    if data is None:
        return Config()
    if not isinstance(data, dict):
        raise ConfigError(f"{cfg_path} is not a YAML mapping")

    exclude = data.get("exclude", []) or []
    if isinstance(exclude, str):
        exclude = [exclude]
    if not isinstance(exclude, list) or not all(isinstance(e, str) for e in exclude):
        raise ConfigError(f"{cfg_path}: 'exclude' must be a list of strings")

    return Config(
        title_prefix=_string(data, "title_prefix", DEFAULT_TITLE_PREFIX, cfg_path),
        placeholder=_string(data, "placeholder", DEFAULT_PLACEHOLDER, cfg_path),
        exclude=tuple(exclude),
    )


def load_config(root: Path | str | None = None) -> Config:
    """Resolve and read the configuration for a superproject at ``root``."""
    path = config_path(root)
    if path is None:
        return Config()
    return read_config(path)
