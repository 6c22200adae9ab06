"""Launcher configuration.

Values are layered: built-in defaults, then an optional YAML file, then
``RELAUNCH_<FIELD>`` environment variables.
"""

import logging
import os
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

import yaml
from pydantic import BaseModel, Field, PrivateAttr, ValidationError

logger = logging.getLogger(__name__)

ENV_PREFIX: Final = "RELAUNCH_"
CONFIG_FILE_NAME: Final = "relaunch.yaml"


class ConfigError(Exception):
    """Raised when the configuration file or environment is invalid."""

    pass


def default_launcher_dir() -> Path:
    """Directory holding the launcher executable (or script when not frozen)."""
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    return Path(sys.argv[0]).resolve().parent


class LauncherConfig(BaseModel):
    """Everything the launcher needs to know about the world around it."""

    app_name: str = "UltimateStreamManager"

    # Local package cache: {cache_root}/{package}/{version}/
    cache_root: Path = Field(default_factory=lambda: Path.home() / ".nuget" / "packages")
    release_package: str = "UltimateStreamManager"
    beta_package: str = "UltimateStreamManager-Beta"
    launcher_package: str = "UltimateStreamManager.Launcher"
    app_binary: str = "UltimateStreamMgr.exe"
    launcher_binary: str = "UltimateStreamMgr.Launcher.exe"

    launcher_dir: Path = Field(default_factory=default_launcher_dir)
    preference_file: str = "version.txt"

    # Remote registry (GitHub Packages via GraphQL)
    registry_url: str = "https://api.github.com/graphql"
    registry_owner: str = "Tibec"
    app_repository: str = "UltimateStreamManager"
    launcher_repository: str = "UltimateStreamManager.Launcher"
    registry_token: str | None = None
    registry_timeout: float = 10.0

    # Package installer (nuget CLI)
    nuget_executable: str = "nuget"
    nuget_source_name: str = "GPR_USM"
    nuget_source_url: str = "https://nuget.pkg.github.com/Tibec/index.json"
    nuget_username: str | None = None
    install_timeout: float = 600.0

    _source: Path | None = PrivateAttr(default=None)

    @property
    def source(self) -> Path | None:
        """YAML file the configuration was read from, if any."""
        return self._source

    @property
    def preference_path(self) -> Path:
        path = Path(self.preference_file)
        if path.is_absolute():
            return path
        return self.launcher_dir / path


def _read_config_file(path: Path) -> dict[str, Any]:
    """Load a YAML mapping from ``path``."""
    try:
        data = yaml.safe_load(path.read_text())
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping, got {type(data).__name__}")
    return data


def _read_environment(environ: Mapping[str, str]) -> dict[str, Any]:
    """Collect ``RELAUNCH_<FIELD>`` overrides for known fields."""
    overrides: dict[str, Any] = {}
    for name in LauncherConfig.model_fields:
        value = environ.get(f"{ENV_PREFIX}{name.upper()}")
        if value is not None:
            overrides[name] = value
    return overrides


def load_config(
    path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> LauncherConfig:
    """Build the launcher configuration.

    Args:
        path: Explicit YAML config file. If None, ``relaunch.yaml`` next to
            the launcher is used when it exists.
        environ: Environment mapping. If None, ``os.environ`` is used.

    Raises:
        ConfigError: If the file is unreadable or a value fails validation.
    """
    values: dict[str, Any] = {}

    if path is None:
        candidate = default_launcher_dir() / CONFIG_FILE_NAME
        if candidate.is_file():
            path = candidate
    elif not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    if path is not None:
        logger.debug("Loading config from %s", path)
        values.update(_read_config_file(path))

    values.update(_read_environment(os.environ if environ is None else environ))

    try:
        config = LauncherConfig.model_validate(values)
    except ValidationError as e:
        raise ConfigError(f"Invalid launcher configuration: {e}") from e

    if path is not None:
        config._source = path.resolve()
    return config
