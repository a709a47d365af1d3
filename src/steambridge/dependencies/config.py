"""Configuration dependency."""

from __future__ import annotations

import os
from pathlib import Path

from ..config import Config
from ..constants import CONFIG_PATH

__all__ = ["ConfigDependency", "config_dependency"]


class ConfigDependency:
    """Load and cache the steambridge configuration.

    The file is read the first time the configuration is needed, from
    ``STEAMBRIDGE_CONFIG_PATH`` if set and otherwise from the default path.
    Pointing the dependency at another file reloads immediately, which is how
    the test suite and the command-line interface switch configurations.
    """

    def __init__(self) -> None:
        self._path = Path(os.getenv("STEAMBRIDGE_CONFIG_PATH", CONFIG_PATH))
        self._config: Config | None = None

    async def __call__(self) -> Config:
        return self.config()

    def config(self) -> Config:
        """Return the configuration, loading it on first use.

        Usable outside of FastAPI, including from synchronous code.
        """
        if self._config is None:
            self._config = self._load()
        return self._config

    def set_config_path(self, path: Path) -> None:
        """Switch to a different configuration file.

        Parameters
        ----------
        path
            Path to the YAML configuration file.
        """
        self._path = path
        self._config = self._load()

    def _load(self) -> Config:
        config = Config.from_file(self._path)
        config.configure_logging()
        return config


config_dependency = ConfigDependency()
"""Shared configuration dependency."""
