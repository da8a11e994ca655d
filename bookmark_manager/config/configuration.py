"""
Configuration management for the Bookmark Manager.

Thin wrapper over the Pydantic-based system that exposes the handful of
settings the CLI needs and turns loading failures into ConfigurationError.
"""

from pathlib import Path
from typing import Any, Dict, Optional

from bookmark_manager.utils.error_handler import ConfigurationError

from .pydantic_config import ConfigurationManager, ManagerConfig


class Configuration:
    """Resolved configuration for one invocation."""

    def __init__(self, config_path: Optional[Path] = None, search_dir: Optional[Path] = None):
        """
        Initialize configuration manager.

        Args:
            config_path: Optional path to user configuration file (TOML/JSON)
            search_dir: Directory searched for default configuration files
        """
        try:
            self._manager = ConfigurationManager(config_path, search_dir)
        except (FileNotFoundError, ValueError) as e:
            raise ConfigurationError(str(e)) from e
        self._config = self._manager.config

    @property
    def config(self) -> ManagerConfig:
        """Get the underlying Pydantic configuration."""
        return self._config

    @property
    def source(self) -> Optional[Path]:
        """Configuration file that was loaded, if any."""
        return self._manager.source

    def update_from_args(self, args: Dict[str, Any]) -> None:
        """
        Update configuration from command-line arguments.

        Args:
            args: Dictionary of validated arguments
        """
        try:
            self._manager.update_from_cli_args(args)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e
        self._config = self._manager.config

    @property
    def store_file(self) -> Path:
        return self._config.store.file

    @property
    def output_file(self) -> str:
        return self._config.output.file

    @property
    def log_level(self) -> str:
        return self._config.logging.level

    @property
    def log_file(self) -> Optional[Path]:
        return self._config.logging.log_file
