"""
Pydantic-based configuration system for Bookmark Manager.

Settings come from an optional TOML or JSON file, environment variables and
command-line overrides, and are validated by the models below.
"""

import json
import os
from pathlib import Path
from typing import Dict, Literal, Optional

import toml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

ENV_STORE_FILE = "BOOKMARK_MANAGER_FILE"
ENV_OUTPUT_FILE = "BOOKMARK_MANAGER_OUTPUT"
ENV_LOG_LEVEL = "BOOKMARK_MANAGER_LOG_LEVEL"

DEFAULT_CONFIG_NAMES = ("bookmark_manager.toml", "bookmark_manager.json")


class StoreConfig(BaseModel):
    """Backing store settings."""

    model_config = ConfigDict(extra="forbid")

    file: Path = Field(
        default=Path("bookmarks"),
        description="Path of the YAML file holding the bookmarks",
    )

    @field_validator("file", mode="before")
    @classmethod
    def validate_file(cls, v):
        """Reject empty store paths."""
        if v is None or str(v).strip() == "":
            raise ValueError("Store file path must not be empty")
        return Path(v)


class OutputConfig(BaseModel):
    """Where returned bookmarks are printed."""

    model_config = ConfigDict(extra="forbid")

    file: str = Field(
        default="-",
        min_length=1,
        description="Output file path, or '-' for standard output",
    )


class LoggingConfig(BaseModel):
    """Logging settings."""

    model_config = ConfigDict(extra="forbid")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Console log level",
    )
    log_file: Optional[Path] = Field(
        default=None,
        description="Optional log file; unset disables file logging",
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("log_file", mode="before")
    @classmethod
    def validate_log_file(cls, v):
        if v is None or str(v).strip() == "":
            return None
        return Path(v)


class ManagerConfig(BaseModel):
    """Main configuration model."""

    model_config = ConfigDict(extra="forbid")

    store: StoreConfig = Field(default_factory=StoreConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


class ConfigurationManager:
    """Manages loading and validation of configuration from multiple sources."""

    def __init__(self, config_path: Optional[Path] = None, search_dir: Optional[Path] = None):
        """
        Initialize configuration manager.

        Args:
            config_path: Optional explicit configuration file (TOML or JSON)
            search_dir: Directory searched for default configuration files
                (defaults to the current directory)
        """
        self._config: Optional[ManagerConfig] = None
        self._search_dir = Path(search_dir) if search_dir else Path.cwd()
        self.source: Optional[Path] = None
        self._load_configuration(config_path)

    def _get_default_config_paths(self) -> list[Path]:
        """Get list of default configuration file paths to try."""
        return [self._search_dir / name for name in DEFAULT_CONFIG_NAMES]

    def _load_configuration(self, config_path: Optional[Path] = None) -> None:
        """Load configuration from file or use defaults."""
        config_data: Dict = {}

        if config_path:
            config_data = self._load_config_file(Path(config_path))
            self.source = Path(config_path)
        else:
            for path in self._get_default_config_paths():
                if path.exists():
                    config_data = self._load_config_file(path)
                    self.source = path
                    break

        self._load_overrides_from_env(config_data)

        try:
            self._config = ManagerConfig(**config_data)
        except ValidationError as e:
            raise ValueError(format_config_error(e))
        except TypeError as e:
            raise ValueError(format_config_error(e))

    def _load_config_file(self, config_path: Path) -> Dict:
        """Load configuration from TOML or JSON file."""
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            if config_path.suffix.lower() == ".toml":
                data = toml.load(config_path)
            elif config_path.suffix.lower() == ".json":
                with open(config_path, "r", encoding="utf-8") as f:
                    data = json.load(f)
            else:
                raise ValueError(
                    f"Unsupported configuration file format: {config_path.suffix}"
                )
        except (OSError, ValueError) as e:
            raise ValueError(f"Failed to load configuration from {config_path}: {e}")

        if not isinstance(data, dict):
            raise ValueError(
                f"Failed to load configuration from {config_path}: "
                f"top level must be a table/object"
            )
        return data

    def _load_overrides_from_env(self, config_data: Dict) -> None:
        """Environment variables take precedence over the configuration file."""
        env_map = {
            ENV_STORE_FILE: ("store", "file"),
            ENV_OUTPUT_FILE: ("output", "file"),
            ENV_LOG_LEVEL: ("logging", "level"),
        }
        for var, (section, option) in env_map.items():
            value = os.getenv(var)
            if value:
                section_data = config_data.setdefault(section, {})
                if isinstance(section_data, dict):
                    section_data[option] = value

    def update_from_cli_args(self, args: Dict) -> None:
        """Update configuration from command-line arguments."""
        if not self._config:
            raise RuntimeError("Configuration not loaded")

        config_dict = self._config.model_dump()

        if args.get("store_file") is not None:
            config_dict["store"]["file"] = args["store_file"]

        if args.get("output_file") is not None:
            config_dict["output"]["file"] = args["output_file"]

        if args.get("log_level"):
            config_dict["logging"]["level"] = args["log_level"]

        try:
            self._config = ManagerConfig(**config_dict)
        except ValidationError as e:
            raise ValueError(format_config_error(e))

    @property
    def config(self) -> ManagerConfig:
        """Get the current configuration."""
        if not self._config:
            raise RuntimeError("Configuration not loaded")
        return self._config

    @staticmethod
    def create_sample_config(output_path: Path, format: str = "toml") -> None:
        """Write a configuration file holding the default settings."""
        sample_config = {
            "store": {"file": "bookmarks"},
            "output": {"file": "-"},
            "logging": {"level": "WARNING", "log_file": ""},
        }

        if format.lower() == "toml":
            with open(output_path, "w", encoding="utf-8") as f:
                toml.dump(sample_config, f)
        elif format.lower() == "json":
            with open(output_path, "w", encoding="utf-8") as f:
                json.dump(sample_config, f, indent=2)
        else:
            raise ValueError(f"Unsupported format: {format}")


class ConfigurationErrorFormatter:
    """Formats Pydantic validation errors into user-friendly messages."""

    @staticmethod
    def format_validation_error(error: ValidationError) -> str:
        """
        Convert Pydantic ValidationError into a user-friendly error message.

        Args:
            error: Pydantic ValidationError instance

        Returns:
            Formatted error message
        """
        lines = []
        for error_detail in error.errors():
            location = ConfigurationErrorFormatter._format_error_location(
                error_detail["loc"]
            )
            lines.append(
                ConfigurationErrorFormatter._format_by_error_type(
                    location,
                    error_detail["type"],
                    error_detail,
                    error_detail.get("input", "N/A"),
                )
            )

        return "Configuration validation failed:\n" + "\n".join(lines)

    @staticmethod
    def _format_error_location(location: tuple) -> str:
        """Format the error location path."""
        if not location:
            return "configuration"

        path_parts = []
        for part in location:
            if isinstance(part, str):
                path_parts.append(part)
            else:
                path_parts.append(f"[{part}]")
        return ".".join(path_parts)

    @staticmethod
    def _format_by_error_type(
        location: str, error_type: str, error_detail: dict, input_value
    ) -> str:
        """Format error message based on Pydantic error type."""
        if error_type == "missing":
            return f"  {location}: required field is missing"

        if error_type == "literal_error":
            expected = error_detail.get("ctx", {}).get("expected", "a valid option")
            return f"  {location}: must be one of {expected} (got: {input_value!r})"

        if error_type == "string_too_short":
            return f"  {location}: must not be empty"

        if error_type == "extra_forbidden":
            return f"  {location}: unknown option"

        msg = error_detail.get("msg", "invalid value")
        return f"  {location}: {msg} (got: {input_value!r})"


def format_config_error(error: Exception) -> str:
    """
    Format any configuration-related error into a user-friendly message.

    Args:
        error: Exception that occurred during configuration

    Returns:
        Formatted error message
    """
    if isinstance(error, ValidationError):
        return ConfigurationErrorFormatter.format_validation_error(error)
    return f"Configuration error: {error}"
