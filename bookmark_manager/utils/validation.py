"""
Input validation utilities for the Bookmark Manager.

This module provides validation functions for command-line arguments.
Every failure is reported as a UsageError.
"""

from pathlib import Path
from typing import Optional, Union

from bookmark_manager.utils.error_handler import UsageError


def validate_name(name: Optional[str]) -> str:
    """
    Validate a bookmark name.

    The name is returned exactly as given; only the emptiness check
    ignores surrounding whitespace.

    Raises:
        UsageError: If the name is missing or blank
    """
    if name is None or not name.strip():
        raise UsageError("Bookmark name must not be empty")
    return name


def validate_offset(offset: Union[str, float, None]) -> float:
    """
    Parse an offset as a float.

    Raises:
        UsageError: If the value is missing or not a number
    """
    if offset is None:
        raise UsageError("Offset is required")
    if isinstance(offset, bool):
        raise UsageError(f"Invalid offset: {offset!r}")
    try:
        return float(offset)
    except (TypeError, ValueError):
        raise UsageError(f"Invalid offset, expected a number: {offset!r}")


def validate_output_target(target: Union[str, Path]) -> str:
    """
    Validate the output sink.

    Args:
        target: ``-`` for standard output, or a file path

    Raises:
        UsageError: If the path is a directory or its parent is missing
    """
    target = str(target)
    if target == "-":
        return target
    if not target.strip():
        raise UsageError("Output file path must not be empty")

    path = Path(target)
    if path.is_dir():
        raise UsageError(f"Output path is a directory: {target}")

    parent = path.parent
    if not parent.exists():
        raise UsageError(f"Output directory does not exist: {parent}")
    return target


def validate_config_file(file_path: Union[str, Path, None]) -> Optional[Path]:
    """
    Validate an explicitly requested configuration file.

    Raises:
        UsageError: If the file is missing or has an unsupported extension
    """
    if file_path is None:
        return None

    path = Path(file_path)
    if not path.is_file():
        raise UsageError(f"Configuration file does not exist: {file_path}")

    if path.suffix.lower() not in (".toml", ".json"):
        raise UsageError(
            f"Configuration file must be TOML or JSON, got: {path.suffix or 'no extension'}"
        )
    return path
