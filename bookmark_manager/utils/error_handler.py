"""
Error hierarchy for the Bookmark Manager.

All custom exceptions for the project are defined here. Store and CLI code
raises them; only the command-line entry point turns them into exit codes.
"""

from pathlib import Path
from typing import Optional, Union


# ============================================================================
# Unified Exception Hierarchy for Bookmark Manager
# ============================================================================
# Import these exceptions from bookmark_manager.utils.error_handler
# ============================================================================


class BookmarkManagerError(Exception):
    """Base exception for all bookmark manager errors."""

    exit_code = 1


# ============================================================================
# Usage Errors
# ============================================================================


class UsageError(BookmarkManagerError):
    """Bad or missing command-line arguments, or an unknown subcommand."""

    exit_code = 2


# ============================================================================
# Configuration Errors
# ============================================================================


class ConfigurationError(BookmarkManagerError):
    """Configuration-related errors."""

    pass


# ============================================================================
# Store Errors
# ============================================================================


class StoreError(BookmarkManagerError):
    """Base class for errors raised against the backing store file."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class StoreIOError(StoreError):
    """Open, read, seek, truncate or write failure on the store file."""

    pass


class StoreParseError(StoreError):
    """Store contents are not a valid list of bookmark records."""

    pass


class StoreSerializationError(StoreError):
    """The bookmark collection could not be encoded for writing."""

    pass
