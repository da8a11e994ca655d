"""
Utility modules for the bookmark manager.

This package contains the error hierarchy, logging setup and argument
validation helpers.
"""

from .error_handler import (
    BookmarkManagerError,
    ConfigurationError,
    StoreError,
    StoreIOError,
    StoreParseError,
    StoreSerializationError,
    UsageError,
)

__all__ = [
    "BookmarkManagerError",
    "ConfigurationError",
    "StoreError",
    "StoreIOError",
    "StoreParseError",
    "StoreSerializationError",
    "UsageError",
]
