"""
Core bookmark modules.

This package contains the bookmark data model, the YAML-backed store and
the command dispatcher.
"""

from .bookmark_store import BookmarkStore
from .data_models import Bookmark
from .dispatcher import Command, CommandDispatcher

__all__ = [
    "Bookmark",
    "BookmarkStore",
    "Command",
    "CommandDispatcher",
]
