"""
YAML-backed bookmark store.

Every operation opens the backing file, reads the whole collection, applies
at most one change and, when something changed, rewrites the file in full.
Nothing is cached between calls; the file is the only source of truth.

The add path is deliberately lenient: an empty or unparseable file is
treated as an empty collection and overwritten. Remove and query are strict
and surface parse errors instead.
"""

import logging
import os
from pathlib import Path
from typing import List, Optional, Union

import yaml

from bookmark_manager.core.data_models import Bookmark, dedup_by_name, sort_by_offset
from bookmark_manager.utils.error_handler import (
    StoreIOError,
    StoreParseError,
    StoreSerializationError,
)

logger = logging.getLogger(__name__)


class StoreHandle:
    """
    Open read/write handle on a store file.

    Use as a context manager; the file is closed on exit whether or not the
    block raised.
    """

    def __init__(self, path: Path, stream):
        self.path = path
        self._stream = stream

    def __enter__(self) -> "StoreHandle":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._stream.closed

    def close(self) -> None:
        if not self._stream.closed:
            self._stream.close()
            logger.debug(f"Closed store file: {self.path}")

    def read_text(self) -> str:
        """Read the full contents from the start of the file."""
        try:
            self._stream.seek(0)
            return self._stream.read()
        except UnicodeDecodeError as e:
            raise StoreParseError(
                f"Store file is not valid UTF-8: {self.path}: {e}", self.path
            ) from e
        except OSError as e:
            raise StoreIOError(f"Failed to read store file {self.path}: {e}", self.path) from e

    def replace_text(self, text: str) -> None:
        """Truncate the file and write ``text`` in its place."""
        try:
            self._stream.seek(0)
            self._stream.truncate()
            self._stream.write(text)
            self._stream.flush()
            os.fsync(self._stream.fileno())
        except OSError as e:
            raise StoreIOError(
                f"Failed to rewrite store file {self.path}: {e}", self.path
            ) from e


def open_store(path: Union[str, Path], create: bool = False) -> StoreHandle:
    """
    Open a store file for reading and writing.

    Args:
        path: Location of the store file
        create: Create the file if it does not exist yet

    Returns:
        StoreHandle on the opened file

    Raises:
        StoreIOError: If the file cannot be opened (missing, permissions,
            path is a directory, ...)
    """
    path = Path(path)
    try:
        if create:
            fd = os.open(path, os.O_RDWR | os.O_CREAT, 0o666)
            try:
                stream = os.fdopen(fd, "r+", encoding="utf-8", newline="")
            except Exception:
                os.close(fd)
                raise
        else:
            stream = open(path, "r+", encoding="utf-8", newline="")
    except OSError as e:
        raise StoreIOError(f"Failed to open store file {path}: {e}", path) from e

    logger.debug(f"Opened store file: {path} (create={create})")
    return StoreHandle(path, stream)


def parse_bookmarks(text: str, path: Optional[Path] = None) -> List[Bookmark]:
    """
    Parse store file contents into bookmarks.

    Raises:
        StoreParseError: If the text is not a YAML sequence of bookmark records
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise StoreParseError(f"Malformed store file {path}: {e}", path) from e

    if data is None:
        raise StoreParseError(f"Store file is empty: {path}", path)
    if not isinstance(data, list):
        raise StoreParseError(
            f"Store file {path} must contain a list of bookmarks, "
            f"got {type(data).__name__}",
            path,
        )

    bookmarks = []
    for index, record in enumerate(data):
        try:
            bookmarks.append(Bookmark.from_dict(record))
        except ValueError as e:
            raise StoreParseError(
                f"Invalid bookmark at index {index} in {path}: {e}", path
            ) from e
    return bookmarks


def dump_bookmarks(bookmarks: List[Bookmark], path: Optional[Path] = None) -> str:
    """
    Encode bookmarks as the YAML text written to the store file.

    Raises:
        StoreSerializationError: If the collection cannot be encoded
    """
    try:
        return yaml.safe_dump(
            [bookmark.to_dict() for bookmark in bookmarks],
            explicit_start=True,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )
    except (yaml.YAMLError, TypeError, ValueError) as e:
        raise StoreSerializationError(
            f"Failed to encode bookmarks for {path}: {e}", path
        ) from e


def load(handle: StoreHandle) -> List[Bookmark]:
    """Read and parse the whole collection; strict."""
    bookmarks = parse_bookmarks(handle.read_text(), handle.path)
    logger.debug(f"Loaded {len(bookmarks)} bookmark(s) from {handle.path}")
    return bookmarks


def load_or_default(handle: StoreHandle) -> List[Bookmark]:
    """Like :func:`load`, but an empty or unparseable file yields ``[]``."""
    try:
        return load(handle)
    except StoreParseError as e:
        logger.warning(f"Treating store as empty: {e}")
        return []


def save(handle: StoreHandle, bookmarks: List[Bookmark]) -> None:
    """Encode the collection, then truncate and rewrite the file."""
    # Encode first so a failure never leaves the file truncated.
    text = dump_bookmarks(bookmarks, handle.path)
    handle.replace_text(text)
    logger.debug(f"Wrote {len(bookmarks)} bookmark(s) to {handle.path}")


def find_index(bookmarks: List[Bookmark], name: str) -> Optional[int]:
    """Index of the first bookmark called ``name``, or None."""
    for index, bookmark in enumerate(bookmarks):
        if bookmark.name == name:
            return index
    return None


class BookmarkStore:
    """Add, remove and query bookmarks in a single backing file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def add(self, name: str, offset: float) -> None:
        """
        Add a bookmark, or update the offset of an existing one.

        The collection is re-sorted by offset and de-duplicated by name
        (first in sorted order wins) before being written back.

        Args:
            name: Bookmark name
            offset: New offset
        """
        with open_store(self.path, create=True) as handle:
            bookmarks = load_or_default(handle)

            index = find_index(bookmarks, name)
            if index is None:
                bookmarks.append(Bookmark(name=name, offset=offset))
                logger.info(f"Adding bookmark {name!r} at {offset}")
            else:
                bookmarks[index].offset = offset
                logger.info(f"Updating bookmark {name!r} to {offset}")

            bookmarks = dedup_by_name(sort_by_offset(bookmarks))
            save(handle, bookmarks)

    def remove(self, name: str) -> Optional[Bookmark]:
        """
        Remove the first bookmark called ``name``.

        Returns:
            The removed bookmark, or None if there was no match (in which
            case the file is not touched)
        """
        with open_store(self.path) as handle:
            bookmarks = load(handle)

            index = find_index(bookmarks, name)
            if index is None:
                logger.info(f"No bookmark named {name!r} to remove")
                return None

            removed = bookmarks.pop(index)
            save(handle, bookmarks)
            logger.info(f"Removed bookmark {name!r}")
            return removed

    def query(self, name: str) -> Optional[Bookmark]:
        """Return the first bookmark called ``name``, or None."""
        with open_store(self.path) as handle:
            bookmarks = load(handle)

        index = find_index(bookmarks, name)
        if index is None:
            logger.info(f"No bookmark named {name!r}")
            return None
        return bookmarks[index]
