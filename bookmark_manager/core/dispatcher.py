"""
Command dispatch for the Bookmark Manager.

Maps one requested operation onto one store call and routes any returned
bookmark to the output sink.
"""

import logging
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Iterator, Optional, TextIO, Union

from bookmark_manager.core.bookmark_store import BookmarkStore
from bookmark_manager.core.data_models import Bookmark
from bookmark_manager.utils.error_handler import StoreIOError, UsageError

logger = logging.getLogger(__name__)

STDOUT_TARGET = "-"


@dataclass
class Command:
    """A parsed operation and its parameters."""

    operation: Optional[str]
    name: Optional[str] = None
    offset: Optional[float] = None


def _run_add(store: BookmarkStore, command: Command) -> Optional[Bookmark]:
    if command.offset is None:
        raise UsageError("add requires --offset")
    store.add(command.name, command.offset)
    return None


def _run_remove(store: BookmarkStore, command: Command) -> Optional[Bookmark]:
    return store.remove(command.name)


def _run_query(store: BookmarkStore, command: Command) -> Optional[Bookmark]:
    return store.query(command.name)


OPERATIONS: Dict[str, Callable[[BookmarkStore, Command], Optional[Bookmark]]] = {
    "add": _run_add,
    "remove": _run_remove,
    "query": _run_query,
}


@contextmanager
def open_output(target: Union[str, Path], stdout: Optional[TextIO] = None) -> Iterator[TextIO]:
    """
    Yield a writable stream for ``target``.

    ``-`` selects standard output, which is left open; anything else is a
    file path that is created or truncated.
    """
    if str(target) == STDOUT_TARGET:
        yield stdout if stdout is not None else sys.stdout
        return

    try:
        stream = open(target, "w", encoding="utf-8")
    except OSError as e:
        raise StoreIOError(f"Failed to open output file {target}: {e}", target) from e
    with stream:
        yield stream


class CommandDispatcher:
    """Runs a :class:`Command` against a store file and writes the result."""

    def __init__(
        self,
        store_path: Union[str, Path],
        output_target: Union[str, Path] = STDOUT_TARGET,
        stdout: Optional[TextIO] = None,
    ):
        self.store = BookmarkStore(store_path)
        self.output_target = output_target
        self._stdout = stdout

    def dispatch(self, command: Command) -> Optional[Bookmark]:
        """
        Execute ``command`` and emit any returned bookmark.

        Args:
            command: Operation to run

        Returns:
            The bookmark written to the output sink, if any

        Raises:
            UsageError: If the operation is unknown or a parameter is missing
            StoreError: If the store call fails
        """
        handler = OPERATIONS.get(command.operation or "")
        if handler is None:
            raise UsageError(
                f"Unknown operation: {command.operation!r} "
                f"(expected one of: {', '.join(OPERATIONS)})"
            )
        if not command.name:
            raise UsageError(f"{command.operation} requires --name")

        logger.info(f"Running {command.operation} on {self.store.path}")
        result = handler(self.store, command)

        if result is not None:
            self.emit(result)
        return result

    def emit(self, bookmark: Bookmark) -> None:
        """Write one bookmark line to the output sink."""
        with open_output(self.output_target, self._stdout) as stream:
            try:
                stream.write(f"{bookmark!r}\n")
                stream.flush()
            except OSError as e:
                raise StoreIOError(
                    f"Failed to write output to {self.output_target}: {e}"
                ) from e
