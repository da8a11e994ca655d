"""
Data models for the Bookmark Manager.

This module defines the bookmark record kept in the backing store and the
helpers that order and de-duplicate a collection of them.
"""

import functools
import json
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List


@dataclass
class Bookmark:
    """
    A named offset.

    Two bookmarks are equal when their names match; the offset takes no
    part in equality.
    """

    name: str
    offset: float = field(compare=False)

    def __repr__(self) -> str:
        return (
            f"Bookmark {{ name: {json.dumps(self.name, ensure_ascii=False)}, "
            f"offset: {format_offset(self.offset)} }}"
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert bookmark to dictionary for serialization.

        Returns:
            Mapping with ``name`` and ``offset`` keys, in that order
        """
        return {"name": self.name, "offset": float(self.offset)}

    @classmethod
    def from_dict(cls, data: Any) -> "Bookmark":
        """
        Create bookmark from a deserialized store record.

        Args:
            data: Mapping read from the store file

        Returns:
            Bookmark object

        Raises:
            ValueError: If the record is not a valid bookmark mapping
        """
        if not isinstance(data, dict):
            raise ValueError(f"expected a mapping, got {type(data).__name__}")

        if "name" not in data:
            raise ValueError("missing field `name`")
        if "offset" not in data:
            raise ValueError("missing field `offset`")

        name = data["name"]
        if not isinstance(name, str):
            raise ValueError(f"invalid name: {name!r}")

        offset = data["offset"]
        # bool is an int subclass
        if isinstance(offset, bool) or not isinstance(offset, (int, float)):
            raise ValueError(f"invalid offset for {name!r}: {offset!r}")

        return cls(name=name, offset=float(offset))


def format_offset(offset: float) -> str:
    """Render an offset the way the debug form prints it (``1.0``, ``1e20``, ``NaN``)."""
    if math.isnan(offset):
        return "NaN"
    if math.isinf(offset):
        return "inf" if offset > 0 else "-inf"
    text = repr(float(offset))
    mantissa, sep, exponent = text.partition("e")
    if not sep:
        return text
    sign = "-" if exponent.startswith("-") else ""
    digits = exponent.lstrip("+-").lstrip("0") or "0"
    return f"{mantissa}e{sign}{digits}"


def compare_offsets(a: Bookmark, b: Bookmark) -> int:
    """Three-way offset comparison; incomparable offsets (NaN) rank equal."""
    if a.offset < b.offset:
        return -1
    if a.offset > b.offset:
        return 1
    return 0


def sort_by_offset(bookmarks: Iterable[Bookmark]) -> List[Bookmark]:
    """Stable ascending sort by offset."""
    return sorted(bookmarks, key=functools.cmp_to_key(compare_offsets))


def dedup_by_name(bookmarks: Iterable[Bookmark]) -> List[Bookmark]:
    """Drop every record whose name was already seen, keeping the first."""
    seen = set()
    unique = []
    for bookmark in bookmarks:
        if bookmark.name in seen:
            continue
        seen.add(bookmark.name)
        unique.append(bookmark)
    return unique
