"""
Chicken Invaders utils
"""

from __future__ import annotations

from typing import TypeVar

T = TypeVar("T")


def remove_at(items: list[T], index: int) -> T | None:
    """
    Remove and return ``items[index]``.

    Indices that are no longer present (negative or past the end) are ignored
    and ``None`` is returned.
    """
    if 0 <= index < len(items):
        return items.pop(index)
    return None
