"""Position arithmetic for a complete binary tree stored in a flat list.

Positions are 1-based: the root lives at ``1`` and the children of ``i`` at
``2*i`` and ``2*i + 1``.  With ``leaf_count`` leaves the list has
``2*leaf_count`` slots, slot ``0`` is unused and leaf ``k`` sits at
``k + leaf_count``.
"""

from __future__ import annotations

ROOT = 1


def is_power_of_two(n: int) -> bool:
    """Return ``True`` if ``n`` is a positive power of two."""
    return n > 0 and n & (n - 1) == 0


def is_root(position: int) -> bool:
    return position == ROOT


def parent(position: int) -> int:
    """Return the parent position of ``position`` (``position > 1``)."""
    return position // 2


def sibling(position: int) -> int:
    """Return the other child of ``parent(position)``."""
    return position ^ 1


def is_left_child(position: int) -> bool:
    return position % 2 == 0


def leaf_position(item_index: int, leaf_count: int) -> int:
    """Return the tree position holding leaf ``item_index``."""
    return item_index + leaf_count


def height(leaf_count: int) -> int:
    """Number of edges between a leaf and the root."""
    return leaf_count.bit_length() - 1


def level_of(position: int, leaf_count: int) -> int:
    """Return the level of ``position``: leaves are ``0``, the root is ``height``."""
    return height(leaf_count) - (position.bit_length() - 1)


__all__ = [
    "ROOT",
    "is_power_of_two",
    "is_root",
    "parent",
    "sibling",
    "is_left_child",
    "leaf_position",
    "height",
    "level_of",
]
