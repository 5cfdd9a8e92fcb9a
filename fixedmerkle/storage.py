"""Flat, fixed-size digest storage addressed by tree position."""

from __future__ import annotations

from typing import Iterator, List, Tuple

from .config import PLACEHOLDER_DIGEST
from .errors import InvalidCapacity
from .node_index import is_power_of_two


class DigestStorage:
    """Hold one digest slot per tree node.

    The list has ``2 * leaf_count`` entries.  Slot ``0`` is never used so that
    positions can be used as indexes directly.  Callers are expected to pass
    positions produced by :mod:`fixedmerkle.node_index`; no further bounds
    checking is performed here.
    """

    def __init__(self, leaf_count: int) -> None:
        if isinstance(leaf_count, bool) or not isinstance(leaf_count, int):
            raise InvalidCapacity(leaf_count)
        if not is_power_of_two(leaf_count):
            raise InvalidCapacity(leaf_count)
        self._slots: List[bytes] = [PLACEHOLDER_DIGEST] * (leaf_count * 2)

    @property
    def leaf_count(self) -> int:
        return len(self._slots) // 2

    def __len__(self) -> int:
        return len(self._slots)

    def __getitem__(self, position: int) -> bytes:
        return self._slots[position]

    def __setitem__(self, position: int, digest: bytes) -> None:
        self._slots[position] = bytes(digest)

    def __iter__(self) -> Iterator[bytes]:
        return iter(self._slots)

    def leaves(self) -> Tuple[bytes, ...]:
        """Return the leaf slots in item order."""
        return tuple(self._slots[self.leaf_count :])

    def __repr__(self) -> str:
        return f"DigestStorage(leaf_count={self.leaf_count})"


__all__ = ["DigestStorage"]
