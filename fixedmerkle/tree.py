"""Fixed capacity Merkle tree with incremental root maintenance."""

from __future__ import annotations

import logging
from typing import Iterable, List, Tuple

from . import node_index
from .errors import IndexOutOfRange
from .hashers import Hasher
from .proof import Proof, ProofStep, Side
from .storage import DigestStorage


class MerkleTree:
    """Merkle tree over exactly ``leaf_count`` items.

    Every assignment through :meth:`set_at` rehashes the path from the leaf to
    the root, so :meth:`root` is always up to date.  The root only commits to
    the whole collection once every leaf has been assigned at least once;
    before that it is built over placeholder slots.

    The tree does no locking.  Concurrent :meth:`set_at` calls must be
    serialised by the caller.
    """

    def __init__(self, leaf_count: int, hasher: Hasher) -> None:
        self._nodes = DigestStorage(leaf_count)
        self._hasher = hasher
        logging.debug("created merkle tree with %d leaves", leaf_count)

    @classmethod
    def from_items(cls, items: Iterable[bytes], hasher: Hasher) -> "MerkleTree":
        """Build a tree holding ``items`` in order."""
        all_items: List[bytes] = list(items)
        tree = cls(len(all_items), hasher)
        for index, item in enumerate(all_items):
            tree.set_at(index, item)
        return tree

    @property
    def hasher(self) -> Hasher:
        return self._hasher

    @property
    def leaf_count(self) -> int:
        return self._nodes.leaf_count

    def __len__(self) -> int:
        return self.leaf_count

    @property
    def height(self) -> int:
        return node_index.height(self.leaf_count)

    def root(self) -> bytes:
        return self._nodes[node_index.ROOT]

    def nodes(self) -> Tuple[bytes, ...]:
        """Return every slot, indexed by tree position (slot 0 is unused)."""
        return tuple(self._nodes)

    def leaves(self) -> Tuple[bytes, ...]:
        return self._nodes.leaves()

    def _leaf_position(self, item_index: int) -> int:
        if isinstance(item_index, bool) or not isinstance(item_index, int):
            raise IndexOutOfRange(item_index, self.leaf_count)
        if not 0 <= item_index < self.leaf_count:
            raise IndexOutOfRange(item_index, self.leaf_count)
        return node_index.leaf_position(item_index, self.leaf_count)

    def set_at(self, item_index: int, item: bytes) -> None:
        """Store the digest of ``item`` as leaf ``item_index`` and rehash its ancestors."""
        position = self._leaf_position(item_index)
        self._nodes[position] = self._hasher(item)

        while not node_index.is_root(position):
            other = node_index.sibling(position)
            if node_index.is_left_child(position):
                left, right = self._nodes[position], self._nodes[other]
            else:
                left, right = self._nodes[other], self._nodes[position]
            position = node_index.parent(position)
            self._nodes[position] = self._hasher(left + right)

        logging.debug("leaf %d assigned, root=%s", item_index, self.root().hex())

    def proof(self, item_index: int) -> Proof:
        """Return the membership proof for leaf ``item_index``.

        The proof is a snapshot of the current digests and does not follow
        later assignments.
        """
        position = self._leaf_position(item_index)
        steps: List[ProofStep] = []
        while not node_index.is_root(position):
            side = Side.RIGHT if node_index.is_left_child(position) else Side.LEFT
            steps.append(ProofStep(self._nodes[node_index.sibling(position)], side))
            position = node_index.parent(position)
        logging.debug("proof for leaf %d has %d steps", item_index, len(steps))
        return Proof(steps)

    def format_levels(self) -> str:
        """Render the tree one level per line, root first, digests in hex."""
        lines = [f"leaves = {self.leaf_count}, height = {self.height}"]
        start = node_index.ROOT
        while start < len(self._nodes):
            level = [
                self._nodes[pos].hex() or "-"
                for pos in range(start, start * 2)
            ]
            lines.append(f"{node_index.level_of(start, self.leaf_count)}: {' '.join(level)}")
            start *= 2
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"MerkleTree(leaf_count={self.leaf_count}, root={self.root().hex() or '-'})"


__all__ = ["MerkleTree"]
