"""Exceptions raised by fixedmerkle."""

from __future__ import annotations


class MerkleTreeError(Exception):
    """Base class for all errors raised by this package."""


class InvalidCapacity(MerkleTreeError, ValueError):
    """Leaf count is zero, negative or not a power of two."""

    def __init__(self, leaf_count) -> None:
        super().__init__(f"leaf count must be a positive power of two, got {leaf_count!r}")
        self.leaf_count = leaf_count


class IndexOutOfRange(MerkleTreeError, IndexError):
    """Item index outside ``[0, leaf_count)``."""

    def __init__(self, index, leaf_count: int) -> None:
        super().__init__(f"item index {index!r} out of range for {leaf_count} leaves")
        self.index = index
        self.leaf_count = leaf_count


class ProofDecodeError(MerkleTreeError, ValueError):
    """Encoded proof is truncated or malformed."""


class UnknownHasher(MerkleTreeError, KeyError):
    """No hasher is registered under the requested name."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


__all__ = [
    "MerkleTreeError",
    "InvalidCapacity",
    "IndexOutOfRange",
    "ProofDecodeError",
    "UnknownHasher",
]
