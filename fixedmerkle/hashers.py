"""Hash functions that can be plugged into a :class:`~fixedmerkle.tree.MerkleTree`.

A hasher is any callable taking ``bytes`` and returning a digest as ``bytes``.
It must be deterministic, free of side effects and accept empty input.
"""

from __future__ import annotations

import hashlib
from typing import Callable, Dict, Protocol

import nacl.hash
from nacl.encoding import RawEncoder

from .errors import UnknownHasher


class Hasher(Protocol):
    def __call__(self, data: bytes) -> bytes:
        ...


def sha256(data: bytes) -> bytes:
    """Return the SHA-256 digest of ``data``."""
    return hashlib.sha256(data).digest()


def blake2b(data: bytes) -> bytes:
    """Return the 32 byte BLAKE2b digest of ``data`` computed by libsodium."""
    return nacl.hash.blake2b(data, digest_size=32, encoder=RawEncoder)


def sha512(data: bytes) -> bytes:
    """Return the SHA-512 digest of ``data`` computed by libsodium."""
    return nacl.hash.sha512(data, encoder=RawEncoder)


def checksum8(data: bytes) -> bytes:
    """Toy one byte checksum: the sum of all bytes modulo 256.

    Collisions are trivial to construct.  Only meant for tests and for
    printing small trees by hand.
    """
    return bytes([sum(data) & 0xFF])


HASHERS: Dict[str, Callable[[bytes], bytes]] = {
    "sha256": sha256,
    "blake2b": blake2b,
    "sha512": sha512,
    "checksum8": checksum8,
}


def get_hasher(name: str) -> Callable[[bytes], bytes]:
    """Return the hasher registered under ``name``."""
    try:
        return HASHERS[name]
    except KeyError:
        raise UnknownHasher(
            f"unknown hasher {name!r}, expected one of: {', '.join(sorted(HASHERS))}"
        ) from None


__all__ = [
    "Hasher",
    "HASHERS",
    "sha256",
    "blake2b",
    "sha512",
    "checksum8",
    "get_hasher",
]
