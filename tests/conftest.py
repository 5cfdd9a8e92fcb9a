import importlib.util

import pytest

from fixedmerkle import hashers

if importlib.util.find_spec("nacl") is None:
    raise pytest.UsageError(
        "PyNaCl is required for the test suite. Install dependencies with 'pip install -e .[test]'."
    )


def pytest_collection_modifyitems(config, items):
    """Automatically add a timeout to the exhaustive ordering tests."""
    keywords = {"permutation", "exhaustive"}
    for item in items:
        if any(k in item.name for k in keywords):
            item.add_marker(pytest.mark.timeout(10))


# One byte digests of the eight-leaf reference tree.  Leaves first, then each
# internal node keyed by the concatenation of its children.
REFERENCE_DIGESTS = {
    b"Alpha": 0x47,
    b"Bravo": 0x24,
    b"Charlie": 0x7E,
    b"Delta": 0x56,
    b"Echo": 0xEF,
    b"Foxtrot": 0x49,
    b"Golf": 0x12,
    b"Hotel": 0x04,
    bytes([0x47, 0x24]): 0x58,
    bytes([0x7E, 0x56]): 0x28,
    bytes([0xEF, 0x49]): 0x00,
    bytes([0x12, 0x04]): 0xD5,
    bytes([0x58, 0x28]): 0x4C,
    bytes([0x00, 0xD5]): 0xDE,
    bytes([0x4C, 0xDE]): 0x0B,
}


def _reference_hasher(data: bytes) -> bytes:
    """Single byte checksum pinned to the reference tree's digests.

    Inputs outside the table fall back to :func:`hashers.checksum8`; they only
    occur while the tree is partially populated.
    """
    if data in REFERENCE_DIGESTS:
        return bytes([REFERENCE_DIGESTS[data]])
    return hashers.checksum8(data)


@pytest.fixture
def reference_items() -> list:
    """The eight labelled items of the reference tree."""
    return [b"Alpha", b"Bravo", b"Charlie", b"Delta", b"Echo", b"Foxtrot", b"Golf", b"Hotel"]


@pytest.fixture
def sample_items() -> list:
    """Sixteen distinct items for sha256 based trees."""
    return [f"item-{i}".encode() for i in range(16)]


@pytest.fixture
def reference_hasher():
    """Hasher reproducing the reference tree's one byte digests."""
    return _reference_hasher
