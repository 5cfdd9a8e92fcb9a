import itertools
import random

import pytest

pytest.importorskip("nacl")

from fixedmerkle import IndexOutOfRange, InvalidCapacity, MerkleTree
from fixedmerkle.config import PLACEHOLDER_DIGEST
from fixedmerkle.hashers import sha256



@pytest.mark.parametrize("leaf_count", [0, 3, 5, 6, 7])
def test_rejects_bad_capacity(leaf_count: int) -> None:
    with pytest.raises(InvalidCapacity):
        MerkleTree(leaf_count, sha256)


@pytest.mark.parametrize("leaf_count", [1, 2, 4, 8, 16, 64])
def test_accepts_power_of_two(leaf_count: int) -> None:
    tree = MerkleTree(leaf_count, sha256)
    assert tree.leaf_count == leaf_count
    assert len(tree) == leaf_count
    assert len(tree.nodes()) == 2 * leaf_count
    assert tree.leaves() == (PLACEHOLDER_DIGEST,) * leaf_count


def test_from_items_rejects_empty_and_uneven():
    with pytest.raises(InvalidCapacity):
        MerkleTree.from_items([], sha256)
    with pytest.raises(InvalidCapacity):
        MerkleTree.from_items([b"a", b"b", b"c"], sha256)


def test_reference_tree_digests(reference_items, reference_hasher):
    tree = MerkleTree.from_items(reference_items, reference_hasher)
    nodes = tree.nodes()
    assert tree.leaves() == tuple(bytes([d]) for d in (0x47, 0x24, 0x7E, 0x56, 0xEF, 0x49, 0x12, 0x04))
    assert nodes[4:8] == (b"\x58", b"\x28", b"\x00", b"\xd5")
    assert nodes[2:4] == (b"\x4c", b"\xde")
    assert tree.root() == b"\x0b"
    assert tree.height == 3


def test_reference_tree_any_order(reference_items, reference_hasher):
    tree = MerkleTree(8, reference_hasher)
    for index in (5, 2, 7, 0, 3, 6, 1, 4):
        tree.set_at(index, reference_items[index])
    assert tree.root() == b"\x0b"


def test_root_matches_manual_computation():
    items = [b"a", b"b", b"c", b"d"]
    tree = MerkleTree.from_items(items, sha256)
    left = sha256(sha256(b"a") + sha256(b"b"))
    right = sha256(sha256(b"c") + sha256(b"d"))
    assert tree.root() == sha256(left + right)


def test_single_leaf_root_is_leaf_digest():
    tree = MerkleTree.from_items([b"only"], sha256)
    assert tree.root() == sha256(b"only")
    assert tree.height == 0


def test_permutation_order_independence():
    items = [b"w", b"x", b"y", b"z"]
    expected = MerkleTree.from_items(items, sha256).root()
    for order in itertools.permutations(range(4)):
        tree = MerkleTree(4, sha256)
        for index in order:
            tree.set_at(index, items[index])
        assert tree.root() == expected


def test_shuffled_order_independence(sample_items):
    expected = MerkleTree.from_items(sample_items, sha256).root()
    rng = random.Random(1234)
    for _ in range(20):
        order = list(range(len(sample_items)))
        rng.shuffle(order)
        tree = MerkleTree(len(sample_items), sha256)
        for index in order:
            tree.set_at(index, sample_items[index])
        assert tree.root() == expected


def test_set_at_is_incremental(sample_items, monkeypatch):
    tree = MerkleTree.from_items(sample_items, sha256)
    calls = []

    def counting(data: bytes) -> bytes:
        calls.append(data)
        return sha256(data)

    monkeypatch.setattr(tree, "_hasher", counting)
    tree.set_at(5, b"changed")
    # one leaf digest plus one per ancestor
    assert len(calls) == 1 + tree.height


def test_overwrite_changes_and_restores_root(sample_items):
    tree = MerkleTree.from_items(sample_items, sha256)
    original = tree.root()
    tree.set_at(9, b"other")
    assert tree.root() != original
    assert tree.leaves()[9] == sha256(b"other")
    tree.set_at(9, sample_items[9])
    assert tree.root() == original


@pytest.mark.parametrize("index", [-1, 8, 100, "1", None, True])
def test_set_at_out_of_range(index) -> None:
    tree = MerkleTree(8, sha256)
    with pytest.raises(IndexOutOfRange):
        tree.set_at(index, b"x")


def test_index_error_is_catchable_as_builtin():
    tree = MerkleTree(2, sha256)
    with pytest.raises(IndexError):
        tree.set_at(2, b"x")


def test_views_are_read_only(sample_items):
    tree = MerkleTree.from_items(sample_items, sha256)
    nodes = tree.nodes()
    assert isinstance(nodes, tuple)
    assert nodes[0] == PLACEHOLDER_DIGEST
    assert nodes[1] == tree.root()
    assert tree.leaves() == nodes[16:]
    with pytest.raises(TypeError):
        nodes[1] = b"x"


def test_format_levels(reference_items, reference_hasher):
    tree = MerkleTree.from_items(reference_items, reference_hasher)
    assert tree.format_levels().splitlines() == [
        "leaves = 8, height = 3",
        "3: 0b",
        "2: 4c de",
        "1: 58 28 00 d5",
        "0: 47 24 7e 56 ef 49 12 04",
    ]


def test_format_levels_marks_unset_slots():
    tree = MerkleTree(2, sha256)
    assert tree.format_levels().splitlines()[1:] == ["1: -", "0: - -"]
