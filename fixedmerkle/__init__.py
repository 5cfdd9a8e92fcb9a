from .errors import (
    MerkleTreeError,
    InvalidCapacity,
    IndexOutOfRange,
    ProofDecodeError,
    UnknownHasher,
)
from .hashers import Hasher, get_hasher
from .proof import Proof, ProofStep, Side, verify, verify_membership
from .tree import MerkleTree

__all__ = [
    "MerkleTree",
    "Proof",
    "ProofStep",
    "Side",
    "verify",
    "verify_membership",
    "Hasher",
    "get_hasher",
    "MerkleTreeError",
    "InvalidCapacity",
    "IndexOutOfRange",
    "ProofDecodeError",
    "UnknownHasher",
]
