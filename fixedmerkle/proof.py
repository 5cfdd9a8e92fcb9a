"""Membership proofs and their verification."""

from __future__ import annotations

import enum
import hmac
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, Tuple

from .config import MAX_PROOF_STEPS, SIDE_TAG_LEFT, SIDE_TAG_RIGHT
from .errors import ProofDecodeError
from .hashers import Hasher


class Side(enum.Enum):
    """Side occupied by the sibling digest of a proof step."""

    LEFT = "left"
    RIGHT = "right"

    @property
    def tag(self) -> int:
        return SIDE_TAG_LEFT if self is Side.LEFT else SIDE_TAG_RIGHT

    @classmethod
    def from_tag(cls, tag: int) -> "Side":
        if tag == SIDE_TAG_LEFT:
            return cls.LEFT
        if tag == SIDE_TAG_RIGHT:
            return cls.RIGHT
        raise ProofDecodeError(f"unknown side tag 0x{tag:02x}")


@dataclass(frozen=True)
class ProofStep:
    """Sibling digest met on the way from a leaf to the root."""

    digest: bytes
    side: Side


@dataclass(frozen=True)
class Proof:
    """Ordered leaf-to-root list of :class:`ProofStep` objects."""

    steps: Tuple[ProofStep, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "steps", tuple(self.steps))

    def __iter__(self) -> Iterator[ProofStep]:
        return iter(self.steps)

    def __len__(self) -> int:
        return len(self.steps)

    def __getitem__(self, index: int) -> ProofStep:
        return self.steps[index]

    def encode(self) -> bytes:
        """Return the binary encoding of the proof.

        Layout: one byte step count, one byte digest width, then per step a
        side tag byte followed by the digest.  All digests must have the same
        width.
        """
        if len(self.steps) > MAX_PROOF_STEPS:
            raise ValueError(f"proof has {len(self.steps)} steps, at most {MAX_PROOF_STEPS} can be encoded")
        widths = {len(step.digest) for step in self.steps}
        if len(widths) > 1:
            raise ValueError("all digests of an encoded proof must have the same width")
        width = widths.pop() if widths else 0
        if width > 0xFF:
            raise ValueError(f"digest width {width} does not fit in one byte")
        out = bytearray([len(self.steps), width])
        for step in self.steps:
            out.append(step.side.tag)
            out += step.digest
        return bytes(out)

    @classmethod
    def decode(cls, data: bytes) -> "Proof":
        """Parse a proof produced by :meth:`encode`."""
        if len(data) < 2:
            raise ProofDecodeError("encoded proof is missing its header")
        count, width = data[0], data[1]
        expected = 2 + count * (1 + width)
        if len(data) != expected:
            raise ProofDecodeError(
                f"encoded proof should be {expected} bytes for {count} steps of width {width}, got {len(data)}"
            )
        steps = []
        offset = 2
        for _ in range(count):
            side = Side.from_tag(data[offset])
            digest = bytes(data[offset + 1 : offset + 1 + width])
            steps.append(ProofStep(digest, side))
            offset += 1 + width
        return cls(steps)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON serialisable representation with hex digests."""
        return {
            "steps": [
                {"digest": step.digest.hex(), "side": step.side.value}
                for step in self.steps
            ]
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Proof":
        try:
            return cls(
                ProofStep(bytes.fromhex(step["digest"]), Side(step["side"]))
                for step in data["steps"]
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise ProofDecodeError(f"invalid proof document: {exc}") from exc


def verify(proof: Iterable[ProofStep], item: bytes, hasher: Hasher) -> bytes:
    """Replay ``proof`` for ``item`` and return the resulting root candidate.

    The candidate is not compared against anything; a wrong item or a
    tampered proof simply produces a different digest.
    """
    candidate = hasher(item)
    for step in proof:
        if step.side is Side.RIGHT:
            candidate = hasher(candidate + step.digest)
        else:
            candidate = hasher(step.digest + candidate)
    return candidate


def verify_membership(proof: Iterable[ProofStep], item: bytes, hasher: Hasher, root: bytes) -> bool:
    """Return ``True`` if ``proof`` authenticates ``item`` against ``root``."""
    return hmac.compare_digest(verify(proof, item, hasher), root)


__all__ = [
    "Side",
    "ProofStep",
    "Proof",
    "verify",
    "verify_membership",
]
