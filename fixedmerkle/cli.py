# cli.py - command line interface for fixedmerkle trees

from __future__ import annotations

import argparse
import json
import logging
import sys

from .config import DEFAULT_HASHER, LOG_FORMAT
from .errors import MerkleTreeError
from .hashers import HASHERS, get_hasher
from .proof import Proof, verify_membership
from .tree import MerkleTree


def _build_tree(args: argparse.Namespace) -> MerkleTree:
    hasher = get_hasher(args.hasher)
    return MerkleTree.from_items((item.encode("utf-8") for item in args.items), hasher)


def _load_proof(text: str) -> Proof:
    """Parse ``text`` as a JSON proof document or as hex of the binary encoding."""
    text = text.strip()
    if text.startswith("{"):
        try:
            document = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValueError(f"invalid proof JSON: {exc}") from exc
        return Proof.from_dict(document)
    return Proof.decode(bytes.fromhex(text))


def cmd_root(args: argparse.Namespace) -> None:
    """Print the root digest of a tree built from the given items."""
    tree = _build_tree(args)
    print(tree.root().hex())


def cmd_show(args: argparse.Namespace) -> None:
    """Print every level of the tree."""
    tree = _build_tree(args)
    print(tree.format_levels())


def cmd_prove(args: argparse.Namespace) -> None:
    """Print the membership proof for one item."""
    tree = _build_tree(args)
    proof = tree.proof(args.index)
    if args.binary:
        print(proof.encode().hex())
    else:
        print(json.dumps({"root": tree.root().hex(), **proof.to_dict()}, indent=2))


def cmd_verify(args: argparse.Namespace) -> None:
    """Check an item and a proof against a known root."""
    hasher = get_hasher(args.hasher)
    proof = _load_proof(args.proof)
    root = bytes.fromhex(args.root)
    if verify_membership(proof, args.item.encode("utf-8"), hasher, root):
        print("Verification succeeded")
    else:
        print("Verification failed")
        sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fixedmerkle",
        description="Build fixed capacity Merkle trees and check membership proofs",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--hasher",
        default=DEFAULT_HASHER,
        choices=sorted(HASHERS),
        help="Hash function used for leaves and nodes",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_root = sub.add_parser("root", help="Print the root digest of the items")
    p_root.add_argument("items", nargs="+", help="Items, a power of two of them")
    p_root.set_defaults(func=cmd_root)

    p_show = sub.add_parser("show", help="Print the tree level by level")
    p_show.add_argument("items", nargs="+", help="Items, a power of two of them")
    p_show.set_defaults(func=cmd_show)

    p_prove = sub.add_parser("prove", help="Print the membership proof of one item")
    p_prove.add_argument("index", type=int, help="Zero based item index")
    p_prove.add_argument("items", nargs="+", help="Items, a power of two of them")
    p_prove.add_argument(
        "--binary", action="store_true", help="Print the binary proof encoding as hex"
    )
    p_prove.set_defaults(func=cmd_prove)

    p_verify = sub.add_parser("verify", help="Verify an item against a proof and root")
    p_verify.add_argument("item", help="Item to check")
    p_verify.add_argument("proof", help="Proof as JSON or as hex of the binary encoding")
    p_verify.add_argument("--root", required=True, help="Expected root digest in hex")
    p_verify.set_defaults(func=cmd_verify)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format=LOG_FORMAT,
    )
    try:
        args.func(args)
    except (MerkleTreeError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()


__all__ = [
    "main",
    "build_parser",
    "cmd_root",
    "cmd_show",
    "cmd_prove",
    "cmd_verify",
]
