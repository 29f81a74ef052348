"""Content-addressed binary hash tree with inclusion proofs."""
from .crypto import DIGEST_SIZE, digest
from .merkle import MerkleTree, Node, build, root_digest, root_digest_hex
from .proof import Proof, proof_for, recompute_positional, recompute_sorted, verify
from .render import render_tree

__all__ = [
    "DIGEST_SIZE",
    "MerkleTree",
    "Node",
    "Proof",
    "build",
    "digest",
    "proof_for",
    "recompute_positional",
    "recompute_sorted",
    "render_tree",
    "root_digest",
    "root_digest_hex",
    "verify",
]
