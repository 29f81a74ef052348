"""Inclusion proofs: generation by left-first search, verification by recombination.

Proofs are leaf-to-root lists of sibling digests. ``verify`` first applies the
value-ordered rule (the smaller of the running digest and the sibling is
hashed first). Trees are built positionally, so a proof is also accepted when
recombining it by leaf position reproduces the root: with the known index when
one is supplied, otherwise by trying each position a path of that length can
describe, up to ``settings.verify_max_search_depth`` entries.
"""
from __future__ import annotations
import logging
from typing import Iterable, Optional, Sequence

from .crypto import DIGEST_SIZE, digest
from .merkle import MerkleTree, Node
from .settings import settings

log = logging.getLogger(__name__)


class Proof(list):
    """Sibling digests ordered leaf to root, plus the proven leaf's position.

    Compares equal to a plain list holding the same digests.
    """

    def __init__(self, siblings: Iterable[bytes] = (), index: int = 0):
        super().__init__(siblings)
        self.index = index

    def __repr__(self) -> str:
        return f"Proof({[s.hex() for s in self]!r}, index={self.index})"


def proof_for(tree: MerkleTree, data: bytes) -> Optional[Proof]:
    """Return the inclusion proof for ``data`` or None when it is not a leaf.

    With duplicate items the first leaf in left-first order is proven.
    """
    if tree.root is None:
        return None
    target = digest(data)
    # trail links (parent, went_right, outer trail) from the node back to the root
    stack = [(tree.root, None)]
    while stack:
        node, trail = stack.pop()
        if node.is_leaf:
            if node.digest == target:
                return _collect(trail)
            continue
        if node.right is not node.left:
            stack.append((node.right, (node, True, trail)))
        stack.append((node.left, (node, False, trail)))
    log.debug("no leaf matches target %s", target.hex())
    return None


def _collect(trail) -> Proof:
    siblings = []
    index = 0
    depth = 0
    while trail is not None:
        parent, went_right, trail = trail
        sibling: Node = parent.left if went_right else parent.right
        siblings.append(sibling.digest)
        if went_right:
            index |= 1 << depth
        depth += 1
    return Proof(siblings, index=index)


def _combine_sorted(current: bytes, sibling: bytes) -> bytes:
    if current <= sibling:
        return digest(current + sibling)
    return digest(sibling + current)


def recompute_sorted(data: bytes, proof: Sequence[bytes]) -> bytes:
    """Root implied by ``proof`` under the value-ordered combination rule."""
    current = digest(data)
    for sibling in proof:
        current = _combine_sorted(current, sibling)
    return current


def recompute_positional(data: bytes, proof: Sequence[bytes], index: int) -> bytes:
    """Root implied by ``proof`` for the leaf at ``index`` (left operand first)."""
    if index < 0:
        raise ValueError("index must be non-negative")
    return _fold_positional(digest(data), proof, index)


def _fold_positional(current: bytes, proof: Sequence[bytes], index: int) -> bytes:
    for sibling in proof:
        if index & 1:
            current = digest(sibling + current)
        else:
            current = digest(current + sibling)
        index >>= 1
    return current


def _is_digest(value) -> bool:
    return isinstance(value, (bytes, bytearray, memoryview)) and len(value) == DIGEST_SIZE


def _search_positions(leaf: bytes, siblings: Sequence[bytes], root: bytes) -> bool:
    # depth-first over direction bits; each partial path is hashed once
    stack = [(leaf, 0)]
    while stack:
        current, depth = stack.pop()
        if depth == len(siblings):
            if current == root:
                return True
            continue
        sibling = siblings[depth]
        stack.append((digest(sibling + current), depth + 1))
        stack.append((digest(current + sibling), depth + 1))
    return False


def verify(
    data: bytes,
    proof: Sequence[bytes],
    claimed_root: bytes,
    index: Optional[int] = None,
) -> bool:
    """Return True if ``proof`` links ``data`` to ``claimed_root``; never raises."""
    if index is not None and index < 0:
        return False
    if not _is_digest(claimed_root):
        return False
    try:
        entries = list(proof)
    except TypeError:
        return False
    if not all(_is_digest(s) for s in entries):
        return False
    siblings = [bytes(s) for s in entries]
    root = bytes(claimed_root)
    leaf = digest(data)

    current = leaf
    for sibling in siblings:
        current = _combine_sorted(current, sibling)
    if current == root:
        return True

    if index is None and isinstance(proof, Proof):
        index = proof.index
    if index is not None:
        if index >> len(siblings):
            return False
        return _fold_positional(leaf, siblings, index) == root

    if len(siblings) > settings.verify_max_search_depth:
        log.debug(
            "proof of %d entries exceeds positional search depth %d",
            len(siblings),
            settings.verify_max_search_depth,
        )
        return False
    return _search_positions(leaf, siblings, root)
