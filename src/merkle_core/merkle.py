from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional

from .crypto import as_bytes, digest, to_hex

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Node:
    """Tree vertex. Leaves carry data and no children; internal nodes the reverse."""

    digest: bytes
    data: Optional[bytes] = None
    left: Optional["Node"] = None
    right: Optional["Node"] = None

    @classmethod
    def leaf(cls, data: bytes) -> "Node":
        return cls(digest=digest(data), data=data)

    @classmethod
    def parent(cls, left: "Node", right: "Node") -> "Node":
        # positional: left operand first, never reordered by value
        return cls(digest=digest(left.digest + right.digest), left=left, right=right)

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None


@dataclass(frozen=True)
class MerkleTree:
    root: Optional[Node]
    size: int = 0  # number of leaves
    height: int = 0  # folds performed; 0 for empty and single-leaf trees

    @classmethod
    def build(cls, items: Iterable[bytes]) -> "MerkleTree":
        lvl = [Node.leaf(as_bytes(item)) for item in items]
        if not lvl:
            log.debug("built empty merkle tree")
            return cls(root=None)
        size = len(lvl)
        height = 0
        while len(lvl) > 1:
            nxt = []
            for i in range(0, len(lvl), 2):
                a = lvl[i]
                b = lvl[i + 1] if i + 1 < len(lvl) else lvl[i]  # duplicate last if odd
                nxt.append(Node.parent(a, b))
            lvl = nxt
            height += 1
        log.debug("built merkle tree leaves=%d height=%d", size, height)
        return cls(root=lvl[0], size=size, height=height)

    def __len__(self) -> int:
        return self.size

    @property
    def root_digest(self) -> Optional[bytes]:
        if self.root is None:
            return None
        return self.root.digest

    @property
    def root_digest_hex(self) -> str:
        d = self.root_digest
        return "" if d is None else to_hex(d)

    def leaves(self) -> Iterator[Node]:
        """Yield the original leaves in input order."""
        yielded = 0
        stack: List[Node] = [self.root] if self.root is not None else []
        while stack and yielded < self.size:
            node = stack.pop()
            if node.is_leaf:
                yielded += 1
                yield node
                continue
            # a duplicated last node appears as both children; skip the copy
            if node.right is not node.left:
                stack.append(node.right)
            stack.append(node.left)


def build(items: Iterable[bytes]) -> MerkleTree:
    return MerkleTree.build(items)


def root_digest(tree: MerkleTree) -> Optional[bytes]:
    return tree.root_digest


def root_digest_hex(tree: MerkleTree) -> str:
    """Lowercase hex of the root digest, or "" for an empty tree."""
    return tree.root_digest_hex
