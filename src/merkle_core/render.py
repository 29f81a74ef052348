from __future__ import annotations
from typing import List, Optional, Tuple

from .merkle import MerkleTree, Node
from .settings import settings


def _label(node: Node, width: int) -> str:
    short = node.digest.hex()[:width]
    if node.data is not None:
        text = node.data.decode("utf-8", errors="replace")
        return f"[LEAF] {short} (data: {text})"
    return f"[NODE] {short}"


def render_tree(tree: MerkleTree, width: Optional[int] = None) -> str:
    """Render the tree as indented text, root first, right child above left.

    A duplicated odd node shows up under both branches of its parent.
    """
    if tree.root is None:
        return "Empty tree"
    if width is None:
        width = settings.render_hash_chars
    lines: List[str] = []
    stack: List[Tuple[Node, str, bool]] = [(tree.root, "", True)]
    while stack:
        node, prefix, is_last = stack.pop()
        connector = "└── " if is_last else "├── "
        lines.append(f"{prefix}{connector}{_label(node, width)}")
        if node.is_leaf:
            continue
        child_prefix = prefix + ("    " if is_last else "│   ")
        # pushed left first so the right child pops (and prints) first
        stack.append((node.left, child_prefix, True))
        stack.append((node.right, child_prefix, False))
    return "\n".join(lines)
