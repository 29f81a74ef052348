import hashlib

import pytest

from merkle_core.crypto import digest
from merkle_core.merkle import MerkleTree, Node, build, root_digest, root_digest_hex


def _h(b):
    return hashlib.sha256(b).digest()


def test_digest_is_sha256():
    assert digest(b"x").hex() == (
        "2d711642b726b04401627ca9fbac32f5c8530fb1903cc4db02258717921a4881"
    )
    assert len(digest(b"")) == 32


def test_empty_tree_has_no_root():
    tree = build([])
    assert tree.root is None
    assert root_digest(tree) is None
    assert root_digest_hex(tree) == ""
    assert len(tree) == 0
    assert list(tree.leaves()) == []


def test_singleton_root_is_leaf():
    tree = build([b"x"])
    assert tree.root.is_leaf
    assert tree.root.data == b"x"
    assert root_digest(tree) == digest(b"x")
    assert root_digest_hex(tree) == digest(b"x").hex()
    assert tree.height == 0


def test_two_leaves_combine_by_position():
    tree = build([b"a", b"b"])
    assert root_digest(tree) == _h(_h(b"a") + _h(b"b"))
    # positional even though digest("b") sorts first
    assert _h(b"b") < _h(b"a")


def test_odd_count_duplicates_last_node():
    tree = build([b"a", b"b", b"c"])
    p1 = _h(_h(b"a") + _h(b"b"))
    p2 = _h(_h(b"c") + _h(b"c"))
    assert root_digest(tree) == _h(p1 + p2)
    assert tree.height == 2
    assert tree.root.right.left is tree.root.right.right


def test_five_leaves_duplicate_at_each_odd_level():
    leaves = [_h(x) for x in (b"1", b"2", b"3", b"4", b"5")]
    l1 = [_h(leaves[0] + leaves[1]), _h(leaves[2] + leaves[3]), _h(leaves[4] + leaves[4])]
    l2 = [_h(l1[0] + l1[1]), _h(l1[2] + l1[2])]
    tree = build([b"1", b"2", b"3", b"4", b"5"])
    assert root_digest(tree) == _h(l2[0] + l2[1])
    assert tree.height == 3


def test_deterministic(fruit):
    assert build(fruit).root_digest == build(list(fruit)).root_digest
    assert build(fruit).root_digest != build(list(reversed(fruit))).root_digest


def test_accepts_iterables_and_text():
    gen = (x for x in [b"a", bytearray(b"b"), memoryview(b"c")])
    assert build(gen).root_digest == build([b"a", b"b", b"c"]).root_digest
    assert build(["a", "b", "c"]).root_digest == build([b"a", b"b", b"c"]).root_digest


def test_rejects_non_bytes_items():
    with pytest.raises(TypeError):
        build([b"a", 1])


def test_node_invariants(fruit_tree):
    stack = [fruit_tree.root]
    while stack:
        node = stack.pop()
        if node.is_leaf:
            assert node.data is not None
            assert node.digest == digest(node.data)
        else:
            assert node.data is None
            assert node.left is not None and node.right is not None
            assert node.digest == _h(node.left.digest + node.right.digest)
            stack.extend([node.left, node.right])


def test_leaves_in_input_order(fruit, fruit_tree):
    assert [n.data for n in fruit_tree.leaves()] == fruit
    assert len(fruit_tree) == len(fruit)


def test_leaves_keeps_equal_items():
    tree = build([b"x", b"x", b"x"])
    assert [n.data for n in tree.leaves()] == [b"x", b"x", b"x"]


def test_tree_is_immutable(fruit_tree):
    with pytest.raises(AttributeError):
        fruit_tree.root = None
    with pytest.raises(AttributeError):
        fruit_tree.root.digest = b"\x00" * 32


def test_node_constructors():
    a, b = Node.leaf(b"a"), Node.leaf(b"b")
    p = Node.parent(a, b)
    assert p.digest == _h(a.digest + b.digest)
    assert not p.is_leaf and a.is_leaf
    assert MerkleTree.build([b"a", b"b"]).root == p
