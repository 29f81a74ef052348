"""Fuzz harness for Merkle tree construction & inclusion proof round-trips."""
from __future__ import annotations
import atheris
import sys

with atheris.instrument_imports():
    from merkle_core.merkle import build
    from merkle_core.proof import proof_for, verify


def TestOneInput(data: bytes):  # noqa: N802
    if not data:
        return
    # Split data deterministically into items (bounded count)
    size = max(1, min(32, data[0]))
    items = [data[i : i + size] for i in range(1, min(len(data), 1 + size * 32), size)]
    tree = build(items)
    if not items:
        if tree.root_digest is not None or tree.root_digest_hex != "":
            raise RuntimeError("empty input produced a root")
        return
    # Pick an item based on trailing byte
    item = items[data[-1] % len(items)]
    proof = proof_for(tree, item)
    if proof is None:
        raise RuntimeError("member has no proof")
    if items[proof.index] != item:
        raise RuntimeError("proof index does not point at an equal item")
    if not verify(item, proof, tree.root_digest):
        raise RuntimeError("valid inclusion proof failed")
    if build(items).root_digest != tree.root_digest:
        raise RuntimeError("build is not deterministic")


def main():
    atheris.Setup(sys.argv, TestOneInput, enable_python_coverage=True)
    atheris.Fuzz()


if __name__ == "__main__":
    main()
