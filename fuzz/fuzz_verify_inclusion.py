"""Inclusion proof fuzzing with mutated proofs and tampered data."""
from __future__ import annotations
import atheris
import sys
import random

with atheris.instrument_imports():
    from merkle_core.merkle import build
    from merkle_core.proof import proof_for, verify


def TestOneInput(data: bytes):  # noqa: N802
    if len(data) < 8:
        return
    # Derive variable chunk size & mutation seed
    seed = int.from_bytes(data[:4], 'little')
    random.seed(seed)
    chunk_len = 1 + (data[4] % 32)
    body = data[5:]
    items = [body[i:i+chunk_len] for i in range(0, min(len(body), chunk_len * 16), chunk_len)]
    if len(items) < 3:
        return
    tree = build(items)
    item = items[seed % len(items)]
    proof = list(proof_for(tree, item))
    roll = random.random()
    if roll < 0.2 and proof:
        # flip one bit of one sibling
        k = random.randrange(len(proof))
        sib = proof[k]
        proof[k] = bytes([(sib[0] ^ 0x01)]) + sib[1:]
        if verify(item, proof, tree.root_digest):
            raise RuntimeError("tampered proof unexpectedly verified")
    elif roll < 0.4:
        tampered = item + b"\x00"
        if tampered in items:
            return
        if verify(tampered, proof, tree.root_digest):
            raise RuntimeError("tampered data unexpectedly verified")
    else:
        if not verify(item, proof, tree.root_digest):
            raise RuntimeError("valid proof failed")


def main():
    atheris.Setup(sys.argv, TestOneInput, enable_python_coverage=True)
    atheris.Fuzz()


if __name__ == "__main__":
    main()
