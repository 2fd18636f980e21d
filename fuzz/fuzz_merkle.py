"""Fuzz harness for allow-list tree construction & proof self-verification."""
from __future__ import annotations
import atheris
import sys

with atheris.instrument_imports():
    from allowlist_api.crypto import keccak256
    from allowlist_api.merkle import MerkleTree, verify_proof


def TestOneInput(data: bytes):  # noqa: N802
    if not data:
        return
    # Split data deterministically into pseudo-records (bounded count)
    size = max(1, min(32, data[0]))
    chunks = [data[i : i + size] for i in range(1, min(len(data), 1 + size * 32), size)]
    leaves = [keccak256(c) for c in chunks if c]
    if not leaves:
        return
    policy = "duplicate" if data[0] & 0x80 else "promote"
    tree = MerkleTree.from_leaves(leaves, odd_node_policy=policy, sort_leaves=bool(data[0] & 0x40))
    for lower, upper in zip(tree.levels, tree.levels[1:]):
        if len(upper) != (len(lower) + 1) // 2:
            raise RuntimeError("level size invariant broken")
    idx = data[-1] % len(leaves)
    leaf = tree.leaves[idx]
    proof = tree.proof_at(idx)
    if policy == "promote" and len(proof) > (len(leaves) - 1).bit_length():
        raise RuntimeError("proof longer than ceil(log2(n))")
    if not verify_proof(leaf, proof, tree.root):
        raise RuntimeError("valid proof failed")


def main():
    atheris.Setup(sys.argv, TestOneInput, enable_python_coverage=True)
    atheris.Fuzz()


if __name__ == "__main__":
    main()
