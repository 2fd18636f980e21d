"""Tamper fuzzing: mutated proofs and substituted leaves must not verify."""
from __future__ import annotations
import atheris
import sys
import random

with atheris.instrument_imports():
    from allowlist_api.crypto import keccak256
    from allowlist_api.merkle import MerkleTree, verify_proof


def TestOneInput(data: bytes):  # noqa: N802
    if len(data) < 8:
        return
    # Derive variable chunk size & mutation seed
    seed = int.from_bytes(data[:4], 'little')
    random.seed(seed)
    chunk_len = 1 + (data[4] % 32)
    body = data[5:]
    records = [body[i:i+chunk_len] for i in range(0, min(len(body), chunk_len * 16), chunk_len)]
    leaves = [keccak256(x) for x in records if x]
    if len(set(leaves)) < 3:
        return
    tree = MerkleTree.from_leaves(leaves)
    idx = seed % len(leaves)
    leaf = tree.leaves[idx]
    proof = list(tree.proof_at(idx))
    roll = random.random()
    if roll < 0.2 and proof:
        # flip one bit of one sibling
        pos = random.randrange(len(proof))
        sib = bytearray(proof[pos])
        sib[random.randrange(32)] ^= 1 << random.randrange(8)
        proof[pos] = bytes(sib)
        if verify_proof(leaf, proof, tree.root):
            raise RuntimeError("tampered proof unexpectedly verified")
    elif roll < 0.4:
        other = next(x for x in tree.leaves if x != leaf)
        if verify_proof(other, proof, tree.root):
            raise RuntimeError("substituted leaf unexpectedly verified")
    else:
        if not verify_proof(leaf, proof, tree.root):
            raise RuntimeError("valid proof failed")


def main():
    atheris.Setup(sys.argv, TestOneInput, enable_python_coverage=True)
    atheris.Fuzz()


if __name__ == "__main__":
    main()
