from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Sequence

from .crypto import Hasher, keccak256, H

ODD_NODE_POLICIES = ("promote", "duplicate")


class EmptyInputError(ValueError):
    """No leaves to build a tree from."""


class LeafNotFoundError(LookupError):
    """Proof requested for a leaf that is not in level 0."""


def hash_pair(a: bytes, b: bytes, hasher: Hasher = keccak256) -> bytes:
    """Sorted-pair combine: the smaller hash goes first, so order never matters."""
    if a <= b:
        return hasher(a + b)
    return hasher(b + a)


@dataclass(frozen=True)
class MerkleTree:
    leaves: List[bytes]
    levels: List[List[bytes]]  # level 0 = leaves, last = [root]
    hasher: Hasher = field(default=keccak256, repr=False, compare=False)
    odd_node_policy: str = "promote"

    @classmethod
    def from_leaves(
        cls,
        leaves: Sequence[bytes],
        hasher: Hasher = keccak256,
        odd_node_policy: str = "promote",
        sort_leaves: bool = False,
    ) -> "MerkleTree":
        if odd_node_policy not in ODD_NODE_POLICIES:
            raise ValueError(f"unknown odd-node policy: {odd_node_policy!r}")
        if not leaves:
            raise EmptyInputError("no leaves")
        lvl = sorted(leaves) if sort_leaves else list(leaves)
        levels = [lvl]
        while len(lvl) > 1:
            nxt = []
            for i in range(0, len(lvl), 2):
                if i + 1 < len(lvl):
                    nxt.append(hash_pair(lvl[i], lvl[i + 1], hasher))
                elif odd_node_policy == "duplicate":
                    nxt.append(hash_pair(lvl[i], lvl[i], hasher))
                else:
                    nxt.append(lvl[i])  # promote unchanged
            levels.append(nxt)
            lvl = nxt
        return cls(list(levels[0]), levels, hasher, odd_node_policy)

    @property
    def root(self) -> bytes:
        return self.levels[-1][0]

    @property
    def hex_root(self) -> str:
        return H(self.root)

    @property
    def depth(self) -> int:
        return len(self.levels) - 1

    @property
    def leaf_count(self) -> int:
        return len(self.leaves)

    def index_of(self, leaf: bytes) -> int:
        try:
            return self.leaves.index(leaf)
        except ValueError:
            raise LeafNotFoundError(f"leaf {H(leaf)} not in tree") from None

    def proof_at(self, index: int) -> List[bytes]:
        """Sibling hashes from leaf ``index`` up to (excluding) the root."""
        if not 0 <= index < len(self.leaves):
            raise IndexError(f"leaf index {index} out of range")
        proof = []
        idx = index
        for level in self.levels[:-1]:
            sibling_idx = idx ^ 1
            if sibling_idx < len(level):
                proof.append(level[sibling_idx])
            elif self.odd_node_policy == "duplicate":
                proof.append(level[idx])
            # promoted nodes contribute nothing at this level
            idx //= 2
        return proof

    def proof(self, target: bytes) -> List[bytes]:
        return self.proof_at(self.index_of(target))

    def hex_proof(self, target: bytes) -> List[str]:
        return [H(p) for p in self.proof(target)]

    def hex_layers(self) -> List[List[str]]:
        return [[H(n) for n in level] for level in self.levels]


def compute_root(leaf: bytes, proof: Sequence[bytes], hasher: Hasher = keccak256) -> bytes:
    h = leaf
    for sibling in proof:
        h = hash_pair(h, sibling, hasher)
    return h


def verify_proof(
    leaf: bytes, proof: Sequence[bytes], root: bytes, hasher: Hasher = keccak256
) -> bool:
    return compute_root(leaf, proof, hasher) == root
