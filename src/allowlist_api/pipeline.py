from __future__ import annotations
import logging
from typing import List, Optional, Sequence, Tuple

from .crypto import InvalidRecordError, get_hasher, hash_leaf, H
from .merkle import EmptyInputError, LeafNotFoundError, MerkleTree, verify_proof
from .models import AllowlistReport, ProofEntry

"""Allow-list batch: hash records, build the tree, prove and self-check each record.

Guardrails:
- Records are processed in input order and every record yields exactly one entry.
- A bad record never aborts the batch; only an empty leaf set does.
"""

log = logging.getLogger(__name__)


def hash_records(
    records: Sequence[str], hash_name: str = "keccak256", leaf_encoding: str = "text"
) -> List[Tuple[str, Optional[bytes], Optional[str]]]:
    """Return (record, leaf or None, error or None) per record."""
    hasher = get_hasher(hash_name)
    out = []
    for rec in records:
        try:
            out.append((rec, hash_leaf(rec, hasher, leaf_encoding), None))
        except InvalidRecordError as e:
            log.warning("unprocessable record %r: %s", rec, e)
            out.append((rec, None, str(e)))
    return out


def _tree_from(hashed, hash_name: str, odd_node_policy: str, sort_leaves: bool) -> MerkleTree:
    leaves = [leaf for _, leaf, _ in hashed if leaf is not None]
    if not leaves:
        raise EmptyInputError("no records to build a tree from")
    return MerkleTree.from_leaves(
        leaves,
        hasher=get_hasher(hash_name),
        odd_node_policy=odd_node_policy,
        sort_leaves=sort_leaves,
    )


def build_tree(
    records: Sequence[str],
    hash_name: str = "keccak256",
    leaf_encoding: str = "text",
    odd_node_policy: str = "promote",
    sort_leaves: bool = False,
) -> MerkleTree:
    hashed = hash_records(records, hash_name, leaf_encoding)
    return _tree_from(hashed, hash_name, odd_node_policy, sort_leaves)


def build_allowlist(
    records: Sequence[str],
    hash_name: str = "keccak256",
    leaf_encoding: str = "text",
    odd_node_policy: str = "promote",
    sort_leaves: bool = False,
) -> AllowlistReport:
    """Run the whole batch once and return the in-memory report."""
    hasher = get_hasher(hash_name)
    hashed = hash_records(records, hash_name, leaf_encoding)
    tree = _tree_from(hashed, hash_name, odd_node_policy, sort_leaves)
    log.info("built tree: %d leaves, depth %d, root %s", tree.leaf_count, tree.depth, tree.hex_root)

    entries = []
    for rec, leaf, err in hashed:
        if leaf is None:
            entries.append(ProofEntry(address=rec, error=err))
            continue
        try:
            proof = tree.proof(leaf)
        except LeafNotFoundError as e:
            log.warning("no proof for %r: %s", rec, e)
            entries.append(ProofEntry(address=rec, leaf=H(leaf), error=str(e)))
            continue
        ok = verify_proof(leaf, proof, tree.root, hasher)
        if not ok:
            log.error("self-check failed for %r", rec)
        entries.append(
            ProofEntry(address=rec, leaf=H(leaf), proof=[H(p) for p in proof], verified=ok)
        )

    return AllowlistReport(
        root=tree.hex_root,
        leaf_count=tree.leaf_count,
        depth=tree.depth,
        hash_name=hash_name.lower(),
        leaf_encoding=leaf_encoding,
        odd_node_policy=odd_node_policy,
        sorted_leaves=sort_leaves,
        entries=entries,
    )
