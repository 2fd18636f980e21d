from typing import Dict, Any, Sequence
from allowlist_api.crypto import HASHERS, get_hasher, hash_leaf, HD
from allowlist_api.merkle import verify_proof


def verify_leaf(
    leaf_hex: str, proof_hex: Sequence[str], root_hex: str, hash_name: str = "keccak256"
) -> bool:
    """Return True if the 0x leaf hash recomputes to ``root_hex`` through the proof.

    Needs nothing but the leaf, the proof and the published root. Malformed
    hex anywhere yields False rather than an exception.
    """
    hasher = get_hasher(hash_name)
    try:
        leaf = HD(leaf_hex)
        proof = [HD(p) for p in proof_hex]
        root = HD(root_hex)
    except (ValueError, TypeError):
        return False
    return verify_proof(leaf, proof, root, hasher)


def verify_address(
    address: str,
    proof_hex: Sequence[str],
    root_hex: str,
    hash_name: str = "keccak256",
    leaf_encoding: str = "text",
) -> bool:
    """Hash ``address`` as a leaf and check it against the published root."""
    hasher = get_hasher(hash_name)
    try:
        leaf = hash_leaf(address, hasher, leaf_encoding)
        proof = [HD(p) for p in proof_hex]
        root = HD(root_hex)
    except (ValueError, TypeError, AttributeError):
        return False
    return verify_proof(leaf, proof, root, hasher)


def verify_entry(
    entry_json: Dict[str, Any],
    root_hex: str,
    hash_name: str = "keccak256",
    leaf_encoding: str = "text",
) -> bool:
    """Verify one report entry (``address`` + ``proof``) against a root."""
    if not isinstance(entry_json, dict):
        return False
    try:
        address = entry_json["address"]
        proof = entry_json["proof"]
    except KeyError:
        return False
    if entry_json.get("error"):
        return False
    if not isinstance(address, str) or not isinstance(proof, list):
        return False
    return verify_address(address, proof, root_hex, hash_name, leaf_encoding)


def verify_report(report_json: Dict[str, Any]) -> bool:
    """Check every entry of a JSON report against its own root.

    Unprocessable entries are skipped; any processable entry that fails makes
    the whole report invalid, and a report with no processable entry proves
    nothing, so it is invalid too.
    """
    if not isinstance(report_json, dict):
        return False
    try:
        root = report_json["root"]
        entries = report_json["entries"]
    except KeyError:
        return False
    if not isinstance(entries, list) or not all(isinstance(e, dict) for e in entries):
        return False
    hash_name = report_json.get("hash_name", "keccak256")
    encoding = report_json.get("leaf_encoding", "text")
    if not isinstance(hash_name, str) or hash_name not in HASHERS:
        return False
    checked = [e for e in entries if not e.get("error")]
    if not checked:
        return False
    return all(verify_entry(e, root, hash_name, encoding) for e in checked)
