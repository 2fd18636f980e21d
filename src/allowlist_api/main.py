from __future__ import annotations
import datetime
from fastapi import FastAPI, HTTPException, status

from .settings import Settings
from .crypto import InvalidRecordError, get_hasher, hash_leaf, H, HD
from .merkle import EmptyInputError, LeafNotFoundError, MerkleTree, compute_root
from .models import ProofRequest, VerifyRequest
from .pipeline import build_tree
from .records import load_records

app = FastAPI(title="Merkle Allow-list")


def _load_tree(cfg: Settings) -> MerkleTree:
    try:
        records = load_records(cfg.input_path, keep_empty=cfg.keep_empty_records)
        return build_tree(
            records,
            hash_name=cfg.hash_name,
            leaf_encoding=cfg.leaf_encoding,
            odd_node_policy=cfg.odd_node_policy,
            sort_leaves=cfg.sort_leaves,
        )
    except FileNotFoundError:
        raise HTTPException(status_code=503, detail="allow-list not available")
    except EmptyInputError:
        raise HTTPException(status_code=503, detail="allow-list is empty")


def _leaf_for(address: str, cfg: Settings) -> bytes:
    try:
        return hash_leaf(address, get_hasher(cfg.hash_name), cfg.leaf_encoding)
    except InvalidRecordError:
        raise HTTPException(status_code=400, detail="address not encodable")


@app.get("/healthz")
async def healthz():
    return {"ok": True, "ts": datetime.datetime.utcnow().isoformat()}


@app.get("/allowlist/root")
async def allowlist_root():
    cfg = Settings()
    tree = _load_tree(cfg)
    return {
        "root": tree.hex_root,
        "leaf_count": tree.leaf_count,
        "depth": tree.depth,
        "hash": cfg.hash_name,
    }


@app.post("/allowlist/proof")
async def allowlist_proof(body: dict):
    try:
        req = ProofRequest(**body)
    except Exception:
        raise HTTPException(status_code=400, detail="request schema invalid")
    cfg = Settings()
    tree = _load_tree(cfg)
    leaf = _leaf_for(req.address, cfg)
    try:
        proof = tree.hex_proof(leaf)
    except LeafNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="address not in allow-list"
        )
    return {"address": req.address, "leaf": H(leaf), "proof": proof, "root": tree.hex_root}


@app.post("/allowlist/verify")
async def allowlist_verify(body: dict):
    # Only the leaf, proof and claimed root are needed; the tree is never loaded.
    try:
        req = VerifyRequest(**body)
    except Exception:
        raise HTTPException(status_code=400, detail="request schema invalid")
    cfg = Settings()
    leaf = HD(req.leaf) if req.leaf is not None else _leaf_for(req.address, cfg)
    recomputed = compute_root(leaf, [HD(p) for p in req.proof], get_hasher(cfg.hash_name))
    return {"valid": recomputed == HD(req.root), "computed_root": H(recomputed)}
