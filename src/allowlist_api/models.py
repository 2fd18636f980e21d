from __future__ import annotations
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic import ConfigDict

from .crypto import HD


def _check_hash_hex(v: str) -> str:
    if len(HD(v)) != 32:
        raise ValueError("expected a 32-byte hash")
    return v.lower()


class ProofEntry(BaseModel):
    """One input record with its leaf, proof and self-check outcome.

    ``error`` is set, and ``verified`` is False, when the record could not be
    processed (malformed under the chosen leaf encoding, or its leaf was not
    found in the tree). The entry is still reported in input order.
    """

    address: str
    leaf: Optional[str] = None
    proof: List[str] = Field(default_factory=list)
    verified: bool = False
    error: Optional[str] = None


class AllowlistReport(BaseModel):
    root: str
    leaf_count: int
    depth: int
    hash_name: str = "keccak256"
    leaf_encoding: str = "text"
    odd_node_policy: str = "promote"
    sorted_leaves: bool = False
    entries: List[ProofEntry] = Field(default_factory=list)

    @property
    def failures(self) -> List[ProofEntry]:
        return [e for e in self.entries if not e.verified]


class ProofRequest(BaseModel):
    model_config = ConfigDict(strict=True)

    address: str


class VerifyRequest(BaseModel):
    """Consumer-side verification request.

    Exactly one of ``address`` (hashed server-side with the configured leaf
    hasher) or ``leaf`` (an already hashed 0x value) must be given.
    """

    model_config = ConfigDict(strict=True)

    address: Optional[str] = None
    leaf: Optional[str] = None
    proof: List[str] = Field(default_factory=list)
    root: str

    @field_validator("leaf", "root")
    @classmethod
    def _hash_hex(cls, v):  # type: ignore[override]
        if v is None:
            return v
        return _check_hash_hex(v)

    @field_validator("proof")
    @classmethod
    def _proof_hex(cls, v):  # type: ignore[override]
        return [_check_hash_hex(p) for p in v]

    @model_validator(mode="after")
    def _one_target(self):
        if (self.address is None) == (self.leaf is None):
            raise ValueError("give exactly one of address or leaf")
        return self
