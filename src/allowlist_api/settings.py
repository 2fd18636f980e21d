from __future__ import annotations
from typing import Literal
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    input_path: str = Field(default="./data/wallets.dat", alias="ALLOWLIST_INPUT_PATH")
    report_path: str = Field(
        default="./data/merkletree.dat", alias="ALLOWLIST_REPORT_PATH"
    )

    # truncate = one fresh report per run; append = accumulate across runs
    report_mode: Literal["truncate", "append"] = Field(
        default="truncate", alias="ALLOWLIST_REPORT_MODE"
    )
    report_format: Literal["text", "json"] = Field(
        default="text", alias="ALLOWLIST_REPORT_FORMAT"
    )

    hash_name: Literal["keccak256", "sha256"] = Field(
        default="keccak256", alias="ALLOWLIST_HASH"
    )
    leaf_encoding: Literal["text", "hex"] = Field(
        default="text", alias="ALLOWLIST_LEAF_ENCODING"
    )
    odd_node_policy: Literal["promote", "duplicate"] = Field(
        default="promote", alias="ALLOWLIST_ODD_NODE_POLICY"
    )
    sort_leaves: bool = Field(default=False, alias="ALLOWLIST_SORT_LEAVES")
    keep_empty_records: bool = Field(
        default=False, alias="ALLOWLIST_KEEP_EMPTY_RECORDS"
    )

    mask_addresses: bool = Field(default=False, alias="ALLOWLIST_MASK_ADDRESSES")
    log_level: str = Field(default="INFO", alias="ALLOWLIST_LOG_LEVEL")

    class Config:
        env_file = ".env"
        case_sensitive = False
        populate_by_name = True
        extra = "ignore"


settings = Settings()  # load at import
