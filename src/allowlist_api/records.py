from __future__ import annotations
from pathlib import Path
from typing import List, Union

from .crypto import strip_record


def parse_records(text: str, keep_empty: bool = False) -> List[str]:
    """Split newline-delimited text into raw address records.

    A stray carriage return is trimmed from each record. Zero-length records
    (usually the artifact of a trailing newline) are dropped unless
    ``keep_empty`` is set, in which case they stay as empty records.
    """
    records = [strip_record(line) for line in text.split("\n")]
    if keep_empty:
        return records
    return [r for r in records if r]


def load_records(path: Union[str, Path], keep_empty: bool = False) -> List[str]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"allow-list file not found: {p}")
    return parse_records(p.read_text(encoding="utf-8"), keep_empty=keep_empty)
