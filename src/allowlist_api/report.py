from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional, Union

import rfc8785

from .models import AllowlistReport, ProofEntry

log = logging.getLogger(__name__)

REPORT_MODES = ("truncate", "append")
REPORT_FORMATS = ("text", "json")


class SinkWriteError(OSError):
    """The report could not be written; computed proofs are unaffected."""


def _proof_line(entry: ProofEntry) -> str:
    if entry.error is not None:
        return f"unprocessable ({entry.error})"
    return "[" + ",".join(entry.proof) + "]"


def render_text(report: AllowlistReport) -> str:
    parts = [f"Root = {report.root}\n\n"]
    for e in report.entries:
        parts.append(f"Wallet Address : {e.address}\n")
        parts.append(f"Proof : {_proof_line(e)}\n")
        parts.append(f"Verify result : {'true' if e.verified else 'false'}\n\n")
    return "".join(parts)


def render_json(report: AllowlistReport) -> str:
    """RFC 8785 canonical JSON, one document per line."""
    return rfc8785.dumps(report.model_dump()).decode("utf-8") + "\n"


def write_report(
    report: AllowlistReport,
    path: Union[str, Path],
    mode: str = "truncate",
    fmt: str = "text",
) -> Path:
    if mode not in REPORT_MODES:
        raise ValueError(f"unknown report mode: {mode!r}")
    if fmt not in REPORT_FORMATS:
        raise ValueError(f"unknown report format: {fmt!r}")
    data = render_text(report) if fmt == "text" else render_json(report)
    p = Path(path)
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        with open(p, "a" if mode == "append" else "w", encoding="utf-8") as fh:
            fh.write(data)
    except OSError as e:
        raise SinkWriteError(f"could not write report to {p}: {e}") from e
    return p


def export_report(
    report: AllowlistReport,
    path: Union[str, Path],
    mode: str = "truncate",
    fmt: str = "text",
) -> Optional[SinkWriteError]:
    """Write the report; return the error instead of raising it."""
    try:
        p = write_report(report, path, mode=mode, fmt=fmt)
    except SinkWriteError as e:
        log.error("There was an error writing the report: %s", e)
        return e
    log.info("report written to %s (%s, %s)", p, fmt, mode)
    return None
