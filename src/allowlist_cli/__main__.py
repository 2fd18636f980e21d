from __future__ import annotations
import logging
from typing import List, Optional
import typer
from rich import print

from allowlist_api.settings import settings
from allowlist_api.logutil import setup_logging

app = typer.Typer(add_completion=False, no_args_is_help=True)


def _setup():
    setup_logging(
        getattr(logging, settings.log_level.upper(), logging.INFO),
        mask_addresses=settings.mask_addresses,
    )


def _tree_options(
    input_path: Optional[str],
    hash_name: Optional[str],
    encoding: Optional[str],
    odd_nodes: Optional[str],
    sort_leaves: Optional[bool],
    keep_empty: Optional[bool],
) -> dict:
    """Merge CLI flags over settings; flags left unset fall back to ALLOWLIST_* values."""
    return {
        "input_path": input_path or settings.input_path,
        "hash_name": hash_name or settings.hash_name,
        "leaf_encoding": encoding or settings.leaf_encoding,
        "odd_node_policy": odd_nodes or settings.odd_node_policy,
        "sort_leaves": settings.sort_leaves if sort_leaves is None else sort_leaves,
        "keep_empty": settings.keep_empty_records if keep_empty is None else keep_empty,
    }


def _load(opts: dict):
    from allowlist_api.records import load_records

    try:
        return load_records(opts["input_path"], keep_empty=opts["keep_empty"])
    except FileNotFoundError as e:
        print(f"[red]{e}[/red]")
        raise typer.Exit(code=1)


def _tree(opts: dict):
    from allowlist_api.pipeline import build_tree

    records = _load(opts)
    try:
        tree = build_tree(
            records,
            hash_name=opts["hash_name"],
            leaf_encoding=opts["leaf_encoding"],
            odd_node_policy=opts["odd_node_policy"],
            sort_leaves=opts["sort_leaves"],
        )
    except ValueError as e:  # EmptyInputError or a bad option value
        print(f"[red]{e}[/red]")
        raise typer.Exit(code=1)
    return tree


_INPUT = typer.Option(None, "--input", help="Newline-delimited address file")
_HASH = typer.Option(None, "--hash", help="Hash function: keccak256|sha256")
_ENCODING = typer.Option(None, "--encoding", help="Leaf encoding: text|hex")
_ODD = typer.Option(None, "--odd-nodes", help="Odd-node policy: promote|duplicate")
_SORT = typer.Option(None, "--sort-leaves/--no-sort-leaves", help="Sort leaves before building")
_EMPTY = typer.Option(None, "--keep-empty/--drop-empty", help="Keep zero-length records")


@app.command()
def build(
    input_path: Optional[str] = _INPUT,
    out: Optional[str] = typer.Option(None, "--out", help="Report path"),
    mode: Optional[str] = typer.Option(None, "--mode", help="Report mode: truncate|append"),
    fmt: Optional[str] = typer.Option(None, "--format", help="Report format: text|json"),
    hash_name: Optional[str] = _HASH,
    encoding: Optional[str] = _ENCODING,
    odd_nodes: Optional[str] = _ODD,
    sort_leaves: Optional[bool] = _SORT,
    keep_empty: Optional[bool] = _EMPTY,
):
    """Build the tree, self-check every proof and write the report."""
    from allowlist_api.pipeline import build_allowlist
    from allowlist_api.report import REPORT_FORMATS, REPORT_MODES, export_report

    _setup()
    mode = mode or settings.report_mode
    fmt = fmt or settings.report_format
    if mode not in REPORT_MODES:
        print(f"[red]unknown report mode: {mode!r} (choose {'|'.join(REPORT_MODES)})[/red]")
        raise typer.Exit(code=1)
    if fmt not in REPORT_FORMATS:
        print(f"[red]unknown report format: {fmt!r} (choose {'|'.join(REPORT_FORMATS)})[/red]")
        raise typer.Exit(code=1)
    opts = _tree_options(input_path, hash_name, encoding, odd_nodes, sort_leaves, keep_empty)
    records = _load(opts)
    try:
        report = build_allowlist(
            records,
            hash_name=opts["hash_name"],
            leaf_encoding=opts["leaf_encoding"],
            odd_node_policy=opts["odd_node_policy"],
            sort_leaves=opts["sort_leaves"],
        )
    except ValueError as e:  # EmptyInputError or a bad option value
        print(f"[red]{e}[/red]")
        raise typer.Exit(code=1)

    print(f"[cyan]Root[/cyan] = {report.root}")
    failures = report.failures
    if failures:
        print(f"[yellow]{len(failures)} record(s) not verified[/yellow]")

    out_path = out or settings.report_path
    err = export_report(report, out_path, mode=mode, fmt=fmt)
    if err is not None:
        print(f"[red]There was an error writing the file: {err}[/red]")
        raise typer.Exit(code=2)
    print(f"[green]Wrote report to {out_path}[/green]")


@app.command()
def root(
    input_path: Optional[str] = _INPUT,
    hash_name: Optional[str] = _HASH,
    encoding: Optional[str] = _ENCODING,
    odd_nodes: Optional[str] = _ODD,
    sort_leaves: Optional[bool] = _SORT,
    keep_empty: Optional[bool] = _EMPTY,
):
    """Print the Merkle root only."""
    _setup()
    tree = _tree(_tree_options(input_path, hash_name, encoding, odd_nodes, sort_leaves, keep_empty))
    print(tree.hex_root)


@app.command()
def proof(
    address: str,
    input_path: Optional[str] = _INPUT,
    hash_name: Optional[str] = _HASH,
    encoding: Optional[str] = _ENCODING,
    odd_nodes: Optional[str] = _ODD,
    sort_leaves: Optional[bool] = _SORT,
    keep_empty: Optional[bool] = _EMPTY,
):
    """Print the proof for ADDRESS (sibling hashes, leaf level upward)."""
    from allowlist_api.crypto import InvalidRecordError, get_hasher, hash_leaf
    from allowlist_api.merkle import LeafNotFoundError

    _setup()
    opts = _tree_options(input_path, hash_name, encoding, odd_nodes, sort_leaves, keep_empty)
    tree = _tree(opts)
    try:
        leaf = hash_leaf(address, get_hasher(opts["hash_name"]), opts["leaf_encoding"])
        hex_proof = tree.hex_proof(leaf)
    except (InvalidRecordError, LeafNotFoundError) as e:
        print(f"[red]NOT FOUND IN ALLOW-LIST[/red] {address}: {e}")
        raise typer.Exit(code=1)
    print({"address": address, "root": tree.hex_root, "proof": hex_proof})


@app.command()
def verify(
    address: str,
    root_hex: str = typer.Option(..., "--root", help="Published 0x root"),
    proof_hex: List[str] = typer.Option([], "--proof", help="Proof element (repeat in order)"),
    hash_name: Optional[str] = _HASH,
    encoding: Optional[str] = _ENCODING,
):
    """Check ADDRESS against a root using only the proof (no allow-list needed)."""
    from allowlist_sdk.verify import verify_address

    ok = verify_address(
        address,
        proof_hex,
        root_hex,
        hash_name=hash_name or settings.hash_name,
        leaf_encoding=encoding or settings.leaf_encoding,
    )
    print({"address": address, "included": ok})
    if not ok:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
