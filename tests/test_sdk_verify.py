import json

from allowlist_api.pipeline import build_allowlist
from allowlist_api.report import render_json
from allowlist_sdk.verify import verify_address, verify_entry, verify_leaf, verify_report


def test_verify_address_roundtrip(addresses):
    report = build_allowlist(addresses)
    for e in report.entries:
        assert verify_address(e.address, e.proof, report.root)
        assert verify_leaf(e.leaf, e.proof, report.root)


def test_verify_address_rejects_outsider(addresses):
    report = build_allowlist(addresses)
    proof = report.entries[0].proof
    assert not verify_address("0x0000000000000000000000000000000000000000", proof, report.root)


def test_malformed_hex_is_false(addresses):
    report = build_allowlist(addresses)
    e = report.entries[0]
    assert not verify_address(e.address, ["0xnothex"], report.root)
    assert not verify_leaf(e.leaf, e.proof, "0x12")
    assert not verify_leaf("garbage", e.proof, report.root)


def test_hash_and_encoding_must_match(addresses):
    report = build_allowlist(addresses, hash_name="sha256", leaf_encoding="hex")
    e = report.entries[1]
    assert verify_address(e.address, e.proof, report.root, "sha256", "hex")
    assert not verify_address(e.address, e.proof, report.root)


def test_verify_entry_and_report(addresses):
    report = build_allowlist(addresses)
    doc = json.loads(render_json(report))
    assert verify_report(doc)
    assert verify_entry(doc["entries"][0], doc["root"])
    doc["entries"][0]["proof"][0] = "0x" + "00" * 32
    assert not verify_entry(doc["entries"][0], doc["root"])
    assert not verify_report(doc)


def test_verify_report_skips_unprocessable():
    report = build_allowlist(["0xaaaa", "zz-not-hex", "0xbbbb"], leaf_encoding="hex")
    doc = json.loads(render_json(report))
    assert verify_report(doc)
    assert not verify_entry(doc["entries"][1], doc["root"], leaf_encoding="hex")


def test_missing_fields_are_false():
    assert not verify_entry({"proof": []}, "0x" + "00" * 32)
    assert not verify_report({"entries": []})


def test_report_without_processable_entries_is_false():
    root = "0x" + "11" * 32
    assert not verify_report({"root": root, "entries": []})
    forged = {"root": root, "entries": [{"address": "0xevil", "proof": [], "error": "x"}]}
    assert not verify_report(forged)


def test_malformed_entries_are_false():
    root = "0x" + "11" * 32
    assert not verify_entry({"address": 5, "proof": []}, root)
    assert not verify_entry({"address": "0xaaa", "proof": "0x" + "00" * 32}, root)
    assert not verify_entry("oops", root)
    assert not verify_report({"root": root, "entries": ["oops"]})
    assert not verify_report({"root": root, "entries": "oops"})
    assert not verify_address(5, [], root)
    assert not verify_leaf(None, [], root)


def test_report_with_unknown_hash_is_false(addresses):
    doc = json.loads(render_json(build_allowlist(addresses)))
    doc["hash_name"] = "md5"
    assert not verify_report(doc)
