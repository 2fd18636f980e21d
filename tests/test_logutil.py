import logging

from allowlist_api.logutil import AddressMaskingFilter, setup_logging


def _record(msg, *args):
    return logging.LogRecord("allowlist_api.test", logging.INFO, __file__, 1, msg, args, None)


def test_masks_addresses():
    rec = _record("proof for %s", "0x7eC55A0200671F83A4acA56CdDb14A5Dc13db593")
    assert AddressMaskingFilter().filter(rec)
    assert rec.getMessage() == "proof for 0x7eC5...b593"


def test_leaves_hashes_alone():
    h = "0x" + "ab" * 32
    rec = _record("root %s", h)
    AddressMaskingFilter().filter(rec)
    assert rec.getMessage() == f"root {h}"


def test_setup_logging_sets_levels():
    setup_logging(logging.DEBUG, loggers=("allowlist_api",), mask_addresses=True)
    assert logging.getLogger("allowlist_api").level == logging.DEBUG
    handlers = logging.getLogger().handlers
    assert any(
        isinstance(f, AddressMaskingFilter) for h in handlers for f in h.filters
    )
