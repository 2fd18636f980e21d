import logging
import re
from typing import Iterable


_ADDRESS = re.compile(r"\b(0x[0-9a-fA-F]{4})[0-9a-fA-F]{32}([0-9a-fA-F]{4})\b")


class AddressMaskingFilter(logging.Filter):
    """Abbreviate 20-byte 0x addresses in log records (0x1234...abcd).

    32-byte hashes (roots, leaves, proof elements) are left as they are.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        msg = str(record.getMessage())
        record.msg = _ADDRESS.sub(r"\1...\2", msg)
        record.args = ()
        return True


def setup_logging(
    level: int = logging.INFO,
    loggers: Iterable[str] = ("allowlist_api", "allowlist_cli", "uvicorn", "uvicorn.access"),
    mask_addresses: bool = False,
) -> None:
    logging.basicConfig(level=level)
    for name in loggers:
        logging.getLogger(name).setLevel(level)
    if mask_addresses:
        # handler-level so records from child loggers are masked too
        f = AddressMaskingFilter()
        for handler in logging.getLogger().handlers:
            if not any(isinstance(x, AddressMaskingFilter) for x in handler.filters):
                handler.addFilter(f)
