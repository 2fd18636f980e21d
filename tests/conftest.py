import sys
from pathlib import Path

import pytest

# Ensure the 'src' directory is on sys.path for imports in tests
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

ADDRESSES = [
    "0x7eC55A0200671F83A4acA56CdDb14A5Dc13db593",
    "0xcbb98843270812eeCE07BFb82d26b4881a33aA91",
    "0x70997970C51812dc3A010C7d01b50e0d17dc79C8",
    "0xBD26367c4B23A6D3713A1e1a50B2D67E8748cB98",
    "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266",
]


@pytest.fixture
def addresses():
    return list(ADDRESSES)


@pytest.fixture
def wallets_file(tmp_path, addresses):
    # CRLF line endings and a trailing newline, as exported from a spreadsheet
    p = tmp_path / "data" / "wallets.dat"
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_bytes(("\r\n".join(addresses) + "\r\n").encode("utf-8"))
    return p
