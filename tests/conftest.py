import sys
from pathlib import Path

# Ensure the src directory is on sys.path for test imports
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
for _path in (SRC_PATH, PROJECT_ROOT):
    if str(_path) not in sys.path:
        sys.path.insert(0, str(_path))


import pytest

from tests.fixtures.packet_factory import PacketFactory
from tests.fixtures.pcap_builder import PcapBuilder


@pytest.fixture
def handshake_pcap(tmp_path: Path) -> Path:
    """Return path to a small Ethernet pcap holding a TCP handshake."""
    return PcapBuilder.handshake_pcap(
        tmp_path, src_ip="10.0.0.1", dst_ip="10.0.0.2", sport=40112, dport=5222
    )


@pytest.fixture
def dump_text() -> str:
    """Return a two record xmppdump capture."""
    body = "<message to='b@x'><body>hi</body></message>"
    return (
        f'[tcp from="10.0.0.1:40112" to="10.0.0.2:5222" flags="A,P" '
        f'time="1420070400123" seqno="100" ackno="200" length="92" flength="{len(body)}"]\n'
        f"{body}\n"
        '[tcp from="10.0.0.2:5222" to="10.0.0.1:40112" flags="A" '
        'time="1420070400200" seqno="200" ackno="143" length="40" flength="0"]\n'
    )


@pytest.fixture
def packet_factory() -> type:
    return PacketFactory
