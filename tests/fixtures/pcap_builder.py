from __future__ import annotations

from pathlib import Path
from typing import Iterable

from scapy.utils import PcapWriter

from .packet_factory import PacketFactory

DLT_EN10MB = 1
DLT_LINUX_SLL = 113


class PcapBuilder:
    """Helper for programmatically creating pcap files for tests."""

    @staticmethod
    def build(
        packets: Iterable,
        output_path: Path,
        *,
        linktype: int = DLT_EN10MB,
        endianness: str = "<",
    ) -> Path:
        """Write ``packets`` (scapy packets or raw frame bytes) to ``output_path``."""
        with PcapWriter(str(output_path), linktype=linktype, endianness=endianness, sync=True) as writer:
            for pkt in packets:
                writer.write(pkt)
        return output_path

    @classmethod
    def build_in_temp(cls, packets: Iterable, tmp_path: Path, filename: str, **kwargs) -> Path:
        return cls.build(packets, tmp_path / filename, **kwargs)

    # Convenience scenario builders
    @classmethod
    def handshake_pcap(cls, tmp_path: Path, **kwargs) -> Path:
        pkts = PacketFactory.tcp_handshake_flow(**kwargs)
        return cls.build_in_temp(pkts, tmp_path, "handshake.pcap")

    @classmethod
    def xmpp_exchange_pcap(cls, tmp_path: Path, **kwargs) -> Path:
        pkts = PacketFactory.xmpp_exchange_flow(**kwargs)
        return cls.build_in_temp(pkts, tmp_path, "xmpp.pcap")
