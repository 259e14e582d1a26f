"""Core data structures for decoded packet records."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, List, Optional
from xml.etree.ElementTree import Element

from ..utils.net import stringify_address


class TcpFlag(enum.IntFlag):
    FIN = 0x01
    SYN = 0x02
    RST = 0x04
    PSH = 0x08
    ACK = 0x10
    URG = 0x20
    ECE = 0x40
    CWR = 0x80


# Display order and labels for ``PacketRecord.flags_description``
_FLAG_LABELS = (
    (TcpFlag.SYN, "SYN"),
    (TcpFlag.FIN, "FIN"),
    (TcpFlag.RST, "RST"),
    (TcpFlag.PSH, "PSH"),
    (TcpFlag.ACK, "ACK"),
    (TcpFlag.URG, "URG"),
    (TcpFlag.ECE, "ECN"),
    (TcpFlag.CWR, "CWR"),
)


@dataclass(eq=False)
class PacketRecord:
    """One decoded TCP packet and the stanzas found in its payload.

    ``data`` is ``None`` when the packet carried no payload (or only
    whitespace), ``""`` for an explicitly empty payload, and the configured
    unreadable text when the payload did not look like text.
    """

    pacno: int = 0
    ts_sec: int = 0
    ts_usec: int = 0
    src_addr: int = 0
    src_port: int = 0
    dst_addr: int = 0
    dst_port: int = 0
    src: str = ""
    dst: str = ""
    tcp_flags: int = 0
    seqno: int = 0
    ackno: int = 0
    pktlen: int = 0
    caplen: int = 0
    data: Optional[str] = None
    readable: bool = True
    truncated: bool = False
    stanzas: List[Element] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Fill in endpoint strings from the raw address fields."""
        if not self.src and (self.src_addr or self.src_port):
            self.src = stringify_address(self.src_addr, self.src_port)
        if not self.dst and (self.dst_addr or self.dst_port):
            self.dst = stringify_address(self.dst_addr, self.dst_port)

    @property
    def timestamp(self) -> float:
        return self.ts_sec + self.ts_usec / 1_000_000

    @property
    def time(self) -> datetime:
        return datetime.fromtimestamp(self.timestamp, tz=timezone.utc)

    @property
    def flags(self) -> TcpFlag:
        return TcpFlag(self.tcp_flags & 0xFF)

    def has_flag(self, flag: TcpFlag) -> bool:
        return bool(self.tcp_flags & flag)

    def flags_description(self) -> str:
        """Return the set flags as ``"SYN,ACK"`` style text."""
        return ",".join(label for bit, label in _FLAG_LABELS if self.tcp_flags & bit)

    def to_row(self) -> dict[str, Any]:
        """Return a flat view of the record suitable for tabular export."""
        return {
            "pacno": self.pacno,
            "time": self.time,
            "src": self.src,
            "dst": self.dst,
            "src_addr": self.src_addr,
            "src_port": self.src_port,
            "dst_addr": self.dst_addr,
            "dst_port": self.dst_port,
            "tcp_flags": self.tcp_flags,
            "flags": self.flags_description(),
            "seqno": self.seqno,
            "ackno": self.ackno,
            "pktlen": self.pktlen,
            "caplen": self.caplen,
            "readable": self.readable,
            "truncated": self.truncated,
            "stanza_count": len(self.stanzas),
            "data": self.data,
        }

    def __lt__(self, other: "PacketRecord") -> bool:
        if not isinstance(other, PacketRecord):
            return NotImplemented
        return self.pacno < other.pacno

    def __str__(self) -> str:
        return "|".join(
            str(part)
            for part in (
                self.pacno,
                self.time.isoformat(),
                self.pktlen,
                self.src,
                self.dst,
                self.seqno,
                self.ackno,
                self.flags_description(),
                self.readable,
                self.truncated,
            )
        )


__all__ = ["PacketRecord", "TcpFlag"]
