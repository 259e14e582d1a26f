"""Decoder for libpcap capture streams.

Only IPv4/TCP frames over Ethernet (optionally 802.1Q tagged) or Linux
cooked capture are turned into records; every other frame is skipped.
"""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, NamedTuple, Optional

from ..core.config import settings
from ..core.constants import (
    ETHERNET_HEADER_LEN,
    ETHERTYPE_IPV4,
    ETHERTYPE_VLAN,
    IP_PROTO_TCP,
    IP_VERSION_4,
    IPV4_MIN_HEADER_LEN,
    LINKTYPE_ETHERNET,
    LINKTYPE_LINUX_SLL,
    MAGIC_PCAP_BE,
    MAGIC_PCAP_LE,
    PCAP_GLOBAL_HEADER_LEN,
    PCAP_RECORD_HEADER_LEN,
    SLL_HEADER_LEN,
    TCP_MIN_HEADER_LEN,
    VLAN_HEADER_LEN,
)
from ..core.decorators import handle_decode_errors
from ..core.models import PacketRecord
from ..exceptions import CaptureFormatError
from ..logging import get_logger
from ..utils.bits import ByteOrder, bytes_to_hex, bytes_to_int
from ..utils.net import stringify_address
from .base import CaptureSource
from .stanza import parse_stanzas

logger = get_logger(__name__)

BE = ByteOrder.BIG_ENDIAN


class PcapGlobalHeader(NamedTuple):
    byte_order: ByteOrder
    version_major: int
    version_minor: int
    timezone: int
    sigfigs: int
    snaplen: int
    link_type: int


def is_text_payload(buf: bytes) -> bool:
    """Return ``True`` if ``buf`` is made of well-shaped UTF-8 sequences.

    Only the lead byte's run of high bits and the ``10xxxxxx`` shape of
    continuation bytes are checked, so overlong encodings pass.
    """
    i = 0
    n = len(buf)
    while i < n:
        lead = buf[i]
        run = 0
        mask = 0x80
        while mask and lead & mask:
            run += 1
            mask >>= 1
        if run == 1 or run > 4:
            return False
        width = max(run, 1)
        if i + width > n:
            return False
        for j in range(i + 1, i + width):
            if buf[j] & 0xC0 != 0x80:
                return False
        i += width
    return True


def ip_offset_for_frame(frame: bytes, link_type: int) -> Optional[int]:
    """Return the offset of the IPv4 header in ``frame``, or ``None``."""
    if link_type == LINKTYPE_ETHERNET:
        if len(frame) >= VLAN_HEADER_LEN + 1 and frame[12:14] == ETHERTYPE_VLAN and frame[16:18] == ETHERTYPE_IPV4:
            return VLAN_HEADER_LEN
        if len(frame) >= ETHERNET_HEADER_LEN + 1 and frame[12:14] == ETHERTYPE_IPV4:
            return ETHERNET_HEADER_LEN
    elif link_type == LINKTYPE_LINUX_SLL:
        if len(frame) >= SLL_HEADER_LEN + 1 and frame[14:16] == ETHERTYPE_IPV4:
            return SLL_HEADER_LEN
    return None


class PcapStreamSource(CaptureSource):
    """Read TCP packets from a libpcap (``.pcap``) stream.

    The global header is read on the first :meth:`next_packet` call. A short
    read at a record boundary ends the session quietly; a bad magic number
    raises :class:`CaptureFormatError`.
    """

    def __init__(self, stream: BinaryIO, *, owns_stream: bool = False) -> None:
        super().__init__(stream, owns_stream=owns_stream)
        self._header: Optional[PcapGlobalHeader] = None
        self._skipped = 0

    @classmethod
    def can_decode(cls, path: Path, head: bytes) -> bool:
        if Path(path).suffix.lower() in settings.pcap_suffixes:
            return True
        return head[:4] in (MAGIC_PCAP_LE, MAGIC_PCAP_BE)

    @property
    def header(self) -> Optional[PcapGlobalHeader]:
        return self._header

    @property
    def skipped_count(self) -> int:
        """Frames dropped because they were not IPv4/TCP."""
        return self._skipped

    def _read_exact(self, size: int) -> Optional[bytes]:
        chunks = []
        remaining = size
        while remaining > 0:
            chunk = self._stream.read(remaining)
            if not chunk:
                return None
            chunks.append(chunk)
            remaining -= len(chunk)
        return b"".join(chunks)

    def _read_global_header(self) -> PcapGlobalHeader:
        hdr = self._read_exact(PCAP_GLOBAL_HEADER_LEN)
        if hdr is None:
            raise CaptureFormatError(
                "capture is shorter than the pcap global header",
                suggestion="check that the file is a libpcap capture",
            )
        magic = hdr[:4]
        if magic == MAGIC_PCAP_LE:
            order = ByteOrder.LITTLE_ENDIAN
        elif magic == MAGIC_PCAP_BE:
            order = ByteOrder.BIG_ENDIAN
        else:
            raise CaptureFormatError(
                f"unrecognized pcap magic {magic.hex()}",
                suggestion="pcapng and nanosecond captures are not supported",
            )
        header = PcapGlobalHeader(
            byte_order=order,
            version_major=bytes_to_int(hdr, 4, 2, order),
            version_minor=bytes_to_int(hdr, 6, 2, order),
            timezone=bytes_to_int(hdr, 8, 4, order),
            sigfigs=bytes_to_int(hdr, 12, 4, order),
            snaplen=bytes_to_int(hdr, 16, 4, order),
            link_type=bytes_to_int(hdr, 20, 4, order),
        )
        logger.info(
            "pcap v%d.%d, %s, link type %d, snaplen %d",
            header.version_major,
            header.version_minor,
            order.value,
            header.link_type,
            header.snaplen,
        )
        return header

    def _skip(self, frame: bytes, why: str) -> None:
        self._skipped += 1
        logger.debug("Skipping frame (%s): %s", why, bytes_to_hex(frame, 0, min(len(frame), 20)))

    def _decode_frame(self, frame: bytes, ts_sec: int, ts_usec: int) -> Optional[PacketRecord]:
        ipidx = ip_offset_for_frame(frame, self._header.link_type)
        if ipidx is None:
            self._skip(frame, "not IPv4")
            return None
        if len(frame) < ipidx + IPV4_MIN_HEADER_LEN:
            self._skip(frame, "short IP header")
            return None
        tcpidx = ipidx + (frame[ipidx] & 0x0F) * 4
        if (
            frame[ipidx] >> 4 != IP_VERSION_4
            or frame[ipidx + 9] != IP_PROTO_TCP
            or len(frame) < tcpidx + TCP_MIN_HEADER_LEN
        ):
            self._skip(frame, "not IPv4/TCP")
            return None

        fields = (
            bytes_to_int(frame, ipidx + 2, 2, BE),
            bytes_to_int(frame, ipidx + 12, 4, BE),
            bytes_to_int(frame, ipidx + 16, 4, BE),
            bytes_to_int(frame, tcpidx, 2, BE),
            bytes_to_int(frame, tcpidx + 2, 2, BE),
            bytes_to_int(frame, tcpidx + 4, 4, BE),
            bytes_to_int(frame, tcpidx + 8, 4, BE),
            bytes_to_int(frame, tcpidx + 12, 1, BE),
            bytes_to_int(frame, tcpidx + 13, 1, BE),
        )
        if -1 in fields:
            self._skip(frame, "header field out of range")
            return None
        pktlen, srca, dsta, srcp, dstp, seqno, ackno, data_offset, flags = fields

        record = PacketRecord(
            ts_sec=ts_sec,
            ts_usec=ts_usec,
            src_addr=srca,
            src_port=srcp,
            dst_addr=dsta,
            dst_port=dstp,
            src=stringify_address(srca, srcp),
            dst=stringify_address(dsta, dstp),
            tcp_flags=flags,
            seqno=seqno,
            ackno=ackno,
            pktlen=pktlen,
            caplen=len(frame),
        )

        dataidx = tcpidx + (data_offset >> 4) * 4
        if len(frame) > dataidx:
            payload = frame[dataidx:]
            if is_text_payload(payload):
                text = payload.decode("utf-8", errors="replace")
                if text.strip():
                    record.data = text
                    record.stanzas = parse_stanzas(text)
            else:
                record.data = settings.unreadable_text
                record.readable = False

        record.truncated = len(frame) != ipidx + pktlen
        return record

    @handle_decode_errors
    def next_packet(self) -> Optional[PacketRecord]:
        if self._header is None:
            self._header = self._read_global_header()
        order = self._header.byte_order

        while True:
            hdr = self._read_exact(PCAP_RECORD_HEADER_LEN)
            if hdr is None:
                return None
            ts_sec = bytes_to_int(hdr, 0, 4, order)
            ts_usec = bytes_to_int(hdr, 4, 4, order)
            caplen = bytes_to_int(hdr, 8, 4, order)

            frame = self._read_exact(caplen) if caplen else b""
            if frame is None:
                return None

            record = self._decode_frame(frame, ts_sec, ts_usec)
            if record is not None:
                record.pacno = self._next_pacno()
                return record


__all__ = ["PcapStreamSource", "PcapGlobalHeader", "is_text_payload", "ip_offset_for_frame"]
