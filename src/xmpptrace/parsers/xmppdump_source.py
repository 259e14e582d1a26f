"""Decoder for xmppdump text captures.

Each record is a bracketed header line of ``key="value"`` attributes::

    [tcp from="10.0.0.1:5222" to="10.0.0.2:40112" flags="A,P" time="1420070400123"
     seqno="1" ackno="2" length="92" flength="40"]
    <message to="a@b"><body>hi</body></message>

followed by exactly ``flength`` characters of payload text when the record is
readable.
"""

from __future__ import annotations

import io
import re
import weakref
from pathlib import Path
from typing import IO, Optional

from ..core.config import settings
from ..core.constants import DUMP_FLAG_BITS
from ..core.decorators import handle_decode_errors
from ..core.models import PacketRecord
from ..logging import get_logger
from ..utils.net import parse_endpoint
from .base import CaptureSource
from .stanza import parse_stanzas
from .utils import _safe_int, _safe_str_to_bool

logger = get_logger(__name__)

_ATTRIBUTES = ("from", "to", "flags", "time", "seqno", "ackno", "length", "flength", "readable")


def flags_from_letters(letters: str) -> int:
    """Return the TCP flag bits named by the letters in ``letters``."""
    value = 0
    for letter, bit in DUMP_FLAG_BITS.items():
        if letter in letters:
            value |= bit
    return value


class XmppDumpStreamSource(CaptureSource):
    """Read TCP packets from an xmppdump text stream.

    Binary streams are wrapped in a text reader using the configured
    encoding and error handler, with newline translation off so that
    ``flength`` counts match what is in the file. A wrapped stream the source
    does not own is detached, never closed, when the source goes away.
    """

    def __init__(self, stream: IO, *, owns_stream: bool = False) -> None:
        self._release = None
        if not isinstance(stream, io.TextIOBase):
            stream = io.TextIOWrapper(
                stream,
                encoding=settings.dump_encoding,
                errors=settings.dump_errors,
                newline="",
            )
            if not owns_stream:
                self._release = weakref.finalize(self, stream.detach)
        super().__init__(stream, owns_stream=owns_stream)
        self._record_pattern = re.compile(r"^" + re.escape(settings.dump_record_prefix))
        self._patterns = {
            name: re.compile(r"\b" + name + r'\s*=\s*"([^"]+)"') for name in _ATTRIBUTES
        }
        self._spaces = re.compile(r"[ \t]+")
        self._max_payload = settings.max_text_payload
        self._marker = settings.truncation_marker
        self._short_reads = 0

    @classmethod
    def can_decode(cls, path: Path, head: bytes) -> bool:
        return True

    @property
    def short_reads(self) -> int:
        """Records whose payload ended before ``flength`` characters."""
        return self._short_reads

    def close(self) -> None:
        if self._release is not None:
            self._release()
        super().close()

    def _read_until(self, stop: str, keep: bool) -> Optional[str]:
        """Consume characters up to and including ``stop``.

        Returns the text before ``stop`` (empty when ``keep`` is false) or
        ``None`` if the stream ended first.
        """
        kept = []
        while True:
            c = self._stream.read(1)
            if not c:
                return None
            if c == stop:
                return "".join(kept)
            if keep:
                kept.append(c)

    def _attribute(self, header: str, name: str) -> Optional[str]:
        m = self._patterns[name].search(header)
        return m.group(1) if m else None

    def _read_payload(self, flength: int) -> str:
        data = self._stream.read(flength)
        if len(data) != flength:
            self._short_reads += 1
            logger.warning(
                "Read underflow on tcp data. Expected %d characters, got %d.",
                flength,
                len(data),
            )
        data = self._spaces.sub(" ", data)
        if len(data) > self._max_payload:
            keep = self._max_payload - len(self._marker)
            data = data[:keep] + self._marker
        return data

    def _build_record(self, header: str) -> PacketRecord:
        record = PacketRecord()

        src = self._attribute(header, "from")
        if src is not None:
            record.src = src
            endpoint = parse_endpoint(src)
            if endpoint is not None:
                record.src_addr, record.src_port = endpoint
        dst = self._attribute(header, "to")
        if dst is not None:
            record.dst = dst
            endpoint = parse_endpoint(dst)
            if endpoint is not None:
                record.dst_addr, record.dst_port = endpoint

        letters = self._attribute(header, "flags")
        if letters is not None:
            record.tcp_flags = flags_from_letters(letters)

        millis = _safe_int(self._attribute(header, "time"))
        if millis is not None:
            record.ts_sec, remainder = divmod(millis, 1000)
            record.ts_usec = remainder * 1000

        for name in ("seqno", "ackno"):
            value = _safe_int(self._attribute(header, name))
            if value is not None:
                setattr(record, name, value)
        pktlen = _safe_int(self._attribute(header, "length"))
        if pktlen is not None:
            record.pktlen = pktlen

        readable = self._attribute(header, "readable")
        if readable is not None:
            record.readable = _safe_str_to_bool(readable)
        return record

    @handle_decode_errors
    def next_packet(self) -> Optional[PacketRecord]:
        if self._read_until("[", keep=False) is None:
            return None
        header = self._read_until("]", keep=True)
        if header is None:
            return None
        # the character closing the header line
        if not self._stream.read(1):
            return None

        if not self._record_pattern.search(header):
            logger.info("Stopping at non-%s record: %.40s", settings.dump_record_prefix, header)
            return None

        record = self._build_record(header)
        flength = _safe_int(self._attribute(header, "flength")) or 0

        if not record.readable:
            record.data = settings.unreadable_text
        elif flength > 0:
            record.data = self._read_payload(flength)
            record.stanzas = parse_stanzas(record.data)
        else:
            record.data = ""

        record.pacno = self._next_pacno()
        return record


__all__ = ["XmppDumpStreamSource", "flags_from_letters"]
