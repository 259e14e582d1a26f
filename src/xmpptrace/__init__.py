# src/xmpptrace/__init__.py
from .core.models import PacketRecord, TcpFlag
from .exceptions import (
    XmppTraceError,
    CaptureDecodeError,
    CaptureFormatError,
    CaptureIOError,
    StanzaParseError,
    SourceNotAvailable,
)
from .parsers import (
    CaptureSource,
    CaptureSourceFactory,
    PcapStreamSource,
    XmppDumpStreamSource,
    StanzaReconstructor,
    parse_stanzas,
)
from .orchestrator import iter_packets, read_packets, packets_to_dataframe
from . import orchestrator


__all__ = [
    "orchestrator",
    "PacketRecord",
    "TcpFlag",
    "XmppTraceError",
    "CaptureDecodeError",
    "CaptureFormatError",
    "CaptureIOError",
    "StanzaParseError",
    "SourceNotAvailable",
    "CaptureSource",
    "CaptureSourceFactory",
    "PcapStreamSource",
    "XmppDumpStreamSource",
    "StanzaReconstructor",
    "parse_stanzas",
    "iter_packets",
    "read_packets",
    "packets_to_dataframe",
]
