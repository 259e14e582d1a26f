from .base import CaptureSource
from .pcap_source import PcapStreamSource, PcapGlobalHeader
from .xmppdump_source import XmppDumpStreamSource
from .stanza import StanzaReconstructor, StanzaAttempt, StanzaOutcome, parse_stanzas
from .factory import CaptureSourceFactory

__all__ = [
    "CaptureSource",
    "PcapStreamSource",
    "PcapGlobalHeader",
    "XmppDumpStreamSource",
    "StanzaReconstructor",
    "StanzaAttempt",
    "StanzaOutcome",
    "parse_stanzas",
    "CaptureSourceFactory",
]
