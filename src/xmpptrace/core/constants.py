"""Centralized constant definitions for xmpptrace."""

from __future__ import annotations

# ---------------------------------------------------------------------------
# libpcap global header
# ---------------------------------------------------------------------------
MAGIC_PCAP_LE: bytes = b"\xd4\xc3\xb2\xa1"  # Little-endian PCAP
MAGIC_PCAP_BE: bytes = b"\xa1\xb2\xc3\xd4"  # Big-endian PCAP

PCAP_GLOBAL_HEADER_LEN = 24
PCAP_RECORD_HEADER_LEN = 16

# Link layer codes from libpcap bpf.h / pcap-common.c
LINKTYPE_ETHERNET = 1
LINKTYPE_LINUX_SLL = 113

ETHERTYPE_IPV4: bytes = b"\x08\x00"
ETHERTYPE_VLAN: bytes = b"\x81\x00"

ETHERNET_HEADER_LEN = 14
VLAN_HEADER_LEN = 18
SLL_HEADER_LEN = 16

# ---------------------------------------------------------------------------
# IPv4 / TCP
# ---------------------------------------------------------------------------
IP_VERSION_4 = 4
IP_PROTO_TCP = 6
IPV4_MIN_HEADER_LEN = 20
TCP_MIN_HEADER_LEN = 20

# ---------------------------------------------------------------------------
# Payload handling
# ---------------------------------------------------------------------------
UNREADABLE_TEXT = "[data not readable]"
MAX_TEXT_PAYLOAD = 65535
TRUNCATION_MARKER = "\n[TRUNCATED]"

# xmppdump flag letters
DUMP_FLAG_BITS: dict[str, int] = {
    "U": 0x20,
    "A": 0x10,
    "P": 0x08,
    "R": 0x04,
    "S": 0x02,
    "F": 0x01,
}

__all__ = [
    "MAGIC_PCAP_LE",
    "MAGIC_PCAP_BE",
    "PCAP_GLOBAL_HEADER_LEN",
    "PCAP_RECORD_HEADER_LEN",
    "LINKTYPE_ETHERNET",
    "LINKTYPE_LINUX_SLL",
    "ETHERTYPE_IPV4",
    "ETHERTYPE_VLAN",
    "ETHERNET_HEADER_LEN",
    "VLAN_HEADER_LEN",
    "SLL_HEADER_LEN",
    "IP_VERSION_4",
    "IP_PROTO_TCP",
    "IPV4_MIN_HEADER_LEN",
    "TCP_MIN_HEADER_LEN",
    "UNREADABLE_TEXT",
    "MAX_TEXT_PAYLOAD",
    "TRUNCATION_MARKER",
    "DUMP_FLAG_BITS",
]
