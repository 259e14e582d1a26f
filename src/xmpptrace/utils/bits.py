"""Helpers for reading header fields out of raw byte buffers.

IP and TCP headers carry fields of non-standard widths, in an order that
differs from the capture file header, so fields are read with an explicit
byte order rather than through :mod:`struct` format strings.
"""

from __future__ import annotations

from enum import Enum


class ByteOrder(Enum):
    BIG_ENDIAN = "big"
    LITTLE_ENDIAN = "little"


def bytes_to_int(buf: bytes, offset: int, size: int, order: ByteOrder) -> int:
    """Interpret ``size`` bytes of ``buf`` at ``offset`` as an unsigned integer.

    ``size`` must be between 1 and 7. Returns ``-1`` when the span is not
    allowed or runs past the end of ``buf``; callers must give up on the
    current record in that case.
    """
    if size < 1 or size > 7 or offset < 0 or offset + size > len(buf):
        return -1
    result = 0
    for i in range(size):
        byte = buf[offset + i]
        if order is ByteOrder.BIG_ENDIAN:
            result |= byte << (8 * (size - 1 - i))
        else:
            result |= byte << (8 * i)
    return result


def bits_to_string(buf: bytes, offset: int, count: int) -> str:
    """Return a binary rendering of ``count`` bits of ``buf`` from bit ``offset``.

    Bits are listed least significant first within each byte; a space
    follows every 8 bits and a newline every 32.
    """
    out = []
    for i in range(offset, offset + count):
        out.append("1" if buf[i // 8] & (1 << (i % 8)) else "0")
        if i > offset and (i + 1) % 8 == 0:
            out.append(" ")
        if i > offset and (i + 1) % 32 == 0:
            out.append("\n")
    return "".join(out)


def bytes_to_hex(buf: bytes, offset: int, count: int) -> str:
    """Return a hex rendering of ``count`` bytes, four bytes per line."""
    out = []
    for i in range(offset, offset + count):
        out.append(f"{buf[i]:02X} ")
        if i > offset and (i + 1) % 4 == 0:
            out.append("\n")
    return "".join(out)


__all__ = ["ByteOrder", "bytes_to_int", "bits_to_string", "bytes_to_hex"]
