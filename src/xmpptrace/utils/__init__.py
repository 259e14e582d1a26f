from .bits import ByteOrder, bytes_to_int, bits_to_string, bytes_to_hex
from .net import stringify_address, parse_endpoint

__all__ = [
    "ByteOrder",
    "bytes_to_int",
    "bits_to_string",
    "bytes_to_hex",
    "stringify_address",
    "parse_endpoint",
]
