import ipaddress
from typing import Optional, Tuple


def stringify_address(addr: int, port: int) -> str:
    """Return the ``a.b.c.d:port`` form of an IPv4 ``addr`` and TCP ``port``."""
    return f"{ipaddress.IPv4Address(addr & 0xFFFFFFFF)}:{port}"


def parse_endpoint(endpoint: str) -> Optional[Tuple[int, int]]:
    """Split ``a.b.c.d:port`` into integer address and port.

    Returns ``None`` when ``endpoint`` is not in that form.
    """
    host, sep, port = endpoint.strip().rpartition(":")
    if not sep or not port.isdigit():
        return None
    try:
        addr = ipaddress.IPv4Address(host)
    except ValueError:
        return None
    port_num = int(port)
    if port_num > 0xFFFF:
        return None
    return int(addr), port_num
