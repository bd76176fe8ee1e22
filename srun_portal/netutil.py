import ipaddress
import logging
import socket
from typing import Optional, Union

from .errors import IllegalIPv4Error

logger = logging.getLogger(__name__)

PROBE_PORT = 80


def parse_ipv4(value: Union[str, bytes, ipaddress.IPv4Address]) -> ipaddress.IPv4Address:
    """Parse dotted-decimal text or a packed 4-byte address."""
    if isinstance(value, ipaddress.IPv4Address):
        return value
    if not isinstance(value, (str, bytes)):
        raise IllegalIPv4Error(f"illegal ipv4: {value!r}")
    try:
        return ipaddress.IPv4Address(value)
    except ValueError:
        raise IllegalIPv4Error(f"illegal ipv4: {value!r}") from None


def try_parse_ipv4(value: object) -> Optional[ipaddress.IPv4Address]:
    if not value or not isinstance(value, str):
        return None
    try:
        return parse_ipv4(value)
    except IllegalIPv4Error:
        return None


def resolve_local_ip(server: str) -> Optional[ipaddress.IPv4Address]:
    """Local address of the interface that routes towards ``server``.

    Connecting a UDP socket sends nothing; it only selects the route.
    """
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        sock.connect((server, PROBE_PORT))
        address = sock.getsockname()[0]
    except OSError as exc:
        logger.debug("Local address lookup towards %s failed: %s", server, exc)
        return None
    finally:
        sock.close()
    return try_parse_ipv4(address)
