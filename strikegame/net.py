"""Address parsing and formatting for the game's TCP endpoints."""

from __future__ import annotations

import re
import socket

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class AddressError(ValueError):
    """An address, port or protocol name could not be used."""


def parse_port(port: str | int) -> int:
    """Parse a port the lenient way: leading digits only, wrapped to 16 bits; 0 is rejected."""
    if port is None:
        raise AddressError("no port given")
    if isinstance(port, int):
        value = port
    else:
        match = _LEADING_INT.match(port)
        value = int(match.group(1)) if match else 0
    value %= 1 << 16
    if value == 0:
        raise AddressError(f"invalid port: {port!r}")
    return value


def parse_address(host: str, port: str | int) -> tuple[int, tuple]:
    """Turn a numeric IPv4 or IPv6 host and a port into (family, sockaddr)."""
    if host is None or port is None:
        raise AddressError("host and port are required")
    number = parse_port(port)
    try:
        socket.inet_pton(socket.AF_INET, host)
    except OSError:
        pass
    else:
        return socket.AF_INET, (host, number)
    try:
        socket.inet_pton(socket.AF_INET6, host)
    except OSError:
        raise AddressError(f"not a numeric IP address: {host!r}") from None
    return socket.AF_INET6, (host, number, 0, 0)


def format_address(family: int, sockaddr: tuple) -> str:
    """Describe an endpoint as 'IPv<version> <address> <port>'."""
    if family == socket.AF_INET:
        version = 4
    elif family == socket.AF_INET6:
        version = 6
    else:
        raise AddressError(f"unknown protocol family: {family}")
    host = str(sockaddr[0]).split("%", 1)[0]
    try:
        canonical = socket.inet_ntop(family, socket.inet_pton(family, host))
    except OSError:
        raise AddressError(f"bad address for family: {host!r}") from None
    return f"IPv{version} {canonical} {sockaddr[1]}"


def server_address(proto: str, port: str | int) -> tuple[int, tuple]:
    """Return the wildcard listening address for 'v4' or 'v6'."""
    number = parse_port(port)
    if proto == "v4":
        return socket.AF_INET, ("0.0.0.0", number)
    if proto == "v6":
        return socket.AF_INET6, ("::", number, 0, 0)
    raise AddressError(f"unknown protocol: {proto!r}")