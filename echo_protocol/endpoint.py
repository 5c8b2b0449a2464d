import socket
from typing import Tuple

from .const import validate_port
from .errors import TransportError


def resolve_endpoint(host: str, port: int, passive: bool = False) -> Tuple[int, tuple]:
    """
    Resuelve host:port a (familia, sockaddr) para un socket UDP.
    Acepta tanto direcciones IPv4 como IPv6.
    """
    flags = socket.AI_PASSIVE if passive else 0
    try:
        validate_port(port)
    except ValueError as e:
        raise TransportError(f"Invalid address {host}:{port}: {e}") from e
    try:
        infos = socket.getaddrinfo(host, port, type=socket.SOCK_DGRAM, flags=flags)
    except OSError as e:
        raise TransportError(f"Invalid address {host}:{port}: {e}", e) from e

    family, _, _, _, sockaddr = infos[0]
    return family, sockaddr


def same_endpoint(a: tuple, b: tuple) -> bool:
    """Compara (host, puerto); en IPv6 ignora flowinfo y scope id."""
    return a[:2] == b[:2]
