import socket

from echo_protocol.endpoint import resolve_endpoint
from echo_protocol.errors import TransportError


def get_udp_socket(host: str, port: int, reuse_address: bool = True) -> socket.socket:
    family, sockaddr = resolve_endpoint(host, port, passive=True)

    try:
        skt = socket.socket(family, socket.SOCK_DGRAM)
    except OSError as e:
        raise TransportError(f"Cannot open socket: {e}", e) from e

    try:
        if reuse_address:
            # Permite volver a bindear el puerto apenas termina otra instancia
            skt.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        skt.bind(sockaddr)
    except OSError as e:
        skt.close()
        raise TransportError(f"Bind failed on {host}:{port}: {e}", e) from e

    return skt
