"""
Servidor de eco UDP basado en asyncio.
"""

from .echo_server import AsyncEchoServer, ServerState, STOP_SIGNALS
from .server_helpers import get_udp_socket
from .transport import AsyncUDPSocket

__all__ = [
    'AsyncEchoServer', 'ServerState', 'STOP_SIGNALS',
    'AsyncUDPSocket', 'get_udp_socket'
]
