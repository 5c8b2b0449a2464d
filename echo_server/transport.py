"""
Envoltorio asíncrono sobre un socket UDP.
Las operaciones se suspenden en el event loop de asyncio, ningún hilo se bloquea.
"""

import asyncio
import socket
from typing import Tuple


class AsyncUDPSocket:
    def __init__(self, skt: socket.socket):
        self._skt = skt
        self._skt.setblocking(False)

    async def recvfrom_into(self, buffer: bytearray) -> Tuple[int, tuple]:
        """Espera un datagrama y lo copia al buffer. Devuelve (bytes, remitente)."""
        return await asyncio.get_running_loop().sock_recvfrom_into(self._skt, buffer)

    async def sendto(self, data, address: tuple) -> int:
        return await asyncio.get_running_loop().sock_sendto(self._skt, data, address)

    def getsockname(self) -> tuple:
        return self._skt.getsockname()

    def close(self) -> None:
        self._skt.close()
