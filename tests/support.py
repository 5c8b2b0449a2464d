"""
Utilidades compartidas por los tests: servidor de eco en un hilo y
servidores UDP "dobles" que responden mal a propósito.
"""

import socket
import threading
import time
from contextlib import contextmanager
from typing import Callable, Optional, Sequence

from echo_server.echo_server import AsyncEchoServer

LOCALHOST = "127.0.0.1"
JOIN_TIMEOUT = 5.0


@contextmanager
def running_server(host: str = LOCALHOST, port: int = 0):
    """Levanta un AsyncEchoServer en un hilo y lo detiene al salir."""
    server = AsyncEchoServer(host=host, port=port, handle_signals=False)
    thread = threading.Thread(target=server.run, name="TestEchoServer", daemon=True)
    thread.start()
    try:
        yield server
    finally:
        server.stop()
        thread.join(timeout=JOIN_TIMEOUT)


class FakeReplyServer:
    """
    Servidor UDP bloqueante que responde con transform(datos) en lugar
    de los datos recibidos. `delays` demora las primeras respuestas y
    `before_reply(addr)` corre antes de cada respuesta.
    """

    def __init__(self, transform: Callable[[bytes], bytes] = lambda data: data,
                 delays: Sequence[float] = (), before_reply: Optional[Callable[[tuple], None]] = None):
        self.transform = transform
        self.delays = list(delays)
        self.before_reply = before_reply
        self.sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        self.sock.bind((LOCALHOST, 0))
        self.sock.settimeout(0.1)
        self.port = self.sock.getsockname()[1]
        self._running = threading.Event()
        self._thread = threading.Thread(target=self._serve, daemon=True)

    def __enter__(self) -> "FakeReplyServer":
        self._running.set()
        self._thread.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._running.clear()
        self._thread.join(timeout=JOIN_TIMEOUT)
        self.sock.close()

    def _serve(self) -> None:
        while self._running.is_set():
            try:
                data, addr = self.sock.recvfrom(0x10000)
            except socket.timeout:
                continue
            if self.delays:
                time.sleep(self.delays.pop(0))
            if self.before_reply is not None:
                self.before_reply(addr)
            self.sock.sendto(self.transform(data), addr)


def ipv6_loopback_available() -> bool:
    try:
        with socket.socket(socket.AF_INET6, socket.SOCK_DGRAM) as skt:
            skt.bind(("::1", 0))
        return True
    except OSError:
        return False
