import asyncio
import logging
import signal
import threading
from enum import Enum
from typing import Dict, Optional

from echo_protocol.const import BUFFER_SIZE, RECV_RETRY_BACKOFF, RECV_RETRY_BACKOFF_MAX
from .server_helpers import get_udp_socket
from .transport import AsyncUDPSocket

logger = logging.getLogger(__name__)

# SIGQUIT no existe en Windows
STOP_SIGNALS = tuple(
    getattr(signal, name) for name in ("SIGINT", "SIGTERM", "SIGQUIT") if hasattr(signal, name)
)


class ServerState(Enum):
    AWAITING_RECEIVE = "awaiting-receive"
    AWAITING_SEND = "awaiting-send"


class AsyncEchoServer:
    """
    Servidor de eco UDP sobre asyncio.

    Alterna entre esperar un datagrama y devolverlo al remitente, con un único
    buffer compartido y una sola operación pendiente por vez. Sólo termina
    cuando se llama a stop() (directamente o por SIGINT/SIGTERM/SIGQUIT).
    """

    def __init__(self, host: str, port: int, buffer_size: int = BUFFER_SIZE, handle_signals: bool = True):
        self._host              = host
        self._port              = port
        self._buffer            = bytearray(buffer_size)
        self._skt               = AsyncUDPSocket(get_udp_socket(host, port))
        self._state             = ServerState.AWAITING_RECEIVE
        self._sender            = None
        self._loop              = None
        self._stop_event        = None
        self._stop_requested    = threading.Event()
        # Reentrante: stop() corre en un handler de señal que puede interrumpir
        # al hilo principal mientras serve() tiene tomado el lock
        self._lock              = threading.RLock()
        self._closed            = False
        self._prev_handlers: Dict[int, object] = {}

        self.echoed             = 0
        self.receive_errors     = 0
        self.send_errors        = 0

        if handle_signals:
            self._install_signal_handlers()

    @property
    def address(self) -> tuple:
        return self._skt.getsockname()

    @property
    def state(self) -> ServerState:
        return self._state

    @property
    def last_sender(self) -> Optional[tuple]:
        return self._sender

    def run(self) -> None:
        """Bloquea hasta que se detenga el servidor. Pensado para correr en un hilo propio."""
        try:
            asyncio.run(self.serve())
        finally:
            self.close()

    async def serve(self) -> None:
        stop_event = asyncio.Event()
        with self._lock:
            self._stop_event = stop_event
            self._loop = asyncio.get_running_loop()

        if self._stop_requested.is_set():
            stop_event.set()

        host, port = self.address[:2]
        logger.info(f"UDP echo server listening on {host}:{port}")

        echo_task = asyncio.create_task(self._echo_loop())
        stop_task = asyncio.create_task(stop_event.wait())
        done = set()
        try:
            done, _ = await asyncio.wait({echo_task, stop_task}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            # No se drenan operaciones en curso: se cancelan
            for task in (echo_task, stop_task):
                task.cancel()
            await asyncio.gather(echo_task, stop_task, return_exceptions=True)
            with self._lock:
                self._loop = None
                self._stop_event = None

        if echo_task in done:
            # El loop sólo termina solo por un error inesperado
            echo_task.result()

        logger.info(f"Server stopped after {self.echoed} echos")

    def stop(self) -> None:
        """Detiene el servidor. Seguro de llamar desde cualquier hilo, incluso antes de serve()."""
        self._stop_requested.set()
        with self._lock:
            if self._loop is not None:
                self._loop.call_soon_threadsafe(self._stop_event.set)

    def close(self) -> None:
        """Cierra el socket y restaura los handlers de señales (si se llama desde el hilo principal)."""
        self._restore_signal_handlers()
        if self._closed:
            return
        self._closed = True
        self._skt.close()
        logger.info("Server shutdown complete.")

    async def _echo_loop(self) -> None:
        view = memoryview(self._buffer)
        failures = 0

        while True:
            self._state = ServerState.AWAITING_RECEIVE
            try:
                length, sender = await self._skt.recvfrom_into(self._buffer)
            except OSError as e:
                failures += 1
                self.receive_errors += 1
                logger.warning(f"Receive failed ({failures} in a row): {e}")
                await self._backoff(failures)
                continue

            failures = 0
            self._sender = sender
            self._state = ServerState.AWAITING_SEND
            logger.debug(f"Received {length} bytes from {sender}")

            try:
                await self._skt.sendto(view[:length], sender)
            except OSError as e:
                # Sin reintento: se vuelve a recibir
                self.send_errors += 1
                logger.warning(f"Send to {sender} failed: {e}")
            else:
                self.echoed += 1

    async def _backoff(self, failures: int) -> None:
        # El primer error se reintenta enseguida
        if failures < 2:
            return
        delay = min(RECV_RETRY_BACKOFF * 2 ** (failures - 2), RECV_RETRY_BACKOFF_MAX)
        await asyncio.sleep(delay)

    def _install_signal_handlers(self) -> None:
        if threading.current_thread() is not threading.main_thread():
            logger.debug("Not on the main thread, signal handlers not installed")
            return

        for signum in STOP_SIGNALS:
            self._prev_handlers[signum] = signal.signal(signum, self._on_signal)

    def _restore_signal_handlers(self) -> None:
        if not self._prev_handlers:
            return
        if threading.current_thread() is not threading.main_thread():
            # Sólo el hilo principal puede tocar los handlers; se restauran después
            return
        for signum, handler in self._prev_handlers.items():
            signal.signal(signum, handler)
        self._prev_handlers.clear()

    def _on_signal(self, signum, frame) -> None:
        logger.info(f"Received signal {signal.Signals(signum).name}, stopping server")
        self.stop()
