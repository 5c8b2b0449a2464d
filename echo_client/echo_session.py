#!/usr/bin/env python3
"""
Sesión de eco UDP sincrónica: envía un pedido, espera una única respuesta
y verifica que sea idéntica byte a byte.
"""

import logging
import socket
import time
from collections import deque
from typing import Optional

from echo_protocol.const import BUFFER_SIZE
from echo_protocol.errors import TransportError, ShapeMismatch, ContentMismatch
from echo_protocol.endpoint import resolve_endpoint, same_endpoint

logger = logging.getLogger(__name__)

# Pedidos vencidos por timeout cuya respuesta todavía puede llegar
MAX_UNANSWERED = 16


class EchoSession:
    """
    Encapsula un socket UDP bloqueante contra un endpoint remoto fijo.

    Sin timeout no guarda estado entre llamadas salvo el socket y el endpoint.
    Con timeout recuerda los últimos pedidos vencidos, para descartar sus
    respuestas tardías en lugar de tomarlas como respuesta del pedido actual.
    """

    def __init__(self, host: str, port: int, timeout: Optional[float] = None):
        """
        Inicializa la sesión.

        Args:
            host (str): IP del servidor.
            port (int): Puerto del servidor.
            timeout (float | None): Espera máxima por respuesta en segundos.
                None bloquea indefinidamente.
        """
        self.host = host
        self.port = port
        self.timeout = timeout
        family, self.endpoint = resolve_endpoint(host, port)
        try:
            self.sock = socket.socket(family, socket.SOCK_DGRAM)
        except OSError as e:
            raise TransportError(f"Cannot open socket: {e}", e) from e
        self.sock.settimeout(timeout)
        self._unanswered = deque(maxlen=MAX_UNANSWERED)

    def echo(self, request: bytes) -> None:
        """
        Envía `request` y verifica que la respuesta sea igual.

        Args:
            request (bytes): Datos a enviar (puede ser vacío).

        Raises:
            ShapeMismatch: Si la respuesta tiene otra longitud.
            ContentMismatch: Si la longitud coincide pero no el contenido.
            TransportError: Ante cualquier error de red (incluye timeout).
        """
        # Un byte extra para detectar respuestas más largas que el pedido
        size = max([len(request)] + [len(old) for old in self._unanswered]) + 1
        reply = bytearray(size)

        try:
            if self._unanswered:
                self._discard_pending()
            self.sock.sendto(request, self.endpoint)
            reply_length = self._receive_reply(request, reply)
        except socket.timeout as e:
            self._unanswered.append(bytes(request))
            raise TransportError(f"Echo to {self.host}:{self.port} failed: {e}", e) from e
        except OSError as e:
            raise TransportError(f"Echo to {self.host}:{self.port} failed: {e}", e) from e

        if reply_length != len(request):
            raise ShapeMismatch(len(request), reply_length)
        if reply[:reply_length] != request:
            raise ContentMismatch(_first_difference(request, reply))

    def _receive_reply(self, request: bytes, reply: bytearray) -> int:
        """
        Espera la respuesta del endpoint remoto. Ignora datagramas de otros
        remitentes y respuestas tardías de pedidos vencidos.

        Returns:
            int: Cantidad de bytes recibidos en `reply`.
        """
        deadline = None if self.timeout is None else time.monotonic() + self.timeout
        try:
            while True:
                if deadline is not None:
                    remaining = deadline - time.monotonic()
                    if remaining <= 0:
                        raise socket.timeout("timed out")
                    self.sock.settimeout(remaining)

                reply_length, sender = self.sock.recvfrom_into(reply)
                if not same_endpoint(sender, self.endpoint):
                    logger.debug(f"Ignoring {reply_length} bytes from unexpected peer {sender}")
                    continue
                if self._is_late_reply(request, reply, reply_length):
                    logger.debug(f"Ignoring late reply of {reply_length} bytes")
                    continue
                return reply_length
        finally:
            self.sock.settimeout(self.timeout)

    def _is_late_reply(self, request: bytes, reply: bytearray, reply_length: int) -> bool:
        data = reply[:reply_length]
        if data == request:
            return False
        for old in self._unanswered:
            if old == data:
                self._unanswered.remove(old)
                return True
        return False

    def _discard_pending(self) -> None:
        """Descarta los datagramas ya encolados en el socket."""
        scratch = bytearray(BUFFER_SIZE)
        self.sock.setblocking(False)
        try:
            while True:
                length, _ = self.sock.recvfrom_into(scratch)
                data = scratch[:length]
                if data in self._unanswered:
                    self._unanswered.remove(data)
        except BlockingIOError:
            pass
        finally:
            self.sock.settimeout(self.timeout)

    def close(self):
        """
        Cierra el socket.
        """
        self.sock.close()

    def __enter__(self) -> "EchoSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def _first_difference(expected: bytes, received: bytearray) -> int:
    for offset, (a, b) in enumerate(zip(expected, received)):
        if a != b:
            return offset
    return min(len(expected), len(received))
