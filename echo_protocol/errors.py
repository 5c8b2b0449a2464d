"""
Jerarquía de errores del servicio de eco.

Del lado del servidor, los errores de transporte se registran y el loop
sigue recibiendo. Del lado del cliente, todos se propagan a quien llama.
"""

from typing import Optional


class EchoError(Exception):
    """Error base de una operación de eco."""


class TransportError(EchoError):
    """Falla de la capa de red (bind, envío, recepción, timeout, etc.)."""

    def __init__(self, message: str, cause: Optional[OSError] = None):
        super().__init__(message)
        self.cause = cause


class ShapeMismatch(EchoError):
    """La respuesta tiene distinta longitud que el pedido."""

    def __init__(self, expected: int, received: int):
        super().__init__(
            f"Different size of reply and request: expected {expected} bytes, received {received}"
        )
        self.expected = expected
        self.received = received


class ContentMismatch(EchoError):
    """La respuesta tiene la misma longitud pero difiere en algún byte."""

    def __init__(self, offset: int):
        super().__init__(f"Different data value of request and reply at offset {offset}")
        self.offset = offset
