"""
Definiciones compartidas entre el servidor y el cliente de eco UDP.
"""

from .const import (
    DEFAULT_HOST, DEFAULT_PORT, BUFFER_SIZE,
    MESSAGE_SIZES, ECHO_REPEAT, FILLER_BYTE
)
from .errors import EchoError, TransportError, ShapeMismatch, ContentMismatch
from .endpoint import resolve_endpoint, same_endpoint

__all__ = [
    # Configuración por defecto
    'DEFAULT_HOST', 'DEFAULT_PORT', 'BUFFER_SIZE',
    'MESSAGE_SIZES', 'ECHO_REPEAT', 'FILLER_BYTE',

    # Errores
    'EchoError', 'TransportError', 'ShapeMismatch', 'ContentMismatch',

    # Endpoints
    'resolve_endpoint', 'same_endpoint'
]
