# const.py — valores por defecto del servicio de eco

# ==== Red ====
DEFAULT_HOST = "::1"     # Loopback IPv6
DEFAULT_PORT = 12122
MAX_PORT = 0xFFFF

# ==== Servidor ====
BUFFER_SIZE = 0x10000    # 64 KiB, alcanza para cualquier datagrama UDP

# Reintentos ante errores de recepción consecutivos (segundos)
RECV_RETRY_BACKOFF = 0.001
RECV_RETRY_BACKOFF_MAX = 0.5

# ==== Cliente (prueba de carga) ====
# Tamaños no monótonos a propósito: el buffer de respuesta cambia en cada paso
MESSAGE_SIZES = (0, 1, 3, 7, 234, 6432, 23221, 3311, 34, 4521, 333)
ECHO_REPEAT = 1024 * 10
FILLER_BYTE = b"x"


def validate_port(port: int) -> int:
    """Valida que el puerto entre en 16 bits sin signo."""
    if not 0 <= port <= MAX_PORT:
        raise ValueError(f"Puerto fuera de rango: {port} (0-{MAX_PORT})")
    return port
