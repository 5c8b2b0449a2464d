import sys
import threading
from typing import Optional, TextIO


class SynchronizedOutput:
    """
    Salida de texto compartida entre hilos. Cada línea se escribe completa
    bajo un lock, así no se mezclan líneas de distintos workers.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream if stream is not None else sys.stdout
        self._lock = threading.Lock()

    def write_line(self, text: str) -> None:
        with self._lock:
            self._stream.write(text + "\n")
            self._stream.flush()
