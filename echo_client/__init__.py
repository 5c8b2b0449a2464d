"""
Cliente de eco UDP y prueba de carga concurrente.
"""

__version__ = "1.0.0"

from .echo_session import EchoSession
from .load_test import LoadTestHarness, SizeResult, default_worker_count
from .output import SynchronizedOutput

__all__ = [
    'EchoSession',
    'LoadTestHarness', 'SizeResult', 'default_worker_count',
    'SynchronizedOutput'
]
