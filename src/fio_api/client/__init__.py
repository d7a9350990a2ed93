"""HTTP access to the Fio REST API"""

from .pacer import RequestPacer, REQUEST_RATE
from .http import FioClient, FioClientWithImport

__all__ = [
    'RequestPacer',
    'REQUEST_RATE',
    'FioClient',
    'FioClientWithImport',
]
