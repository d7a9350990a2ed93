"""Client for the Fio banka REST export/import API."""

__version__ = "0.1.0"

from .client.http import FioClient
from .client.pacer import RequestPacer
from .models.core import (
    TransactionRecord,
    TransactionType,
    UnknownTransactionType,
)
from .models.export import (
    ById,
    ExportFormat,
    Last,
    LastStatement,
    Merchant,
    Periods,
    SetLastDate,
    SetLastId,
)
from .models.period import FioPeriod
from .parsers.response_reader import FioResponse, ResponseInfo
from .utils.error_handler import FioError

__all__ = [
    '__version__',
    'ById',
    'ExportFormat',
    'FioClient',
    'FioError',
    'FioPeriod',
    'FioResponse',
    'Last',
    'LastStatement',
    'Merchant',
    'Periods',
    'RequestPacer',
    'ResponseInfo',
    'SetLastDate',
    'SetLastId',
    'TransactionRecord',
    'TransactionType',
    'UnknownTransactionType',
]
