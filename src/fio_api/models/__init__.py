"""Data models and structures"""

from .core import (
    AnyTransactionType,
    FioConfig,
    TransactionRecord,
    TransactionType,
    UnknownTransactionType,
)
from .export import (
    ById,
    ExportFormat,
    ExportRequest,
    Last,
    LastStatement,
    Merchant,
    Periods,
    SetLastDate,
    SetLastId,
)
from .period import FioPeriod

__all__ = [
    'AnyTransactionType',
    'ById',
    'ExportFormat',
    'ExportRequest',
    'FioConfig',
    'FioPeriod',
    'Last',
    'LastStatement',
    'Merchant',
    'Periods',
    'SetLastDate',
    'SetLastId',
    'TransactionRecord',
    'TransactionType',
    'UnknownTransactionType',
]
