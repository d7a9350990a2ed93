"""Decoding of transaction rows into TransactionRecord."""

import logging
from typing import Dict, List, Mapping

from .base import decode_amount, decode_date, decode_unsigned
from ..models.core import AnyTransactionType, TransactionRecord, TransactionType, UnknownTransactionType
from ..utils.error_handler import ResponseFramingError


logger = logging.getLogger(__name__)


# Native column headers of the transaction export, in the order the bank sends them
COLUMN_ID = "ID pohybu"
COLUMN_DATE = "Datum"
COLUMN_AMOUNT = "Objem"
COLUMN_CURRENCY = "Měna"

TRANSACTION_COLUMNS: Dict[str, str] = {
    COLUMN_ID: 'id',
    COLUMN_DATE: 'date',
    COLUMN_AMOUNT: 'amount',
    COLUMN_CURRENCY: 'currency',
    "Protiúčet": 'counter_account',
    "Název protiúčtu": 'counter_account_name',
    "Kód banky": 'bank_code',
    "Název banky": 'bank_name',
    "KS": 'constant_symbol',
    "VS": 'variable_symbol',
    "SS": 'specific_symbol',
    "Uživatelská identifikace": 'user_identification',
    "Zpráva pro příjemce": 'message',
    "Typ": 'transaction_type',
    "Provedl": 'performer',
    "Upřesnění": 'note',
    "Komentář": 'comment',
    "BIC": 'bic',
    "ID pokynu": 'instruction_id',
}

FIELD_COLUMNS: Dict[str, str] = {field: column for column, field in TRANSACTION_COLUMNS.items()}

REQUIRED_COLUMNS = (COLUMN_ID, COLUMN_DATE, COLUMN_AMOUNT, COLUMN_CURRENCY)

_TEXT_FIELDS = (
    'counter_account', 'counter_account_name', 'bank_code', 'constant_symbol',
    'variable_symbol', 'specific_symbol', 'user_identification', 'message',
    'performer', 'note', 'comment', 'bic', 'instruction_id',
)


def decode_transaction_type(label: str) -> AnyTransactionType:
    """Exact label match; labels not in the closed set are kept verbatim"""
    try:
        return TransactionType(label)
    except ValueError:
        logger.debug(f"Unknown transaction type label: {label!r}")
        return UnknownTransactionType(label)


def validate_header(header: List[str]) -> None:
    """Check the header row carries every required column exactly once"""
    names = [name.strip() for name in header]
    repeated = sorted({name for name in names if names.count(name) > 1})
    if repeated:
        raise ResponseFramingError(
            f"Header row repeats columns {repeated}: {header}"
        )
    missing = [column for column in REQUIRED_COLUMNS if column not in names]
    if missing:
        raise ResponseFramingError(
            f"Header row is missing required columns {missing}: {header}"
        )


def decode_record(row: Mapping[str, str]) -> TransactionRecord:
    """Map one row (native column name -> raw text) to a TransactionRecord.

    Raises DecodeError on the first field that does not decode; the caller
    decides whether that ends the stream.
    """
    def text(field: str) -> str:
        return (row.get(FIELD_COLUMNS[field]) or '').strip()

    values = {field: text(field) for field in _TEXT_FIELDS}
    bank_name = text('bank_name')
    type_label = text('transaction_type')

    return TransactionRecord(
        id=decode_unsigned(row.get(COLUMN_ID, ''), COLUMN_ID),
        date=decode_date(row.get(COLUMN_DATE, ''), COLUMN_DATE),
        amount=decode_amount(row.get(COLUMN_AMOUNT, ''), COLUMN_AMOUNT),
        currency=text('currency'),
        bank_name=bank_name or None,
        transaction_type=decode_transaction_type(type_label) if type_label else None,
        **values,
    )
