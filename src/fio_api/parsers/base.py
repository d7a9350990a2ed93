"""Codecs for the bank's number and date formats."""

import re
from datetime import date, datetime

from ..utils.error_handler import DecodeError


DATE_FORMAT = "%d.%m.%Y"
REQUEST_DATE_FORMAT = "%Y-%m-%d"

_DATE_PATTERN = re.compile(r'\d{2}\.\d{2}\.\d{4}')
_AMOUNT_PATTERN = re.compile(r'[+-]?[0-9]+(,[0-9]+)?')


def decode_amount(value: str, field: str = "amount") -> float:
    """Convert a decimal-comma number ("4789,51") to float.

    Only an optional sign, ASCII digits and a single decimal comma are
    accepted; the bank never sends thousands separators or exponents.
    """
    raw = value
    value = value.strip()
    if not _AMOUNT_PATTERN.fullmatch(value):
        raise DecodeError(field, raw, "decimal comma number, e.g. 4789,51")
    return float(value.replace(',', '.', 1))


def decode_date(value: str, field: str = "date") -> date:
    """Parse a DD.MM.YYYY date, rejecting any other shape"""
    raw = value
    value = value.strip()
    if not _DATE_PATTERN.fullmatch(value):
        raise DecodeError(field, raw, "DD.MM.YYYY")
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError as e:
        raise DecodeError(field, raw, "DD.MM.YYYY") from e


def decode_unsigned(value: str, field: str) -> int:
    """Parse a non-negative integer such as a transaction id"""
    value_stripped = value.strip()
    if not value_stripped.isdecimal():
        raise DecodeError(field, value, "unsigned integer")
    return int(value_stripped)


def encode_request_date(value: date) -> str:
    """Format a date the way request URLs expect it (YYYY-MM-DD)"""
    return value.strftime(REQUEST_DATE_FORMAT)
