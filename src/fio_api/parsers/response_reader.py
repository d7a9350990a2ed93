"""Two-phase reader for the bank's CSV exports.

A response body is one byte stream holding two sections::

    accountId;2345678901          <- info block, key;value lines
    bankId;2010
    ...
                                  <- boundary (blank line)
    ID pohybu;Datum;Objem;...     <- header row
    26962199069;30.06.2021;...    <- data rows

The info block ends at the first row that does not have exactly two columns.
A row with fewer than two columns (blank or delimiter-less) is the boundary;
it and any further such rows are skipped and the next row is the header. A
row with more than two columns met while still reading info is the header
itself (the server left out the blank separator). End of input is legal at
any point.
"""

import csv
import io
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import BinaryIO, Dict, Iterator, List, Optional, Union

from .base import decode_amount, decode_date, decode_unsigned
from .record_decoder import decode_record, validate_header
from ..models.core import TransactionRecord
from ..utils.error_handler import (
    DecodeError,
    InfoAlreadyConsumedError,
    MissingFieldError,
    ResponseFramingError,
)


logger = logging.getLogger(__name__)

DELIMITER = ';'
INFO_COLUMNS = 2


class ReaderState(Enum):
    """Lifecycle of a FioResponse"""
    FRESH = "fresh"
    INFO_READ = "info_read"
    DATA_CONSUMING = "data_consuming"
    EXHAUSTED = "exhausted"


class ResponseInfo(Mapping):
    """Key/value metadata from the info block of a response.

    Keys are whatever the server sent. Typed accessors raise
    MissingFieldError when the key is absent or empty, and DecodeError
    when the value is malformed.
    """

    def __init__(self, headers: Dict[str, str]):
        self._headers = MappingProxyType(dict(headers))

    def __getitem__(self, key: str) -> str:
        return self._headers[key]

    def __iter__(self):
        return iter(self._headers)

    def __len__(self) -> int:
        return len(self._headers)

    def __repr__(self) -> str:
        return f"ResponseInfo({dict(self._headers)!r})"

    def require(self, key: str) -> str:
        """Return the raw value of ``key`` or raise MissingFieldError"""
        value = self._headers.get(key)
        if value is None or not value.strip():
            raise MissingFieldError(key)
        return value.strip()

    # Account
    def account_id(self) -> str:
        return self.require('accountId')

    def bank_id(self) -> str:
        return self.require('bankId')

    def currency(self) -> str:
        return self.require('currency')

    def iban(self) -> str:
        return self.require('iban')

    def bic(self) -> str:
        return self.require('bic')

    # Range of the report
    def opening_balance(self) -> float:
        return decode_amount(self.require('openingBalance'), 'openingBalance')

    def closing_balance(self) -> float:
        return decode_amount(self.require('closingBalance'), 'closingBalance')

    def date_start(self) -> date:
        return decode_date(self.require('dateStart'), 'dateStart')

    def date_end(self) -> date:
        return decode_date(self.require('dateEnd'), 'dateEnd')

    def id_from(self) -> int:
        return decode_unsigned(self.require('idFrom'), 'idFrom')

    def id_to(self) -> int:
        return decode_unsigned(self.require('idTo'), 'idTo')

    def id_last_download(self) -> int:
        return decode_unsigned(self.require('idLastDownload'), 'idLastDownload')

    # Official statements
    def year_list(self) -> int:
        return decode_unsigned(self.require('yearList'), 'yearList')

    def id_list(self) -> int:
        return decode_unsigned(self.require('idList'), 'idList')


@dataclass
class RecordResult:
    """Outcome of decoding one data row"""
    line_number: int
    record: Optional[TransactionRecord] = None
    error: Optional[DecodeError] = None
    raw: Optional[Dict[str, str]] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> TransactionRecord:
        """Return the record or raise the decode error of this row"""
        if self.error is not None:
            raise self.error
        return self.record


class FioResponse:
    """Single-pass reader over one response body.

    ``read_info()`` may be called once, before any data is read.
    ``begin_data()`` skips the info block when it was not read, consumes the
    header row and returns the lazy iterator of RecordResult; repeated calls
    return the same iterator.
    """

    def __init__(self, stream: BinaryIO, encoding: str = 'utf-8-sig'):
        # utf-8-sig drops a byte-order mark at the very start
        self._text = io.TextIOWrapper(stream, encoding=encoding, newline='')
        self._reader = csv.reader(self._text, delimiter=DELIMITER)
        self._state = ReaderState.FRESH
        self._info: Optional[ResponseInfo] = None
        self._pending_header: Optional[List[str]] = None
        self._header: Optional[List[str]] = None
        self._data: Optional[Iterator[RecordResult]] = None

    @classmethod
    def from_bytes(cls, content: bytes) -> 'FioResponse':
        return cls(io.BytesIO(content))

    @classmethod
    def from_path(cls, file_path: Union[str, Path]) -> 'FioResponse':
        return cls.from_bytes(Path(file_path).read_bytes())

    @classmethod
    def from_http(cls, response) -> 'FioResponse':
        """Wrap the body of an ``httpx.Response``"""
        return cls.from_bytes(response.content)

    @property
    def state(self) -> ReaderState:
        return self._state

    @property
    def info(self) -> Optional[ResponseInfo]:
        """Info block returned by read_info(), None before that"""
        return self._info

    @property
    def header(self) -> Optional[List[str]]:
        """Column names of the data section once begin_data() ran"""
        return self._header

    def read_info(self) -> ResponseInfo:
        """Read the info block; allowed once, and only before data reading"""
        if self._state is not ReaderState.FRESH:
            raise InfoAlreadyConsumedError(
                f"Info block already consumed (reader state: {self._state.value})"
            )
        self._info = ResponseInfo(self._read_info_block())
        self._state = ReaderState.INFO_READ
        logger.debug(f"Read {len(self._info)} info fields")
        return self._info

    def begin_data(self) -> Iterator[RecordResult]:
        """Start (or continue) reading the data section"""
        if self._data is not None:
            return self._data

        if self._state is ReaderState.FRESH:
            skipped = self._read_info_block()
            logger.debug(f"Skipped info block with {len(skipped)} fields")

        header, self._pending_header = self._pending_header, None
        if header is None:
            logger.debug("Response carries no data section")
            self._state = ReaderState.EXHAUSTED
            self._data = iter(())
            return self._data

        validate_header(header)
        self._header = [name.strip() for name in header]
        self._state = ReaderState.DATA_CONSUMING
        self._data = self._iter_records(self._header)
        return self._data

    def data(self) -> Iterator[RecordResult]:
        return self.begin_data()

    def transactions(self) -> Iterator[TransactionRecord]:
        """Decoded records only; rows that fail to decode are logged and skipped"""
        for result in self.begin_data():
            if result.ok:
                yield result.record
            else:
                logger.warning(f"Skipping malformed row {result.line_number}: {result.error}")

    def records_or_raise(self) -> Iterator[TransactionRecord]:
        """Decoded records; the first row that fails to decode raises its error"""
        for result in self.begin_data():
            yield result.unwrap()

    def _next_row(self) -> Optional[List[str]]:
        try:
            return next(self._reader)
        except StopIteration:
            return None
        except (csv.Error, UnicodeDecodeError) as e:
            self._state = ReaderState.EXHAUSTED
            raise ResponseFramingError(
                f"Malformed response near line {self._reader.line_num}: {e}"
            ) from e

    def _read_info_block(self) -> Dict[str, str]:
        info: Dict[str, str] = {}

        while True:
            row = self._next_row()
            if row is None:
                return info
            if len(row) == INFO_COLUMNS:
                key, value = row
                info[key.strip()] = value
                continue
            if len(row) > INFO_COLUMNS:
                self._pending_header = row
                return info
            break

        # boundary reached: skip separator lines up to the header row
        while True:
            row = self._next_row()
            if row is None:
                return info
            if len(row) >= INFO_COLUMNS:
                self._pending_header = row
                return info

    def _iter_records(self, header: List[str]) -> Iterator[RecordResult]:
        width = len(header)
        decoded = failed = 0

        while True:
            row = self._next_row()
            if row is None:
                break
            line_number = self._reader.line_num
            if not row:
                continue
            if len(row) != width:
                self._state = ReaderState.EXHAUSTED
                raise ResponseFramingError(
                    f"Line {line_number}: {len(row)} columns, header has {width}"
                )
            raw = dict(zip(header, row))
            try:
                record = decode_record(raw)
            except DecodeError as e:
                failed += 1
                yield RecordResult(line_number, error=e, raw=raw)
                continue
            decoded += 1
            yield RecordResult(line_number, record=record)

        self._state = ReaderState.EXHAUSTED
        logger.info(f"Decoded {decoded} records ({failed} failed)")
