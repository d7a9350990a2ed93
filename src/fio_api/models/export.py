"""Read (export) commands of the API and their URL rendering.

Every command is one frozen dataclass carrying only the parameters it needs.
The URL is ``{base}/{command}/{token}/{params}``.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import ClassVar, FrozenSet, Union

from ..parsers.base import encode_request_date
from ..utils.error_handler import InvalidFormatError


FIOAPI_URL_BASE = "https://www.fio.cz/ib_api/rest"
CENSORED_TOKEN = "*CENSORED*"


class ExportFormat(Enum):
    """Output formats; the last four exist only for official statements"""
    CSV = "csv"
    GPC = "gpc"
    HTML = "html"
    JSON = "json"
    OFX = "ofx"
    XML = "xml"
    PDF = "pdf"
    MT940 = "sta"
    CBA_XML = "cba_xml"  # CAMT.053
    SBA_XML = "sba_xml"  # CAMT.053

    @property
    def is_report_only(self) -> bool:
        return self not in TRANSACTION_FORMATS


TRANSACTION_FORMATS: FrozenSet[ExportFormat] = frozenset({
    ExportFormat.CSV,
    ExportFormat.GPC,
    ExportFormat.HTML,
    ExportFormat.JSON,
    ExportFormat.OFX,
    ExportFormat.XML,
})
REPORT_FORMATS: FrozenSet[ExportFormat] = frozenset(ExportFormat)

FormatLike = Union[ExportFormat, str]


def _coerce_format(value: FormatLike, allowed: FrozenSet[ExportFormat], command: str) -> ExportFormat:
    try:
        fmt = value if isinstance(value, ExportFormat) else ExportFormat(str(value).lower())
    except ValueError as e:
        raise InvalidFormatError(f"Unknown format '{value}' for command '{command}'") from e
    if fmt not in allowed:
        raise InvalidFormatError(
            f"Format '{fmt.value}' is only available for statements, not for command '{command}'"
        )
    return fmt


class ExportRequest:
    """Base of all read commands"""

    command: ClassVar[str]
    allowed_formats: ClassVar[FrozenSet[ExportFormat]] = TRANSACTION_FORMATS

    def _check_format(self) -> None:
        # frozen dataclasses need object.__setattr__ to normalize in place
        object.__setattr__(self, 'format', _coerce_format(self.format, self.allowed_formats, self.command))

    @property
    def params(self) -> str:
        raise NotImplementedError

    def build_url(self, token: str, base_url: str = FIOAPI_URL_BASE) -> str:
        return f"{base_url.rstrip('/')}/{self.command}/{token}/{self.params}"

    def censored_url(self, base_url: str = FIOAPI_URL_BASE) -> str:
        """URL safe for logging: the token is replaced"""
        return self.build_url(CENSORED_TOKEN, base_url)


@dataclass(frozen=True)
class Periods(ExportRequest):
    """Transactions over a period"""
    date_start: date
    date_end: date
    format: FormatLike = ExportFormat.CSV

    command: ClassVar[str] = "periods"

    def __post_init__(self):
        self._check_format()

    @property
    def params(self) -> str:
        return (f"{encode_request_date(self.date_start)}/{encode_request_date(self.date_end)}"
                f"/transactions.{self.format.value}")


@dataclass(frozen=True)
class ById(ExportRequest):
    """Official statement identified by year and its number within the year"""
    year: int
    id: int
    format: FormatLike = ExportFormat.CSV

    command: ClassVar[str] = "by-id"
    allowed_formats: ClassVar[FrozenSet[ExportFormat]] = REPORT_FORMATS

    def __post_init__(self):
        self._check_format()

    @property
    def params(self) -> str:
        return f"{self.year}/{self.id}/transactions.{self.format.value}"


@dataclass(frozen=True)
class Last(ExportRequest):
    """Transactions since the last download"""
    format: FormatLike = ExportFormat.CSV

    command: ClassVar[str] = "last"

    def __post_init__(self):
        self._check_format()

    @property
    def params(self) -> str:
        return f"transactions.{self.format.value}"


@dataclass(frozen=True)
class SetLastId(ExportRequest):
    """Move the server-side cursor to the last successfully downloaded transaction id"""
    id: str

    command: ClassVar[str] = "set-last-id"

    @property
    def params(self) -> str:
        return str(self.id)


@dataclass(frozen=True)
class SetLastDate(ExportRequest):
    """Move the server-side cursor to the last unsuccessfully downloaded day"""
    date: date

    command: ClassVar[str] = "set-last-date"

    @property
    def params(self) -> str:
        return encode_request_date(self.date)


@dataclass(frozen=True)
class Merchant(ExportRequest):
    """Card transactions of a merchant over a period"""
    date_start: date
    date_end: date
    format: FormatLike = ExportFormat.CSV

    command: ClassVar[str] = "merchant"

    def __post_init__(self):
        self._check_format()

    @property
    def params(self) -> str:
        return (f"{encode_request_date(self.date_start)}/{encode_request_date(self.date_end)}"
                f"/transactions.{self.format.value}")


@dataclass(frozen=True)
class LastStatement(ExportRequest):
    """Number of the last official statement"""

    command: ClassVar[str] = "lastStatement"

    @property
    def params(self) -> str:
        return ""
