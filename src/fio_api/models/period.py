"""Monthly statement period."""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from .export import ById, ExportFormat, FormatLike


@dataclass(frozen=True)
class FioPeriod:
    """Year and month (1=Jan, 12=Dec) of a monthly statement"""
    year: int
    month: int

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise ValueError(f"Not a month: '{self.month}'")

    @classmethod
    def current(cls, today: Optional[date] = None) -> 'FioPeriod':
        today = today or date.today()
        return cls(today.year, today.month)

    @classmethod
    def parse(cls, text: str) -> 'FioPeriod':
        """Parse a period written like ``2019,10``"""
        year_text, sep, month_text = text.partition(',')
        if not sep:
            raise ValueError(f"Not a period: '{text}'")
        try:
            year = int(year_text)
        except ValueError as e:
            raise ValueError(f"Not a year: '{year_text}'; {e}") from e
        try:
            month = int(month_text)
        except ValueError as e:
            raise ValueError(f"Not a month: '{month_text}'; {e}") from e
        return cls(year, month)

    def previous(self) -> 'FioPeriod':
        if self.month == 1:
            return FioPeriod(self.year - 1, 12)
        return FioPeriod(self.year, self.month - 1)

    def to_request(self, format: FormatLike = ExportFormat.CSV) -> ById:
        """Monthly statements are numbered by month within the year"""
        return ById(self.year, self.month, format)

    def __str__(self) -> str:
        return f"{self.year},{self.month}"
