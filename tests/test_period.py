"""Tests for FioPeriod."""

from datetime import date

import pytest

from fio_api.models.export import ById, ExportFormat
from fio_api.models.period import FioPeriod


class TestFioPeriod:

    def test_parse(self):
        assert FioPeriod.parse("2019,10") == FioPeriod(2019, 10)

    def test_str_round_trip(self):
        assert str(FioPeriod.parse("2019,1")) == "2019,1"

    @pytest.mark.parametrize("text, message", [
        ("2019", "Not a period"),
        ("x,10", "Not a year"),
        ("2019,x", "Not a month"),
        ("2019,13", "Not a month"),
    ])
    def test_parse_errors(self, text, message):
        with pytest.raises(ValueError, match=message):
            FioPeriod.parse(text)

    def test_previous(self):
        assert FioPeriod(2019, 10).previous() == FioPeriod(2019, 9)
        assert FioPeriod.parse("2019,1").previous() == FioPeriod(2018, 12)

    def test_current(self):
        assert FioPeriod.current(date(2021, 6, 30)) == FioPeriod(2021, 6)

    def test_to_request(self):
        request = FioPeriod(2021, 6).to_request(ExportFormat.PDF)
        assert request == ById(2021, 6, ExportFormat.PDF)
        assert request.params == "2021/6/transactions.pdf"
