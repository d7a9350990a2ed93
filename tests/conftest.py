"""Shared sample responses for the tests."""

import pytest


HEADER = [
    "ID pohybu", "Datum", "Objem", "Měna", "Protiúčet", "Název protiúčtu",
    "Kód banky", "Název banky", "KS", "VS", "SS", "Uživatelská identifikace",
    "Zpráva pro příjemce", "Typ", "Provedl", "Upřesnění", "Komentář", "BIC",
    "ID pokynu",
]

# Card terminal export: "Objem" appears twice (booked and card amount)
POS_HEADER = [
    "ID pohybu", "ID pokynu", "Datum", "Objem", "Poznámka", "Název pobočky",
    "Identifikátor transakce", "Číslo zařízení", "Datum transakce", "Autorizační číslo",
    "Číslo karty", "Objem", "Měna", "Typ", "Vystavitel karty", "Poplatky celkem",
    "Poplatek Fio", "Poplatek intercharge", "Poplatek karetní asociace", "Zaúčtováno",
    "Datum zaúčtování",
]

POS_ROW = ";".join([
    "26962199071", "27688826291", "30.06.2021", "98,02", "", "Prodejna 1",
    "T123", "D45", "29.06.2021", "A77", "1234XXXXXXXX5678", "100,00", "CZK",
    "Platba kartou", "VISA", "1,98", "0,50", "1,00", "0,48", "ano", "30.06.2021",
])

INFO_LINES = [
    "accountId;2345678901",
    "bankId;2010",
    "currency;CZK",
    "iban;CZ7920100000002345678901",
    "bic;FIOBCZPPXXX",
    "openingBalance;1000,00",
    "closingBalance;5789,51",
    "dateStart;01.06.2021",
    "dateEnd;30.06.2021",
    "idFrom;26962199069",
    "idTo;26962199070",
    "idLastDownload;",
    "yearList;",
    "idList;",
]


def make_row(**values) -> str:
    """One data line; keys are native column names"""
    return ";".join(values.get(column, "") for column in HEADER)


INCOME_ROW = make_row(**{
    "ID pohybu": "26962199069",
    "Datum": "30.06.2021",
    "Objem": "4789,51",
    "Měna": "CZK",
    "Protiúčet": "2900233333",
    "Název protiúčtu": "Novák, Jan",
    "Kód banky": "2010",
    "Název banky": "Fio banka, a.s.",
    "KS": "0308",
    "VS": "1234567890",
    "Uživatelská identifikace": "Nájem",
    "Zpráva pro příjemce": "Nájem červen",
    "Typ": "Bezhotovostní příjem",
    "Komentář": "nájem",
    "ID pokynu": "27688826289",
})

PAYMENT_ROW = make_row(**{
    "ID pohybu": "26962199070",
    "Datum": "30.06.2021",
    "Objem": "-123,4",
    "Měna": "CZK",
    "Typ": "Platba kartou",
    "Provedl": "Novák, Jan",
    "Upřesnění": "123,40 CZK",
    "ID pokynu": "27688826290",
})


def make_response(info=INFO_LINES, rows=(INCOME_ROW, PAYMENT_ROW), separator="", header=HEADER) -> bytes:
    lines = list(info)
    if separator is not None:
        lines.append(separator)
    if header is not None:
        lines.append(";".join(header))
    lines.extend(rows)
    return ("\n".join(lines) + "\n").encode("utf-8")


@pytest.fixture
def sample_csv() -> bytes:
    return make_response()


@pytest.fixture
def empty_csv() -> bytes:
    return make_response(rows=())
