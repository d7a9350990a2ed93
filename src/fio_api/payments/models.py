"""Payment orders for the import (upload) API.

Each payment kind is a frozen dataclass: required fields have no default,
so a payment cannot be built without them. The builders keep the chaining
style and report every missing required field at ``build()``.

Field widths below follow the bank's import schema (importIB.xsd).
"""

from dataclasses import MISSING, dataclass, fields
from datetime import date
from enum import Enum
from typing import ClassVar, Dict, List, Optional, Tuple, Type

from ..utils.error_handler import PaymentFieldError


class DomesticPaymentType(Enum):
    STANDARD = 431001
    PRIORITY = 431005
    DIRECT_DEBIT = 431022


class EuroPaymentType(Enum):
    STANDARD = 431008
    PRIORITY = 431009


class ChargesBearer(Enum):
    """Who pays the fees of a foreign payment (detailsOfCharges)"""
    OUR = 470501
    SHA = 470502
    BEN = 470503


@dataclass(frozen=True)
class Payment:
    """Fields shared by all payment kinds"""

    xml_element: ClassVar[str] = ""
    # (xml element, attribute) pairs in the order the schema requires
    xml_fields: ClassVar[Tuple[Tuple[str, str], ...]] = ()

    def xml_values(self) -> List[Tuple[str, str]]:
        """Non-empty fields rendered to text, in schema order"""
        values = []
        for element, attribute in self.xml_fields:
            text = _to_text(getattr(self, attribute))
            if text:
                values.append((element, text))
        return values


def _to_text(value) -> str:
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, float):
        return f"{value:.2f}"
    return str(value)


@dataclass(frozen=True)
class DomesticPayment(Payment):
    """Payment to an account within the Czech Republic"""
    account_from: str               # 16n, payer account
    currency: str                   # 3!x, ISO 4217
    amount: float                   # 18d
    account_to: str                 # 6n-10n, payee account
    bank_code: str                  # 4!n, payee bank
    date: date                      # due date
    ks: str = ""                    # 4n, constant symbol
    vs: str = ""                    # 10n, variable symbol
    ss: str = ""                    # 10n, specific symbol
    message_for_recipient: str = ""  # 140i
    comment: str = ""               # 255i, your reference
    payment_reason: Optional[int] = None  # 3!n
    payment_type: Optional[DomesticPaymentType] = None

    xml_element: ClassVar[str] = "DomesticTransaction"
    xml_fields: ClassVar[Tuple[Tuple[str, str], ...]] = (
        ("accountFrom", "account_from"),
        ("currency", "currency"),
        ("amount", "amount"),
        ("accountTo", "account_to"),
        ("bankCode", "bank_code"),
        ("ks", "ks"),
        ("vs", "vs"),
        ("ss", "ss"),
        ("date", "date"),
        ("messageForRecipient", "message_for_recipient"),
        ("comment", "comment"),
        ("paymentReason", "payment_reason"),
        ("paymentType", "payment_type"),
    )


@dataclass(frozen=True)
class EuroPayment(Payment):
    """SEPA payment in EUR through T2"""
    account_from: str
    currency: str
    amount: float
    account_to: str                 # IBAN
    bic: str
    date: date
    benef_name: str
    ks: str = ""
    vs: str = ""
    ss: str = ""
    comment: str = ""
    benef_street: str = ""
    benef_city: str = ""
    benef_country: str = ""
    remittance_info1: str = ""
    remittance_info2: str = ""
    remittance_info3: str = ""
    payment_reason: Optional[int] = None
    payment_type: Optional[EuroPaymentType] = None

    xml_element: ClassVar[str] = "T2Transaction"
    xml_fields: ClassVar[Tuple[Tuple[str, str], ...]] = (
        ("accountFrom", "account_from"),
        ("currency", "currency"),
        ("amount", "amount"),
        ("accountTo", "account_to"),
        ("ks", "ks"),
        ("vs", "vs"),
        ("ss", "ss"),
        ("bic", "bic"),
        ("date", "date"),
        ("comment", "comment"),
        ("benefName", "benef_name"),
        ("benefStreet", "benef_street"),
        ("benefCity", "benef_city"),
        ("benefCountry", "benef_country"),
        ("remittanceInfo1", "remittance_info1"),
        ("remittanceInfo2", "remittance_info2"),
        ("remittanceInfo3", "remittance_info3"),
        ("paymentReason", "payment_reason"),
        ("paymentType", "payment_type"),
    )


@dataclass(frozen=True)
class ForeignPayment(Payment):
    """Payment abroad outside of T2"""
    account_from: str
    currency: str
    amount: float
    account_to: str
    bic: str
    date: date
    benef_name: str
    benef_street: str
    benef_city: str
    benef_country: str
    remittance_info1: str
    details_of_charges: ChargesBearer
    comment: str = ""
    remittance_info2: str = ""
    remittance_info3: str = ""
    remittance_info4: str = ""
    payment_reason: Optional[int] = None

    xml_element: ClassVar[str] = "ForeignTransaction"
    xml_fields: ClassVar[Tuple[Tuple[str, str], ...]] = (
        ("accountFrom", "account_from"),
        ("currency", "currency"),
        ("amount", "amount"),
        ("accountTo", "account_to"),
        ("bic", "bic"),
        ("date", "date"),
        ("comment", "comment"),
        ("benefName", "benef_name"),
        ("benefStreet", "benef_street"),
        ("benefCity", "benef_city"),
        ("benefCountry", "benef_country"),
        ("remittanceInfo1", "remittance_info1"),
        ("remittanceInfo2", "remittance_info2"),
        ("remittanceInfo3", "remittance_info3"),
        ("remittanceInfo4", "remittance_info4"),
        ("detailsOfCharges", "details_of_charges"),
        ("paymentReason", "payment_reason"),
    )


class PaymentBuilder:
    """Collects payment fields by chaining and builds the frozen payment"""

    payment_class: ClassVar[Type[Payment]] = Payment

    def __init__(self, account_from: Optional[str] = None, currency: Optional[str] = None):
        self._values: Dict[str, object] = {}
        if account_from is not None:
            self._values['account_from'] = account_from
        if currency is not None:
            self._values['currency'] = currency
        self._values.setdefault('date', date.today())

    def _set(self, **values) -> 'PaymentBuilder':
        self._values.update(values)
        return self

    def missing_fields(self) -> List[str]:
        return [
            f.name for f in fields(self.payment_class)
            if f.default is MISSING and f.default_factory is MISSING and f.name not in self._values
        ]

    def build(self):
        missing = self.missing_fields()
        if missing:
            raise PaymentFieldError(self.payment_class.__name__, missing)
        return self.payment_class(**self._values)

    # shared fields
    def account_from(self, account_from: str):
        return self._set(account_from=account_from)

    def currency(self, currency: str):
        return self._set(currency=currency)

    def amount(self, amount: float):
        return self._set(amount=float(amount))

    def date(self, due_date: date):
        return self._set(date=due_date)

    def comment(self, comment: str):
        return self._set(comment=comment)

    def payment_reason(self, payment_reason: int):
        return self._set(payment_reason=payment_reason)


class DomesticPaymentBuilder(PaymentBuilder):
    payment_class = DomesticPayment

    def account_to(self, account_to: str, bank_code: str):
        return self._set(account_to=account_to, bank_code=bank_code)

    def ks(self, ks: str):
        return self._set(ks=ks)

    def vs(self, vs: str):
        return self._set(vs=vs)

    def ss(self, ss: str):
        return self._set(ss=ss)

    def message_for_recipient(self, message: str):
        return self._set(message_for_recipient=message)

    def payment_type(self, payment_type: DomesticPaymentType):
        return self._set(payment_type=payment_type)


class _BeneficiaryMixin:
    def account_to(self, account_to: str, bic: str):
        return self._set(account_to=account_to, bic=bic)

    def beneficiary(self, name: str, street: str = "", city: str = "", country: str = ""):
        values = {'benef_name': name}
        if street:
            values['benef_street'] = street
        if city:
            values['benef_city'] = city
        if country:
            values['benef_country'] = country
        return self._set(**values)

    def remittance_info(self, *lines: str):
        return self._set(**{f"remittance_info{i}": line for i, line in enumerate(lines, start=1)})


class EuroPaymentBuilder(_BeneficiaryMixin, PaymentBuilder):
    payment_class = EuroPayment

    def ks(self, ks: str):
        return self._set(ks=ks)

    def vs(self, vs: str):
        return self._set(vs=vs)

    def ss(self, ss: str):
        return self._set(ss=ss)

    def payment_type(self, payment_type: EuroPaymentType):
        return self._set(payment_type=payment_type)


class ForeignPaymentBuilder(_BeneficiaryMixin, PaymentBuilder):
    payment_class = ForeignPayment

    def details_of_charges(self, bearer: ChargesBearer):
        return self._set(details_of_charges=bearer)
