"""Core data models for the Fio API client."""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional, Union


class TransactionType(Enum):
    """Closed set of transaction types, bound to the bank's native labels.

    ``CASHLESS_PAYMENT_CARD`` carries the same label as ``CASHLESS_PAYMENT``;
    Python turns it into an alias, so decoding that label yields
    ``CASHLESS_PAYMENT`` (first match wins).
    """
    TRANSFER_IN_BANK_INCOME = "Příjem převodem uvnitř banky"
    TRANSFER_IN_BANK_PAYMENT = "Platba převodem uvnitř banky"
    CASH_DEPOSIT_COUNTER = "Vklad pokladnou"
    CASH_WITHDRAWAL_COUNTER = "Výběr pokladnou"
    CASH_DEPOSIT = "Vklad v hotovosti"
    CASH_WITHDRAWAL = "Výběr v hotovosti"
    PAYMENT = "Platba"
    INCOME = "Příjem"
    CASHLESS_PAYMENT = "Bezhotovostní platba"
    CASHLESS_INCOME = "Bezhotovostní příjem"
    CARD_PAYMENT = "Platba kartou"
    CASHLESS_PAYMENT_CARD = "Bezhotovostní platba"
    LOAN_INTEREST = "Úrok z úvěru"
    PENALTY_FEE = "Sankční poplatek"
    MESSENGER_HANDOVER = "Posel – předání"
    MESSENGER_RECEIPT = "Posel – příjem"
    TRANSFER_WITHIN_ACCOUNT = "Převod uvnitř konta"
    CREDITED_INTEREST = "Připsaný úrok"
    PAID_INTEREST = "Vyplacený úrok"
    INTEREST_TAX = "Odvod daně z úroků"
    RECORDED_INTEREST = "Evidovaný úrok"
    FEE = "Poplatek"
    RECORDED_FEE = "Evidovaný poplatek"
    TRANSFER_BETWEEN_ACCOUNTS_PAYMENT = "Převod mezi bankovními konty (platba)"
    TRANSFER_BETWEEN_ACCOUNTS_INCOME = "Převod mezi bankovními konty (příjem)"
    UNIDENTIFIED_PAYMENT = "Neidentifikovaná platba z bankovního konta"
    UNIDENTIFIED_INCOME = "Neidentifikovaný příjem na bankovní konto"
    OWN_PAYMENT_ACCOUNT = "Vlastní platba z bankovního konta"
    OWN_INCOME_ACCOUNT = "Vlastní příjem na bankovní konto"
    OWN_PAYMENT_COUNTER = "Vlastní platba pokladnou"
    OWN_INCOME_COUNTER = "Vlastní příjem pokladnou"
    CORRECTION = "Opravný pohyb"
    RECEIVED_FEE = "Přijatý poplatek"
    FOREIGN_CURRENCY_PAYMENT = "Platba v jiné měně"
    CARD_FEE = "Poplatek - platební karta"
    DIRECT_DEBIT = "Inkaso"
    DIRECT_DEBIT_INCOME = "Inkaso ve prospěch účtu"
    DIRECT_DEBIT_PAYMENT = "Inkaso z účtu"
    FOREIGN_DIRECT_DEBIT_INCOME = "Příjem inkasa z cizí banky"

    @property
    def label(self) -> str:
        return self.value


@dataclass(frozen=True)
class UnknownTransactionType:
    """Transaction type label the closed set does not know yet"""
    label: str


AnyTransactionType = Union[TransactionType, UnknownTransactionType]


@dataclass(frozen=True)
class TransactionRecord:
    """One row of the data section of a transaction export.

    Attributes:
        id: Transaction id ("ID pohybu")
        date: Value date
        amount: Signed amount in the account currency
        currency: ISO 4217 currency code
        counter_account: Counter-account number
        counter_account_name: Counter-account name
        bank_code: Counter-bank code
        bank_name: Counter-bank name, None when the bank sent none
        constant_symbol: Constant symbol (KS)
        variable_symbol: Variable symbol (VS)
        specific_symbol: Specific symbol (SS)
        user_identification: User identification
        message: Message for recipient
        transaction_type: Decoded "Typ" column
        performer: Who performed the transaction ("Provedl")
        note: Specification ("Upřesnění")
        comment: Comment
        bic: BIC of the counter bank
        instruction_id: Id of the instruction ("ID pokynu")
    """
    id: int
    date: date
    amount: float
    currency: str
    counter_account: str = ""
    counter_account_name: str = ""
    bank_code: str = ""
    bank_name: Optional[str] = None
    constant_symbol: str = ""
    variable_symbol: str = ""
    specific_symbol: str = ""
    user_identification: str = ""
    message: str = ""
    transaction_type: Optional[AnyTransactionType] = None
    performer: str = ""
    note: str = ""
    comment: str = ""
    bic: str = ""
    instruction_id: str = ""


@dataclass
class FioConfig:
    """Configuration for client behavior"""
    token: Optional[str] = None
    token_file: Optional[str] = None
    base_url: str = "https://www.fio.cz/ib_api/rest"
    min_interval: float = 30.0
    timeout: float = 60.0
    user_agent: str = "fio-api-py"
    language: Optional[str] = None
    log_level: str = "INFO"
