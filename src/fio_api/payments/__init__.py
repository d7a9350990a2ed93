"""Payment orders for the import API"""

from .document import ImportResult, build_import_document, parse_import_response, render_import_xml
from .models import (
    ChargesBearer,
    DomesticPayment,
    DomesticPaymentBuilder,
    DomesticPaymentType,
    EuroPayment,
    EuroPaymentBuilder,
    EuroPaymentType,
    ForeignPayment,
    ForeignPaymentBuilder,
    Payment,
    PaymentBuilder,
)

__all__ = [
    'ChargesBearer',
    'DomesticPayment',
    'DomesticPaymentBuilder',
    'DomesticPaymentType',
    'EuroPayment',
    'EuroPaymentBuilder',
    'EuroPaymentType',
    'ForeignPayment',
    'ForeignPaymentBuilder',
    'ImportResult',
    'Payment',
    'PaymentBuilder',
    'build_import_document',
    'parse_import_response',
    'render_import_xml',
]
