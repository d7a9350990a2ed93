"""Rendering of payment orders to the import XML and parsing of the import answer."""

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Iterable, Optional, Union

from .models import Payment
from ..utils.error_handler import OtherError


logger = logging.getLogger(__name__)

XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"
IMPORT_SCHEMA = "http://www.fio.cz/schema/importIB.xsd"

ET.register_namespace("xsi", XSI_NS)


def _indent(elem: ET.Element, level: int = 0) -> None:
    """Pretty-print helper (in-place)."""
    pad = "\n" + level * " "
    if len(elem):
        if not elem.text or not elem.text.strip():
            elem.text = pad + " "
        for child in elem:
            _indent(child, level + 1)
        if not child.tail or not child.tail.strip():
            child.tail = pad
    if level and (not elem.tail or not elem.tail.strip()):
        elem.tail = pad


def build_import_document(payments: Union[Payment, Iterable[Payment]]) -> ET.Element:
    """Return the ``Import/Orders/<kind>`` tree for one or more payments"""
    if isinstance(payments, Payment):
        payments = [payments]

    root = ET.Element("Import", {f"{{{XSI_NS}}}noNamespaceSchemaLocation": IMPORT_SCHEMA})
    orders = ET.SubElement(root, "Orders")
    count = 0
    for payment in payments:
        order = ET.SubElement(orders, payment.xml_element)
        for element, text in payment.xml_values():
            ET.SubElement(order, element).text = text
        count += 1
    if not count:
        raise ValueError("At least one payment is required")
    return root


def render_import_xml(payments: Union[Payment, Iterable[Payment]]) -> bytes:
    """Serialize payments to the UTF-8 document the import endpoint expects"""
    root = build_import_document(payments)
    _indent(root)
    body = ET.tostring(root, encoding="unicode")
    return ('<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n' + body + "\n").encode("utf-8")


@dataclass
class ImportResult:
    """Answer of the import endpoint.

    Attributes:
        error_code: 0 ok, 1 errors found, 2 warnings, 11 syntax error,
            12 empty import, 13 file too long, 14 empty file
        id_instruction: Batch id assigned by the bank
        status: ok, error, warning or fatal
        sum_debit: Sum of debit items in the batch
        sum_credit: Sum of credit items in the batch
        message: Human readable message
        detail: Raw detail text
    """
    error_code: int
    status: str
    id_instruction: Optional[str] = None
    sum_debit: Optional[float] = None
    sum_credit: Optional[float] = None
    message: str = ""
    detail: str = ""

    @property
    def accepted(self) -> bool:
        """Orders answered with ok or warning were taken by the bank"""
        return self.status in ("ok", "warning")


def _optional_float(text: Optional[str]) -> Optional[float]:
    if text is None or not text.strip():
        return None
    return float(text.strip().replace(',', '.', 1))


def parse_import_response(content: bytes) -> ImportResult:
    """Parse the ``responseImportIB`` answer of an import call"""
    try:
        root = ET.fromstring(content)
    except ET.ParseError as e:
        raise OtherError("xml-error", str(e)) from e

    result = root.find('.//result')
    if result is None:
        raise OtherError("xml-error", "result element not found")

    try:
        error_code = int((result.findtext('errorCode') or '').strip())
        # sums are nested per currency: sums/sum[@id]/sumDebet
        sum_debit = _optional_float(result.findtext('.//sumDebet'))
        sum_credit = _optional_float(result.findtext('.//sumCredit'))
    except ValueError as e:
        raise OtherError("xml-error", str(e)) from e

    import_result = ImportResult(
        error_code=error_code,
        status=(result.findtext('status') or '').strip(),
        id_instruction=(result.findtext('idInstruction') or '').strip() or None,
        sum_debit=sum_debit,
        sum_credit=sum_credit,
        message=(result.findtext('message') or '').strip(),
        detail=(result.findtext('detail') or '').strip(),
    )
    logger.debug(f"Import result: {import_result}")
    return import_result
