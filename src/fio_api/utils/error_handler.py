"""Error taxonomy and HTTP response classification for the Fio API client."""

import logging
import xml.etree.ElementTree as ET
from enum import Enum
from typing import Optional

import httpx


logger = logging.getLogger(__name__)

# errorCode the server embeds in a 500 response when a requested statement does not exist
REPORT_DOES_NOT_EXIST_CODE = 21

XML_MEDIA_TYPES = ('text/xml',)


class ErrorCategory(Enum):
    """Error categories for classification"""
    TRANSPORT = "transport"
    REQUEST = "request"
    TIMING = "timing"
    SERVER = "server"
    DATA_PARSING = "data_parsing"
    FILE_FORMAT = "file_format"
    CONFIGURATION = "configuration"
    OTHER = "other"


# Error code mappings
ERROR_CODES = {
    # Transport and request errors
    "TRANSPORT_FAILURE": "T001",
    "BAD_REQUEST": "T002",
    "INVALID_TIMING": "T003",
    "TOO_MANY_ROWS": "T004",
    "INVALID_FORMAT": "T005",

    # Server side rejections
    "INTERNAL_ERROR": "S001",
    "REPORT_DOES_NOT_EXIST": "S002",

    # Response parsing errors
    "MISSING_FIELD": "D001",
    "DECODE_ERROR": "D002",
    "FRAMING_ERROR": "F001",
    "INFO_ALREADY_CONSUMED": "F002",

    # Payment and configuration errors
    "PAYMENT_FIELD_MISSING": "P001",
    "CONFIG_ERROR": "C001",

    "OTHER_ERROR": "X999",
}


class FioError(Exception):
    """Base class of every failure raised by this package"""

    error_type = "OTHER_ERROR"
    category = ErrorCategory.OTHER

    @property
    def error_code(self) -> str:
        return ERROR_CODES[self.error_type]


class TransportError(FioError):
    """The HTTP request could not be built or sent"""

    error_type = "TRANSPORT_FAILURE"
    category = ErrorCategory.TRANSPORT

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.cause = cause


class BadRequestError(FioError):
    """404 - malformed query; check the URL parameters"""

    error_type = "BAD_REQUEST"
    category = ErrorCategory.REQUEST

    def __init__(self, message: str = "404 Not Found"):
        super().__init__(message)


class InvalidTimingError(FioError):
    """409 - the minimal interval between two calls with one token was not kept"""

    error_type = "INVALID_TIMING"
    category = ErrorCategory.TIMING

    def __init__(self, message: str = "409 Conflict"):
        super().__init__(message)


class TooManyRowsError(FioError):
    """413 - the result set exceeds the server limit; narrow the date range"""

    error_type = "TOO_MANY_ROWS"
    category = ErrorCategory.REQUEST

    def __init__(self, message: str = "413 Too many rows"):
        super().__init__(message)


class InternalServerError(FioError):
    """500 - the server rejected the request, detail decoded from the XML body"""

    error_type = "INTERNAL_ERROR"
    category = ErrorCategory.SERVER

    def __init__(self, code: int, message: str):
        super().__init__(f"Internal server error {code}: {message}")
        self.code = code
        self.message = message


class ReportDoesNotExistError(InternalServerError):
    """The requested statement does not exist"""

    error_type = "REPORT_DOES_NOT_EXIST"

    def __init__(self, message: str = "Výpis neexistuje"):
        super().__init__(REPORT_DOES_NOT_EXIST_CODE, message)


class MissingFieldError(FioError, KeyError):
    """A typed accessor found no value for the requested info key"""

    error_type = "MISSING_FIELD"
    category = ErrorCategory.DATA_PARSING

    def __init__(self, key: str):
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Missing field: {self.key}"


class DecodeError(FioError, ValueError):
    """Malformed amount, date, integer or enumeration value"""

    error_type = "DECODE_ERROR"
    category = ErrorCategory.DATA_PARSING

    def __init__(self, field: str, value: str, expected: str = ""):
        message = f"Failed to decode {field}: '{value}'"
        if expected:
            message += f" (expected format: {expected})"
        super().__init__(message)
        self.field = field
        self.value = value
        self.expected = expected


class ResponseFramingError(FioError):
    """The response body does not follow the info/header/data layout"""

    error_type = "FRAMING_ERROR"
    category = ErrorCategory.FILE_FORMAT


class InfoAlreadyConsumedError(FioError):
    """The info block of a response can be read only once, before any data"""

    error_type = "INFO_ALREADY_CONSUMED"
    category = ErrorCategory.FILE_FORMAT


class InvalidFormatError(FioError, ValueError):
    """The output format is not allowed for the export command"""

    error_type = "INVALID_FORMAT"
    category = ErrorCategory.REQUEST


class PaymentFieldError(FioError, ValueError):
    """A payment builder is missing required fields"""

    error_type = "PAYMENT_FIELD_MISSING"
    category = ErrorCategory.REQUEST

    def __init__(self, kind: str, missing):
        self.kind = kind
        self.missing = list(missing)
        super().__init__(f"{kind} is missing required fields: {', '.join(self.missing)}")


class ConfigError(FioError):
    """Configuration could not be loaded or is incomplete"""

    error_type = "CONFIG_ERROR"
    category = ErrorCategory.CONFIGURATION


class OtherError(FioError):
    """Catch-all failure preserving the diagnostic text"""

    error_type = "OTHER_ERROR"
    category = ErrorCategory.OTHER

    def __init__(self, code: str, message: str):
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message


def classify_response(response: httpx.Response) -> Optional[FioError]:
    """Map an HTTP response to the error taxonomy.

    Returns None for a successful response, otherwise the error instance
    the caller should raise.
    """
    status = response.status_code
    if status == 200:
        return None
    if status == 404:
        return BadRequestError()
    if status == 409:
        return InvalidTimingError()
    if status == 413:
        return TooManyRowsError()
    if status == 500:
        return parse_xml_error(response)
    return OtherError(str(status), response.reason_phrase or "unexpected status")


def parse_xml_error(response: httpx.Response) -> FioError:
    """Extract the error carried in the XML body of a 500 response.

    Sample body::

        <response>
          <result>
            <errorCode>21</errorCode>
            <status>error</status>
            <message>Výpis neexistuje</message>
            <detail></detail>
          </result>
        </response>

    Never raises; anything unexpected yields an OtherError.
    """
    content_type = response.headers.get('content-type')
    if content_type is None:
        return OtherError("missing_header", "content_type")

    media_type = content_type.split(';', 1)[0].strip().lower()
    if media_type not in XML_MEDIA_TYPES:
        return OtherError("bad_content_type", repr(content_type))

    body = response.content
    logger.debug(f"Error response body: {body!r}")
    try:
        root = ET.fromstring(body)
    except ET.ParseError as e:
        return OtherError("xml-error", str(e))

    code_text = root.findtext('.//result/errorCode')
    if code_text is None:
        return OtherError("xml-error", "errorCode element not found")
    try:
        code = int(code_text.strip())
    except ValueError:
        return OtherError("xml-error", f"errorCode is not a number: {code_text!r}")

    message = (root.findtext('.//result/message') or '').strip()
    if code == REPORT_DOES_NOT_EXIST_CODE:
        return ReportDoesNotExistError(message or "Výpis neexistuje")
    return InternalServerError(code, message)
