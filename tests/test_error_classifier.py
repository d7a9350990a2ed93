"""Tests for HTTP response classification."""

import httpx
import pytest

from fio_api.utils.error_handler import (
    BadRequestError,
    ErrorCategory,
    FioError,
    InternalServerError,
    InvalidTimingError,
    OtherError,
    ReportDoesNotExistError,
    TooManyRowsError,
    classify_response,
    parse_xml_error,
)


def xml_error(code, message="Chyba", content_type="text/xml;charset=UTF-8"):
    body = (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        f"<response><result><errorCode>{code}</errorCode><status>error</status>"
        f"<message>{message}</message><detail></detail></result></response>"
    ).encode("utf-8")
    headers = {"content-type": content_type} if content_type else {}
    return httpx.Response(500, content=body, headers=headers)


class TestClassifyResponse:
    """Status code mapping"""

    def test_success(self):
        assert classify_response(httpx.Response(200)) is None

    @pytest.mark.parametrize("status, error_class", [
        (404, BadRequestError),
        (409, InvalidTimingError),
        (413, TooManyRowsError),
    ])
    def test_known_statuses(self, status, error_class):
        error = classify_response(httpx.Response(status))
        assert isinstance(error, error_class)
        assert isinstance(error, FioError)

    def test_unknown_status(self):
        error = classify_response(httpx.Response(503))
        assert isinstance(error, OtherError)
        assert error.code == "503"
        assert error.message == "Service Unavailable"

    def test_server_error_is_parsed(self):
        error = classify_response(xml_error(11, "Chybný token"))
        assert isinstance(error, InternalServerError)
        assert error.code == 11
        assert error.message == "Chybný token"

    def test_error_codes_and_categories(self):
        error = classify_response(httpx.Response(409))
        assert error.error_code == "T003"
        assert error.category is ErrorCategory.TIMING


class TestParseXmlError:
    """Embedded XML error of a 500 response"""

    def test_report_does_not_exist(self):
        error = parse_xml_error(xml_error(21, "Výpis neexistuje"))
        assert isinstance(error, ReportDoesNotExistError)
        assert isinstance(error, InternalServerError)
        assert error.code == 21

    def test_missing_content_type(self):
        error = parse_xml_error(xml_error(21, content_type=None))
        assert isinstance(error, OtherError)
        assert error.code == "missing_header"

    def test_wrong_content_type(self):
        error = parse_xml_error(xml_error(21, content_type="text/html"))
        assert isinstance(error, OtherError)
        assert error.code == "bad_content_type"

    def test_content_type_without_charset(self):
        error = parse_xml_error(xml_error(21, content_type="text/xml"))
        assert isinstance(error, ReportDoesNotExistError)

    def test_malformed_xml(self):
        response = httpx.Response(500, content=b"<response><result>", headers={"content-type": "text/xml"})
        error = parse_xml_error(response)
        assert isinstance(error, OtherError)
        assert error.code == "xml-error"

    def test_missing_error_code(self):
        response = httpx.Response(
            500, content=b"<response><result><status>error</status></result></response>",
            headers={"content-type": "text/xml"},
        )
        error = parse_xml_error(response)
        assert isinstance(error, OtherError)
        assert error.code == "xml-error"
