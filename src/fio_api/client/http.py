"""HTTP client for the Fio REST API.

Uses a synchronous ``httpx.Client``; every call, download or upload, goes
through the token's RequestPacer. Tests swap the transport for
``httpx.MockTransport``.
"""

import logging
from typing import Callable, Iterable, Optional, Union

import httpx

from .pacer import REQUEST_RATE, RequestPacer
from ..models.core import FioConfig
from ..models.export import FIOAPI_URL_BASE, ExportRequest, LastStatement
from ..parsers.response_reader import FioResponse
from ..payments.document import ImportResult, parse_import_response, render_import_xml
from ..payments.models import (
    DomesticPaymentBuilder,
    EuroPaymentBuilder,
    ForeignPaymentBuilder,
    Payment,
)
from ..utils.error_handler import ConfigError, TransportError, classify_response


logger = logging.getLogger(__name__)

USER_AGENT = "fio-api-py"
DEFAULT_TIMEOUT = 60.0


class FioClient:
    """Low-level client that holds the token"""

    def __init__(self,
                 token: str,
                 *,
                 base_url: str = FIOAPI_URL_BASE,
                 min_interval: float = REQUEST_RATE,
                 timeout: float = DEFAULT_TIMEOUT,
                 user_agent: str = USER_AGENT,
                 language: Optional[str] = None,
                 pacer: Optional[RequestPacer] = None,
                 transport: Optional[httpx.BaseTransport] = None):
        token = (token or '').strip()
        if not token:
            raise ConfigError("Fio API token is empty")
        self._token = token
        self.base_url = base_url.rstrip('/')
        self.language = language
        self.pacer = pacer or RequestPacer(min_interval)
        self._client = httpx.Client(
            headers={"User-Agent": user_agent},
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_config(cls, config: FioConfig, token: str, **kwargs) -> 'FioClient':
        return cls(
            token,
            base_url=config.base_url,
            min_interval=config.min_interval,
            timeout=config.timeout,
            user_agent=config.user_agent,
            language=config.language,
            **kwargs,
        )

    def _send(self, build: Callable[[], httpx.Request], description: str) -> httpx.Response:
        def dispatch() -> httpx.Response:
            try:
                return self._client.send(build())
            except (httpx.HTTPError, httpx.InvalidURL) as e:
                raise TransportError(f"{description}: {e}", e) from e

        response = self.pacer.call(dispatch, description)
        error = classify_response(response)
        if error is not None:
            logger.error(f"{description} failed with HTTP {response.status_code}: {error}")
            raise error
        return response

    def export(self, request: ExportRequest) -> httpx.Response:
        """Run a read-only command and return the successful HTTP response"""
        url = request.build_url(self._token, self.base_url)
        description = request.censored_url(self.base_url)
        logger.debug(f"GET {description}")
        return self._send(lambda: self._client.build_request("GET", url), description)

    def export_response(self, request: ExportRequest) -> FioResponse:
        """Run a CSV export and wrap the body in a FioResponse reader"""
        return FioResponse.from_http(self.export(request))

    def last_statement(self) -> str:
        """Year and number of the last official statement, as sent by the bank"""
        return self.export(LastStatement()).text.strip()

    def import_payments(self, payments: Union[Payment, Iterable[Payment]]) -> ImportResult:
        """Upload payment orders as one batch"""
        payment_xml = render_import_xml(payments)
        logger.debug(f"payment_xml:\n{payment_xml.decode('utf-8')}")

        data = {"type": "xml", "token": self._token}
        if self.language:
            data["lng"] = self.language
        url = f"{self.base_url}/import/"

        def build() -> httpx.Request:
            files = {"file": ("payments.xml", payment_xml, "application/xml")}
            return self._client.build_request("POST", url, data=data, files=files)

        response = self._send(build, f"POST {url}")
        return parse_import_response(response.content)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> 'FioClient':
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


class FioClientWithImport:
    """Client bound to one payer account, handing out pre-filled payment builders"""

    def __init__(self, client: FioClient, account_from: str, currency: str):
        self.client = client
        self.account_from = account_from
        self.currency = currency

    def new_domestic(self) -> DomesticPaymentBuilder:
        return DomesticPaymentBuilder(self.account_from, self.currency)

    def new_euro(self) -> EuroPaymentBuilder:
        return EuroPaymentBuilder(self.account_from, self.currency)

    def new_foreign(self) -> ForeignPaymentBuilder:
        return ForeignPaymentBuilder(self.account_from, self.currency)

    def import_payments(self, payments) -> ImportResult:
        """Accepts built payments or builders"""
        if isinstance(payments, (Payment, DomesticPaymentBuilder, EuroPaymentBuilder, ForeignPaymentBuilder)):
            payments = [payments]
        built = [p.build() if not isinstance(p, Payment) else p for p in payments]
        return self.client.import_payments(built)
