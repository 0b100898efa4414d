"""
BBVA API client using httpx for blocking HTTP calls.

Keeps the default header set shared by every request, lets each call
overlay a few headers of its own, and hands back the response headers
alongside the body so callers can read session tokens directly.
"""
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from domain.config import BBVAConfig, get_bbva_config
from domain.exceptions import BankAPIError
from domain.interfaces import BoundLogger
from infrastructure.logging.logging_adapter import LoggingAdapter
from infrastructure.metrics.metrics import bbva_requests_total, bbva_request_failures_total


@dataclass(frozen=True)
class BankResponse:
    """Status, headers and body of a single BBVA API response."""

    response: httpx.Response

    @property
    def status_code(self) -> int:
        return self.response.status_code

    @property
    def headers(self) -> httpx.Headers:
        return self.response.headers

    @property
    def text(self) -> str:
        return self.response.text

    def json(self) -> Any:
        """
        Decode the body as JSON.

        Raises:
            BankAPIError: If the body is not valid JSON
        """
        try:
            return self.response.json()
        except ValueError as e:
            raise BankAPIError(f"BBVA API returned invalid JSON: {e}", status_code=self.status_code) from e


class BBVAClient:
    """
    HTTP session against the BBVA mobile API.

    Uses a synchronous httpx.Client with timeouts from BBVAConfig. Outbound
    traffic goes through config.proxy_url only when one is configured;
    environment proxy variables are ignored.

    On failure, increments bbva_request_failures_total and raises BankAPIError.
    """

    def __init__(
        self,
        config: Optional[BBVAConfig] = None,
        headers: Optional[dict[str, str]] = None,
        transport: Optional[httpx.BaseTransport] = None,
        log: Optional[BoundLogger] = None,
    ):
        """
        Initialize the client.

        Args:
            config: Connection settings (defaults to the environment-driven config)
            headers: Default headers sent with every request
            transport: Optional httpx transport (tests use httpx.MockTransport)
            log: Bound logger, defaults to one tagged with bank="bbva"
        """
        self.config = config or get_bbva_config()
        self.log = log or LoggingAdapter().bind(bank="bbva", step="http")
        self._client = httpx.Client(
            timeout=httpx.Timeout(
                connect=self.config.connect_timeout,
                read=self.config.read_timeout,
                write=self.config.read_timeout,
                pool=self.config.connect_timeout,
            ),
            headers=headers or {},
            proxy=self.config.proxy_url,
            transport=transport,
            trust_env=False,
        )
        if self.config.proxy_url:
            self.log.warning("proxy_enabled", proxy_url=self.config.proxy_url)

    @property
    def headers(self) -> httpx.Headers:
        return self._client.headers

    def add_headers(self, headers: dict[str, str]) -> None:
        """Add headers to the default set used by all following requests."""
        self._client.headers.update(headers)

    def post(
        self,
        url: str,
        endpoint: str,
        data: Optional[dict[str, str]] = None,
        json: Any = None,
        headers: Optional[dict[str, str]] = None,
        params: Optional[dict[str, str]] = None,
    ) -> BankResponse:
        """
        POST to the BBVA API.

        Args:
            url: Absolute URL of the endpoint
            endpoint: Short endpoint name used for logs and metrics
            data: Form fields, sent url-encoded
            json: JSON body
            headers: Headers overriding the defaults for this call only
            params: Query parameters appended to the URL

        Returns:
            BankResponse with status code, headers and body

        Raises:
            BankAPIError: If the call fails (non-2xx, timeout, or network error)
        """
        bbva_requests_total.labels(endpoint=endpoint).inc()
        try:
            response = self._client.post(url, data=data, json=json, headers=headers, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            bbva_request_failures_total.labels(endpoint=endpoint).inc()
            self.log.error("bbva_request_failed", endpoint=endpoint, status_code=e.response.status_code)
            raise BankAPIError(
                f"BBVA API returned {e.response.status_code}: {e.response.text}",
                status_code=e.response.status_code,
            ) from e
        except httpx.TimeoutException as e:
            bbva_request_failures_total.labels(endpoint=endpoint).inc()
            self.log.error("bbva_request_timeout", endpoint=endpoint)
            raise BankAPIError(
                f"BBVA API request timed out after {self.config.read_timeout}s"
            ) from e
        except httpx.RequestError as e:
            bbva_request_failures_total.labels(endpoint=endpoint).inc()
            self.log.error("bbva_request_error", endpoint=endpoint, error=str(e))
            raise BankAPIError(f"BBVA API request failed: {str(e)}") from e

        self.log.debug("bbva_request_completed", endpoint=endpoint, status_code=response.status_code)
        return BankResponse(response=response)

    def close(self):
        """Close the httpx client."""
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
