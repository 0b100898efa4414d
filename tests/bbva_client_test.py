"""
Tests for the BBVA HTTP client.

Tests verify:
- Default headers are sent with every request and call headers override them
- Response headers come back alongside the body
- Failures raise BankAPIError and increment bbva_request_failures_total
"""
import json

import httpx
import pytest

from domain.config import BBVAConfig
from domain.exceptions import BankAPIError
from infrastructure.clients.bbva_client import BBVAClient, BankResponse
from infrastructure.metrics.metrics import bbva_request_failures_total

BASE = "https://servicios.bbva.es"


@pytest.fixture
def config():
    return BBVAConfig(base_url=BASE, connect_timeout=1.0, read_timeout=1.0, proxy_url=None)


def make_client(config, handler, headers=None):
    return BBVAClient(config, headers=headers, transport=httpx.MockTransport(handler))


class TestHeaders:

    def test_call_headers_override_defaults_for_one_call(self, config):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={})

        client = make_client(config, handler, headers={"Content-Type": "text/plain", "Accept": "application/json"})
        client.post(BASE + "/a", endpoint="test", headers={"Content-Type": "application/json", "BBVA-Method": "GET"})
        client.post(BASE + "/b", endpoint="test")

        assert seen[0].headers["Content-Type"] == "application/json"
        assert seen[0].headers["BBVA-Method"] == "GET"
        assert seen[0].headers["Accept"] == "application/json"
        assert seen[1].headers["Content-Type"] == "text/plain"
        assert "BBVA-Method" not in seen[1].headers

    def test_add_headers_applies_to_following_requests(self, config):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={})

        client = make_client(config, handler)
        client.post(BASE + "/a", endpoint="test")
        client.add_headers({"tsec": "token"})
        client.post(BASE + "/a", endpoint="test")

        assert "tsec" not in seen[0].headers
        assert seen[1].headers["tsec"] == "token"

    def test_response_exposes_headers_and_body(self, config):
        client = make_client(config, lambda request: httpx.Response(200, json={"ok": True}, headers={"tsec": "abc"}))
        response = client.post(BASE + "/sessions", endpoint="sessions", json={"consumerID": "00000013"})

        assert isinstance(response, BankResponse)
        assert response.headers["tsec"] == "abc"
        assert response.headers["TSEC"] == "abc"
        assert response.json() == {"ok": True}

    def test_form_fields_are_url_encoded(self, config):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, text="<xml/>")

        client = make_client(config, handler)
        client.post(BASE + "/login", endpoint="login", data={"eai_user": "0019-049021740T"})

        assert seen[0].headers["Content-Type"] == "application/x-www-form-urlencoded"
        assert seen[0].content == b"eai_user=0019-049021740T"


class TestFailures:

    def test_http_error_raises_bank_api_error(self, config):
        initial_value = bbva_request_failures_total.labels(endpoint="products")._value.get()
        client = make_client(config, lambda request: httpx.Response(403, text="Forbidden"))

        with pytest.raises(BankAPIError) as exc_info:
            client.post(BASE + "/products", endpoint="products")

        assert exc_info.value.status_code == 403
        assert "403" in str(exc_info.value)
        assert bbva_request_failures_total.labels(endpoint="products")._value.get() == initial_value + 1

    def test_timeout_raises_bank_api_error(self, config):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        client = make_client(config, handler)
        with pytest.raises(BankAPIError, match="timed out"):
            client.post(BASE + "/products", endpoint="products")

    def test_network_error_raises_bank_api_error(self, config):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(config, handler)
        with pytest.raises(BankAPIError, match="request failed"):
            client.post(BASE + "/products", endpoint="products")

    def test_utf16_json_body_is_decoded(self, config):
        body = json.dumps({"description": "Cafeter\u00eda"}, ensure_ascii=False).encode("utf-16-le")
        client = make_client(
            config,
            lambda request: httpx.Response(200, content=body, headers={"Content-Type": "application/json"}),
        )
        response = client.post(BASE + "/movements", endpoint="movements")

        assert response.json() == {"description": "Cafeter\u00eda"}

    def test_invalid_json_raises_bank_api_error(self, config):
        client = make_client(config, lambda request: httpx.Response(200, text="<html>maintenance</html>"))
        response = client.post(BASE + "/products", endpoint="products")

        with pytest.raises(BankAPIError, match="invalid JSON"):
            response.json()


def test_proxy_is_disabled_by_default(mocker, config):
    mock_client = mocker.patch("infrastructure.clients.bbva_client.httpx.Client")
    BBVAClient(config)
    assert mock_client.call_args.kwargs["proxy"] is None
    assert mock_client.call_args.kwargs["trust_env"] is False

def test_proxy_from_config(mocker):
    mock_client = mocker.patch("infrastructure.clients.bbva_client.httpx.Client")
    BBVAClient(BBVAConfig(base_url=BASE, proxy_url="http://localhost:8888"))
    assert mock_client.call_args.kwargs["proxy"] == "http://localhost:8888"
