"""
Tests for structured logging of the BBVA adapter.
"""
import httpx
import pytest
from structlog.testing import capture_logs

from domain.config import BBVAConfig
from domain.exceptions import BankAPIError
from infrastructure.clients.bbva_bank import BBVABank, SESSIONS_ENDPOINT
from infrastructure.clients.bbva_client import BBVAClient
from infrastructure.logging.logging_adapter import LoggingAdapter

CONFIG = BBVAConfig(base_url="https://servicios.bbva.es", proxy_url=None)


def _bank(handler) -> BBVABank:
    client = BBVAClient(CONFIG, transport=httpx.MockTransport(handler))
    return BBVABank({"user": "ab12cd3", "password": "s3cret"}, config=CONFIG, client=client, logging_port=LoggingAdapter())


def test_login_events_are_bound_to_bank():
    def handler(request):
        if request.url.path == SESSIONS_ENDPOINT:
            return httpx.Response(200, json={}, headers={"tsec": "T"})
        return httpx.Response(200, text="OK")

    with capture_logs() as logs:
        _bank(handler).login()

    events = [entry["event"] for entry in logs]
    assert events == ["login_started", "login_completed"]
    assert all(entry["bank"] == "bbva" and entry["step"] == "login" for entry in logs)
    assert "s3cret" not in str(logs)

def test_missing_session_token_is_warned():
    with capture_logs() as logs:
        _bank(lambda request: httpx.Response(200, json={})).login()

    warnings = [entry for entry in logs if entry["log_level"] == "warning"]
    assert [entry["event"] for entry in warnings] == ["session_token_missing"]

def test_failed_request_is_logged():
    with capture_logs() as logs:
        bank = _bank(lambda request: httpx.Response(500, text="boom"))
        with pytest.raises(BankAPIError):
            bank.login()

    errors = [entry for entry in logs if entry["log_level"] == "error"]
    assert errors[0]["event"] == "bbva_request_failed"
    assert errors[0]["endpoint"] == "login"
    assert errors[0]["status_code"] == 500
