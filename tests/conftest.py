"""
Pytest Configuration and Fixtures

Provides a relay app wired to a stubbed upstream API.
"""

from typing import Any, Callable, Dict, List

import httpx
import pytest
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

from payment_proxy.config import Settings
from payment_proxy.main import create_app

UPSTREAM_BASE_URL = "https://upstream.test/v1/studio/api"


class UpstreamStub:
    """Records forwarded requests and answers them with a canned reply"""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self._reply: Callable[[httpx.Request], httpx.Response] = lambda request: httpx.Response(
            200, json={"data": []}
        )

    def reply_with(self, status_code: int = 200, **kwargs: Any) -> None:
        self._reply = lambda request: httpx.Response(status_code, **kwargs)

    def fail_with(self, exc: Exception) -> None:
        def _raise(request: httpx.Request) -> httpx.Response:
            raise exc

        self._reply = _raise

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._reply(request)


@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from the local environment and .env file"""
    return Settings(
        _env_file=None,
        environment="development",
        api_key="test-api-key",
        client_id="test-client-id",
        upstream_base_url=UPSTREAM_BASE_URL,
    )


@pytest.fixture
def upstream() -> UpstreamStub:
    return UpstreamStub()


@pytest.fixture
def app(test_settings, upstream):
    return create_app(test_settings, transport=httpx.MockTransport(upstream))


@pytest.fixture
def test_client(app):
    """FastAPI test client"""
    with TestClient(app) as client:
        yield client


@pytest.fixture
async def async_client(app):
    """Async HTTP client for testing"""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def payment_intent_body() -> Dict[str, Any]:
    return {
        "fiat_amount": "300",
        "fiat_currency": "TWD",
        "callback_url": "https://merchant.example/callback",
        "order_data": {"order_id": "ord_123"},
    }


@pytest.fixture
def asset_transfer_body() -> Dict[str, Any]:
    return {
        "chain_id": "arb",
        "contract_address": "0xaf88d065e77c8cC2239327C5EDb3A432268e5831",
        "amount": "12.5",
        "wallet_address": "0x1234567890abcdef1234567890abcdef12345678",
    }


@pytest.fixture
def success_webhook_payload() -> Dict[str, Any]:
    return {
        "status": "success",
        "payment_intent_id": "pi_test123",
        "payment_tx_hash": "0xabc",
        "received_amount": 10,
        "aggregated_amount": 10,
    }
