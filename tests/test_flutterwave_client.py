"""Tests for the real Flutterwave client against an in-process httpx transport."""

import json

import httpx
import pytest

from src.integrations.clients.real_http.flutterwave import FlutterwaveClient
from src.integrations.contracts.interfaces import PaymentMethod, TransactionStatus
from src.integrations.policy.response_wrappers import (
    GatewayConfigurationError,
    GatewayTimeoutError,
    GatewayTransportError,
    IntegrationResponseError,
)

SECRET = "FLWSECK_TEST-abcdef1234567890"


def _client(handler, secret_key=SECRET):
    return FlutterwaveClient(
        secret_key=secret_key,
        base_url="https://gateway.test/v3",
        timeout_seconds=10,
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_charge_posts_once_with_type_and_bearer():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={"status": "success", "message": "Charge initiated", "data": {"id": 11, "status": "pending"}},
        )

    result = await _client(handler).charge({"tx_ref": "tx-1", "amount": 100.0}, PaymentMethod.MPESA)

    assert len(seen) == 1
    request = seen[0]
    assert request.method == "POST"
    assert request.url.path == "/v3/charges"
    assert request.url.params["type"] == "mpesa"
    assert request.headers["Authorization"] == f"Bearer {SECRET}"
    assert json.loads(request.content) == {"tx_ref": "tx-1", "amount": 100.0}
    assert result.success is True
    assert result.transaction_id == "11"


@pytest.mark.asyncio
async def test_gateway_rejection_is_a_failure_result():
    def handler(request):
        return httpx.Response(200, json={"status": "error", "message": "Invalid card"})

    result = await _client(handler).charge({}, PaymentMethod.CARD)
    assert result.success is False
    assert result.message == "Invalid card"


@pytest.mark.asyncio
async def test_timeout_raises_timeout_error():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(GatewayTimeoutError) as exc:
        await _client(handler).charge({}, PaymentMethod.CARD)
    assert exc.value.status_code == 504


@pytest.mark.asyncio
async def test_http_error_surfaces_gateway_message():
    def handler(request):
        return httpx.Response(400, json={"status": "error", "message": "Invalid authorization key"})

    with pytest.raises(GatewayTransportError) as exc:
        await _client(handler).charge({}, PaymentMethod.AIRTEL)
    assert exc.value.status_code == 500
    assert exc.value.message == "Invalid authorization key"


@pytest.mark.asyncio
async def test_connection_error_uses_generic_message():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(GatewayTransportError) as exc:
        await _client(handler).charge({}, PaymentMethod.MPESA)
    assert not isinstance(exc.value, GatewayTimeoutError)
    assert exc.value.message == "Payment failed. Please try again."


@pytest.mark.asyncio
async def test_missing_secret_key_never_calls_gateway():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={})

    with pytest.raises(GatewayConfigurationError):
        await _client(handler, secret_key="").charge({}, PaymentMethod.MPESA)
    assert calls == []


@pytest.mark.asyncio
async def test_verify_transaction():
    def handler(request):
        assert request.method == "GET"
        assert request.url.path == "/v3/transactions/4975363/verify"
        return httpx.Response(
            200,
            json={"status": "success", "message": "Transaction fetched successfully", "data": {"id": 4975363, "status": "successful"}},
        )

    result = await _client(handler).verify_transaction("4975363")
    assert result.success is True
    assert result.status == TransactionStatus.SUCCESSFUL


@pytest.mark.asyncio
@pytest.mark.parametrize("transaction_id", ["?", "..", "12/../34", "abc", ""])
async def test_verify_refuses_non_numeric_id(transaction_id):
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={"status": "success", "data": {}})

    with pytest.raises(IntegrationResponseError):
        await _client(handler).verify_transaction(transaction_id)
    assert calls == []


EXPECTED_TIMEOUT = {"connect": 10, "read": 10, "write": 10, "pool": 10}


@pytest.mark.asyncio
@pytest.mark.parametrize("charge_type", [PaymentMethod.MPESA, PaymentMethod.AIRTEL, PaymentMethod.CARD])
async def test_configured_timeout_applies_to_every_charge(charge_type):
    seen = []

    def handler(request):
        seen.append(request.extensions["timeout"])
        return httpx.Response(200, json={"status": "success", "data": {"id": 1}})

    await _client(handler).charge({"tx_ref": "tx-1"}, charge_type)
    assert seen == [EXPECTED_TIMEOUT]


@pytest.mark.asyncio
async def test_configured_timeout_applies_to_verify():
    seen = []

    def handler(request):
        seen.append(request.extensions["timeout"])
        return httpx.Response(200, json={"status": "success", "data": {"id": 1, "status": "pending"}})

    await _client(handler).verify_transaction("1")
    assert seen == [EXPECTED_TIMEOUT]
