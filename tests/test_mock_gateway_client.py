import pytest

from src.integrations.clients.mocks.flutterwave import FlutterwaveMockClient
from src.integrations.contracts.interfaces import PaymentMethod, TransactionStatus


@pytest.mark.asyncio
async def test_mock_charge_succeeds_by_default():
    client = FlutterwaveMockClient()
    result = await client.charge({"tx_ref": "tx-1", "amount": 100.0, "currency": "KES"}, PaymentMethod.MPESA)
    assert client.mode == "test"
    assert result.success is True
    assert result.transaction_id
    assert result.tx_ref == "tx-1"
    assert result.status == TransactionStatus.PENDING


@pytest.mark.asyncio
async def test_mock_charge_can_decline():
    client = FlutterwaveMockClient(charge_success_rate=0.0)
    result = await client.charge({"tx_ref": "tx-2"}, PaymentMethod.CARD, default_failure_message="nope")
    assert result.success is False
    assert result.message == "Transaction declined by mock gateway."


@pytest.mark.asyncio
async def test_mock_verify_reports_settled_status():
    client = FlutterwaveMockClient(settled_status="failed")
    result = await client.verify_transaction("42")
    assert result.status == TransactionStatus.FAILED
    assert result.transaction_id == "42"
