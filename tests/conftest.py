"""Pytest fixtures for the checkout pipeline and payments API."""

from typing import Any, Dict, List, Optional, Tuple

import pytest
from fastapi.testclient import TestClient

from src.api.dependencies import get_gateway_config, get_payment_gateway, get_settings
from src.api.main import app
from src.integrations.contracts.interfaces import GatewayResult, PaymentGateway, PaymentMethod, TransactionStatus
from src.utils.config_loader import GatewayConfig, Settings

TEST_ENCRYPTION_KEY = "00112233445566778899aabbccddeeff00112233445566778899aabbccddeeff"


class RecordingGateway(PaymentGateway):
    """In-process gateway double that records every charge it receives."""

    def __init__(self, result: Optional[GatewayResult] = None, error: Optional[Exception] = None):
        self.result = result or GatewayResult(
            success=True,
            message="Charge initiated",
            data={"status": "success", "message": "Charge initiated", "data": {"id": 4975363, "status": "pending"}},
            transaction_id="4975363",
            status=TransactionStatus.PENDING,
        )
        self.error = error
        self.charges: List[Tuple[Dict[str, Any], PaymentMethod, str]] = []
        self.verified: List[str] = []

    @property
    def mode(self) -> str:
        return "test"

    async def charge(self, payload, charge_type, *, default_failure_message="Payment failed. Please try again."):
        self.charges.append((payload, charge_type, default_failure_message))
        if self.error is not None:
            raise self.error
        return self.result

    async def verify_transaction(self, transaction_id):
        self.verified.append(transaction_id)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def encryption_key():
    return TEST_ENCRYPTION_KEY


@pytest.fixture
def settings():
    return Settings(secret_key="FLWSECK_TEST-abcdef1234567890", encryption_key=TEST_ENCRYPTION_KEY)


@pytest.fixture
def gateway():
    return RecordingGateway()


@pytest.fixture
def client(gateway, settings):
    """TestClient wired to a RecordingGateway; server errors become 500 responses."""
    app.dependency_overrides[get_payment_gateway] = lambda: gateway
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_gateway_config] = lambda: GatewayConfig()
    try:
        yield TestClient(app, raise_server_exceptions=False)
    finally:
        app.dependency_overrides.clear()
