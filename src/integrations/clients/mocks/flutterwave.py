"""
Flutterwave — MOCK client.

⚠️  This is a mock implementation for development and testing.
    It never touches the network and answers with envelopes shaped like the
    real v3 API, so the checkout form can be exercised end-to-end without
    credentials.
"""

import logging
import random
import uuid
from typing import Any, Dict

from src.checkout.payloads import redact_payload
from src.integrations.contracts.interfaces import GatewayResult, PaymentGateway, PaymentMethod
from src.integrations.policy.response_wrappers import (
    DEFAULT_FAILURE_MESSAGE,
    normalize_charge_response,
    normalize_verify_response,
)

logger = logging.getLogger(__name__)


class FlutterwaveMockClient(PaymentGateway):
    """
    Mock Flutterwave client.

    Parameters
    ----------
    charge_success_rate : float
        Probability (0–1) that a charge is accepted. Default 1.0.
    settled_status : str
        Status reported by `verify_transaction`. Default "successful".
    """

    def __init__(self, charge_success_rate: float = 1.0, settled_status: str = "successful"):
        self._success_rate = charge_success_rate
        self._settled_status = settled_status
        logger.info("[FLW MOCK] Client initialised (success_rate=%.0f%%)", charge_success_rate * 100)

    @property
    def mode(self) -> str:
        return "test"

    def _should_succeed(self) -> bool:
        return random.random() < self._success_rate

    async def charge(
        self,
        payload: Dict[str, Any],
        charge_type: PaymentMethod,
        *,
        default_failure_message: str = DEFAULT_FAILURE_MESSAGE,
    ) -> GatewayResult:
        logger.info("[FLW MOCK] %s charge payload=%s", charge_type.value, redact_payload(payload))

        if not self._should_succeed():
            envelope = {"status": "error", "message": "Transaction declined by mock gateway.", "data": None}
            return normalize_charge_response(envelope, default_failure_message=default_failure_message)

        envelope = {
            "status": "success",
            "message": "Charge initiated",
            "data": {
                "id": random.randint(1_000_000, 9_999_999),
                "tx_ref": payload.get("tx_ref"),
                "flw_ref": f"FLW-MOCK-{uuid.uuid4().hex[:12].upper()}",
                "amount": payload.get("amount"),
                "currency": payload.get("currency"),
                "charge_type": charge_type.value,
                "status": "pending",
            },
        }
        return normalize_charge_response(envelope, default_failure_message=default_failure_message)

    async def verify_transaction(self, transaction_id: str) -> GatewayResult:
        logger.info("[FLW MOCK] verify id=%s -> %s", transaction_id, self._settled_status)
        envelope = {
            "status": "success",
            "message": "Transaction fetched successfully",
            "data": {"id": transaction_id, "status": self._settled_status},
        }
        return normalize_verify_response(envelope)
