from typing import Any, Dict, Optional

from .interfaces import GatewayResult, PaymentMethod, TransactionStatus

"""
Payment contracts.

Defines the expected request/response structures for gateway operations:
- initiating a charge (mobile money or card)
- checking a transaction's status

These contracts must be used by both:
- clients/mocks/flutterwave.py (fake responses for development/testing)
- clients/real_http/flutterwave.py (real API calls)
"""

GATEWAY_SUCCESS = "success"

TERMINAL_STATUSES = frozenset(
    {TransactionStatus.SUCCESSFUL, TransactionStatus.FAILED, TransactionStatus.CANCELLED}
)


def is_terminal_status(status: TransactionStatus) -> bool:
    """Return True once a transaction can no longer change state."""
    return status in TERMINAL_STATUSES


def parse_transaction_status(raw_status: Any) -> TransactionStatus:
    value = str(raw_status or "").strip().lower()
    try:
        return TransactionStatus(value)
    except ValueError:
        return TransactionStatus.UNKNOWN


def charge_type_for(network: str) -> PaymentMethod:
    """Map a mobile-money network name to the gateway `type` query value."""
    return PaymentMethod.MPESA if str(network).strip().lower() == "mpesa" else PaymentMethod.AIRTEL


def result_to_dict(result: GatewayResult, *, success_message: Optional[str] = None) -> Dict[str, Any]:
    """Shape a `GatewayResult` as the `{success, message, data?}` API body."""
    if result.success:
        body: Dict[str, Any] = {"success": True, "data": result.data}
        if success_message:
            body["message"] = success_message
        return body
    return {"success": False, "message": result.message}


VERIFY_SUMMARY_FIELDS = ("id", "tx_ref", "status", "amount", "currency", "charged_amount", "payment_type", "created_at")


def verify_summary(result: GatewayResult) -> Dict[str, Any]:
    """Keep only the non-sensitive transaction fields from a verify envelope."""
    envelope = result.data if isinstance(result.data, dict) else {}
    data = envelope.get("data")
    if not isinstance(data, dict):
        return {}
    return {key: data[key] for key in VERIFY_SUMMARY_FIELDS if key in data}
