from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, ValidationError

from src.integrations.contracts.interfaces import GatewayResult, TransactionStatus
from src.integrations.contracts.payments import GATEWAY_SUCCESS, parse_transaction_status

DEFAULT_FAILURE_MESSAGE = "Payment failed. Please try again."
TIMEOUT_MESSAGE = "Request timeout. Please try again."


class IntegrationResponseError(ValueError):
    def __init__(self, message: str, *, payload: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.payload = payload or {}


class GatewayError(Exception):
    """Transport-level failure talking to the gateway. Carries the HTTP status to return."""

    status_code = 500

    def __init__(self, message: str = DEFAULT_FAILURE_MESSAGE, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class GatewayTransportError(GatewayError):
    pass


class GatewayTimeoutError(GatewayTransportError):
    status_code = 504

    def __init__(self, message: str = TIMEOUT_MESSAGE) -> None:
        super().__init__(message)


class GatewayConfigurationError(GatewayError):
    pass


class GatewayEnvelopeModel(BaseModel):
    status: str
    message: Optional[str] = None
    data: Dict[str, Any] = Field(default_factory=dict)


def normalize_charge_response(
    raw: Any,
    *,
    default_failure_message: str = DEFAULT_FAILURE_MESSAGE,
) -> GatewayResult:
    """Map a `/charges` envelope to a `GatewayResult`.

    Only `status == "success"` counts as success. An envelope that cannot be
    parsed is treated as a rejection.
    """
    try:
        envelope = _parse_envelope(raw)
    except IntegrationResponseError:
        return GatewayResult(success=False, message=default_failure_message, data=_as_dict(raw))

    data = envelope.data
    if envelope.status.strip().lower() == GATEWAY_SUCCESS:
        return GatewayResult(
            success=True,
            message=envelope.message or "Charge initiated",
            data=raw,
            transaction_id=_transaction_id(data),
            tx_ref=_str_or_none(data.get("tx_ref")),
            status=parse_transaction_status(data.get("status") or TransactionStatus.PENDING.value),
        )

    return GatewayResult(
        success=False,
        message=envelope.message or default_failure_message,
        data=raw,
        tx_ref=_str_or_none(data.get("tx_ref")),
        status=TransactionStatus.FAILED,
    )


def normalize_verify_response(raw: Any) -> GatewayResult:
    """Map a `/transactions/{id}/verify` envelope to a `GatewayResult`."""
    try:
        envelope = _parse_envelope(raw)
    except IntegrationResponseError:
        return GatewayResult(success=False, message="Unable to read transaction status.", data=_as_dict(raw))

    data = envelope.data
    ok = envelope.status.strip().lower() == GATEWAY_SUCCESS
    return GatewayResult(
        success=ok,
        message=envelope.message or ("Transaction fetched" if ok else "Unable to read transaction status."),
        data=raw,
        transaction_id=_transaction_id(data),
        tx_ref=_str_or_none(data.get("tx_ref")),
        status=parse_transaction_status(data.get("status")) if ok else TransactionStatus.UNKNOWN,
    )


def error_message_from_body(body: Any, default: str = DEFAULT_FAILURE_MESSAGE) -> str:
    """Gateway error bodies usually carry a `message`; fall back to `default`."""
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message.strip():
            return message
    return default


def _parse_envelope(raw: Any) -> GatewayEnvelopeModel:
    if not isinstance(raw, dict):
        raise IntegrationResponseError("Gateway response is not a JSON object.", payload={"raw": raw})
    data = raw.get("data")
    try:
        return GatewayEnvelopeModel(
            status=str(raw.get("status") or ""),
            message=_str_or_none(raw.get("message")),
            data=data if isinstance(data, dict) else {},
        )
    except ValidationError as exc:
        raise IntegrationResponseError(f"Response validation failed: {exc}", payload=raw) from exc


def _transaction_id(data: Dict[str, Any]) -> Optional[str]:
    return _str_or_none(data.get("id"))


def _str_or_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _as_dict(raw: Any) -> Dict[str, Any]:
    return raw if isinstance(raw, dict) else {}
