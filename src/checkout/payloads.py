"""Gateway charge payload construction.

Builders take an already validated `CheckoutRequest` and return the JSON
body for the gateway's `/charges` endpoint. They make no network calls.
"""

from __future__ import annotations

import time
import uuid
from typing import Any, Dict, Optional

from src.checkout.formatting import digits_only
from src.integrations.contracts.interfaces import CheckoutRequest, PaymentMethod
from src.integrations.security.card_encryption import encrypt_card_number
from src.utils.config_loader import GatewaySettings


def new_tx_ref(now: Optional[float] = None) -> str:
    """Per-submission correlation token: `tx-<epoch ms>-<random suffix>`."""
    millis = int((time.time() if now is None else now) * 1000)
    return f"tx-{millis}-{uuid.uuid4().hex[:6]}"


def _customizations(label: str, logo_url: Optional[str] = None) -> Dict[str, str]:
    customizations = {
        "title": f"{label} Payment",
        "description": f"Complete your payment using {label}",
    }
    if logo_url:
        customizations["logo"] = logo_url
    return customizations


def build_mobile_money_payload(request: CheckoutRequest, settings: Optional[GatewaySettings] = None) -> Dict[str, Any]:
    settings = settings or GatewaySettings()
    label = request.method.value.upper()
    return {
        "tx_ref": new_tx_ref(),
        "amount": float(request.amount),
        "currency": request.currency,
        "email": request.email,
        "phone_number": request.phone_number,
        "customer": {
            "email": request.email,
            "phone_number": request.phone_number,
            "name": request.customer_name or settings.default_customer_name,
        },
        "customizations": _customizations(label),
    }


def build_mpesa_widget_payload(
    request: CheckoutRequest,
    customer: Optional[Dict[str, Any]] = None,
    settings: Optional[GatewaySettings] = None,
) -> Dict[str, Any]:
    """Payload for the stand-alone M-Pesa widget.

    Caller-supplied customer fields win over the defaults; empty values are
    dropped first.
    """
    settings = settings or GatewaySettings()
    merged_customer: Dict[str, Any] = {
        "email": request.email,
        "phone_number": request.phone_number,
        "name": request.customer_name or settings.default_customer_name,
    }
    merged_customer.update({k: v for k, v in (customer or {}).items() if v not in (None, "")})

    return {
        "tx_ref": new_tx_ref(),
        "amount": float(request.amount),
        "currency": request.currency,
        "payment_type": PaymentMethod.MPESA.value,
        "email": request.email,
        "phone_number": request.phone_number,
        "customer": merged_customer,
        "customizations": _customizations("M-Pesa", settings.logo_url),
    }


def build_card_payload(
    request: CheckoutRequest,
    encryption_key: str,
    settings: Optional[GatewaySettings] = None,
) -> Dict[str, Any]:
    """Card charge payload with the card number encrypted.

    `encryption_key` on the wire carries the IV, not a key. The gateway
    contract names it that way.
    """
    settings = settings or GatewaySettings()
    encrypted = encrypt_card_number(digits_only(request.card_number), encryption_key)
    return {
        "tx_ref": new_tx_ref(),
        "amount": float(request.amount),
        "currency": request.currency,
        "redirect_url": settings.redirect_url,
        "payment_type": PaymentMethod.CARD.value,
        "card_number": encrypted.ciphertext,
        "cvv": request.cvv,
        "expiry": request.expiry,
        "email": request.email,
        "encryption_key": encrypted.iv,
        "customer": {
            "email": request.email,
            "name": request.customer_name or settings.default_customer_name,
        },
        "customizations": _customizations(PaymentMethod.CARD.value.upper()),
    }


def redact_payload(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Copy of `payload` safe for logging."""
    return {
        k: ("***" if k in {"card_number", "cvv", "encryption_key"} else v)
        for k, v in payload.items()
    }
