import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from src.api.dependencies import get_gateway_config, get_payment_gateway, get_settings
from src.checkout.formatting import digits_only, to_international_phone_number
from src.checkout.payloads import build_card_payload, build_mobile_money_payload, build_mpesa_widget_payload
from src.checkout.validation import (
    parse_amount,
    raise_if_errors,
    validate_card_payment,
    validate_mobile_money_payment,
    validate_mpesa_widget_payment,
    validate_transaction_id,
)
from src.integrations.contracts.interfaces import CheckoutRequest, PaymentGateway, PaymentMethod
from src.integrations.contracts.payments import charge_type_for, is_terminal_status, result_to_dict, verify_summary
from src.integrations.policy.response_wrappers import GatewayConfigurationError
from src.integrations.security.card_encryption import EncryptionKeyError
from src.utils.config_loader import GatewayConfig, Settings

logger = logging.getLogger(__name__)

api = APIRouter()
payments_api = api

MPESA_WIDGET_FAILURE_MESSAGE = "Failed to initiate payment. Please try again."


# Fields are loosely typed on purpose: missing or malformed values must reach
# the checkout validators (400 with field errors) instead of FastAPI's 422.
class MobileMoneyPayRequest(BaseModel):
    amount: Any = None
    phone: Any = None
    network: Any = None
    email: Any = None


class CardPayRequest(BaseModel):
    amount: Any = None
    number: Any = None
    cvv: Any = None
    expiry: Any = None
    email: Any = None


class MpesaWidgetPayRequest(BaseModel):
    amount: Any = None
    phone_number: Any = None
    email: Any = None
    customer: Optional[Any] = Field(default=None, description="Optional {email, phone_number, name}")


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def _prompt_message(label: str) -> str:
    return f"Please check your phone for the {label} prompt to complete the payment."


@api.post("/pay", tags=["Payments"])
async def mobile_money_pay(
    request: MobileMoneyPayRequest,
    gateway: PaymentGateway = Depends(get_payment_gateway),
    config: GatewayConfig = Depends(get_gateway_config),
):
    """M-Pesa or Airtel Money charge; the payer confirms on their handset."""
    raise_if_errors(validate_mobile_money_payment(request.model_dump()))

    charge_type = charge_type_for(request.network)
    checkout = CheckoutRequest(
        method=charge_type,
        amount=parse_amount(request.amount),
        email=_text(request.email),
        currency=config.gateway.currency,
        phone_number=to_international_phone_number(request.phone),
    )
    logger.info(
        "Mobile money payment: phone=%s formatted=%s amount=%s network=%s email=%s",
        _text(request.phone), checkout.phone_number, checkout.amount, charge_type.value, checkout.email,
    )

    payload = build_mobile_money_payload(checkout, config.gateway)
    result = await gateway.charge(payload, charge_type)
    return result_to_dict(result, success_message=_prompt_message(charge_type.value.upper()))


@api.post("/card-pay", tags=["Payments"])
async def card_pay(
    request: CardPayRequest,
    gateway: PaymentGateway = Depends(get_payment_gateway),
    config: GatewayConfig = Depends(get_gateway_config),
    settings: Settings = Depends(get_settings),
):
    raise_if_errors(validate_card_payment(request.model_dump()))

    checkout = CheckoutRequest(
        method=PaymentMethod.CARD,
        amount=parse_amount(request.amount),
        email=_text(request.email),
        currency=config.gateway.currency,
        card_number=digits_only(request.number),
        expiry=_text(request.expiry),
        cvv=_text(request.cvv),
    )

    try:
        payload = build_card_payload(checkout, settings.encryption_key, config.gateway)
    except EncryptionKeyError as e:
        logger.error("Card encryption unavailable: %s", e)
        raise GatewayConfigurationError("Payment gateway is not configured.") from e

    result = await gateway.charge(payload, PaymentMethod.CARD)
    if result.success:
        logger.info("Card payment initiated successfully for %s - Amount: %s", checkout.email, checkout.amount)
    else:
        logger.error("Card payment failed for %s: %s", checkout.email, result.message)
    return result_to_dict(result)


@api.post("/mpesa-pay", tags=["Payments"])
async def mpesa_widget_pay(
    request: MpesaWidgetPayRequest,
    gateway: PaymentGateway = Depends(get_payment_gateway),
    config: GatewayConfig = Depends(get_gateway_config),
):
    """Stand-alone M-Pesa widget. The phone number may already be in 254 form."""
    raise_if_errors(validate_mpesa_widget_payment(request.model_dump()))

    customer: Dict[str, Any] = request.customer or {}
    checkout = CheckoutRequest(
        method=PaymentMethod.MPESA,
        amount=parse_amount(request.amount),
        email=_text(request.email),
        currency=config.gateway.currency,
        phone_number=to_international_phone_number(request.phone_number),
        customer_name=_text(customer.get("name")) or None,
    )

    payload = build_mpesa_widget_payload(checkout, customer, config.gateway)
    result = await gateway.charge(
        payload,
        PaymentMethod.MPESA,
        default_failure_message=MPESA_WIDGET_FAILURE_MESSAGE,
    )
    return result_to_dict(result, success_message=_prompt_message("M-Pesa"))


@api.get("/transactions/{transaction_id}/verify", tags=["Payments"])
async def verify_transaction(
    transaction_id: str,
    gateway: PaymentGateway = Depends(get_payment_gateway),
):
    """Status lookup for client-side polling; the secret key stays on the server."""
    raise_if_errors(validate_transaction_id(transaction_id))

    result = await gateway.verify_transaction(transaction_id)
    body: Dict[str, Any] = {
        "success": result.success,
        "status": result.status.value,
        "terminal": is_terminal_status(result.status),
        "message": result.message,
    }
    if result.success:
        body["data"] = verify_summary(result)
    return body
