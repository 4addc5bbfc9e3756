"""Shared backend validation for checkout submissions.

The checkout form posts plain JSON dictionaries. The predicates here are the
single source of the field rules; the collectors run every check and gather
all failures into a `field -> message` mapping before anything is reported.

On validation failure, raise `FormValidationError` so the API can return HTTP 400
with structured `errors`.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, Optional

MISSING_FIELDS_MESSAGE = "Missing required fields."
REQUIRED_SUFFIX = " is required"

MOBILE_MONEY_NETWORKS = ("mpesa", "airtel")

_EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
_PHONE_RE = re.compile(r"(\+254|0)[17]\d{8}")
_INTERNATIONAL_PHONE_RE = re.compile(r"254[17]\d{8}")
_CARD_NUMBER_RE = re.compile(r"\d{16}")
_EXPIRY_RE = re.compile(r"\d{2}/\d{2}")
_TRANSACTION_ID_RE = re.compile(r"[0-9]+")
_CVV_RE = re.compile(r"\d{3,4}")
_WHITESPACE_RE = re.compile(r"\s")


@dataclass
class FormValidationError(Exception):
    """Exception raised for checkout validation failures.

    Attributes:
        field_errors: mapping of field name -> human-readable error message.
        message: top-level message shown to the payer.
    """

    field_errors: Dict[str, str]
    message: str = "Validation failed"

    def __str__(self) -> str:  # pragma: no cover
        return self.message


def _as_str(v: Any) -> str:
    return "" if v is None else str(v)


def _strip(v: Any) -> str:
    return _as_str(v).strip()


def _is_missing(v: Any) -> bool:
    return v is None or (isinstance(v, str) and not v.strip())


def add_error(errors: Dict[str, str], field: str, message: str) -> None:
    if field not in errors:
        errors[field] = message


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


def parse_amount(value: Any) -> Optional[float]:
    """Return the amount as a float, or None when it is not a usable number."""
    if value is None or isinstance(value, bool):
        return None
    try:
        amount = float(_strip(value)) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(amount):
        return None
    return amount


def is_valid_amount(value: Any) -> bool:
    amount = parse_amount(value)
    return amount is not None and amount >= 1


def is_valid_email(value: Any) -> bool:
    return bool(_EMAIL_RE.fullmatch(_as_str(value)))


def is_valid_phone_number(value: Any) -> bool:
    """Kenyan mobile number in local (07.., 01..) or +254 form."""
    return bool(_PHONE_RE.fullmatch(_as_str(value)))


def is_valid_international_phone_number(value: Any) -> bool:
    return bool(_INTERNATIONAL_PHONE_RE.fullmatch(_as_str(value)))


def is_valid_card_number(value: Any) -> bool:
    return bool(_CARD_NUMBER_RE.fullmatch(_WHITESPACE_RE.sub("", _as_str(value))))


def is_valid_expiry(value: Any, today: Optional[date] = None) -> bool:
    """MM/YY that is not earlier than the current month (two-digit years)."""
    expiry = _as_str(value)
    if not _EXPIRY_RE.fullmatch(expiry):
        return False
    month, year = (int(part) for part in expiry.split("/"))
    if not 1 <= month <= 12:
        return False
    today = today or date.today()
    return (year, month) >= (today.year % 100, today.month)


def is_valid_cvv(value: Any) -> bool:
    return bool(_CVV_RE.fullmatch(_as_str(value)))


def is_valid_network(value: Any) -> bool:
    return _strip(value).lower() in MOBILE_MONEY_NETWORKS


def is_valid_transaction_id(value: Any) -> bool:
    """Gateway transaction ids are plain ASCII digit strings."""
    return bool(_TRANSACTION_ID_RE.fullmatch(_as_str(value)))


# ---------------------------------------------------------------------------
# Collectors
# ---------------------------------------------------------------------------


def require_fields(payload: Dict[str, Any], fields: Iterable[str], errors: Dict[str, str]) -> bool:
    """Record a `required` error for each absent field; True when all are present."""
    complete = True
    for field in fields:
        if _is_missing(payload.get(field)):
            add_error(errors, field, f"{field}{REQUIRED_SUFFIX}")
            complete = False
    return complete


def validate_amount(value: Any, errors: Dict[str, str], field: str = "amount") -> None:
    if _is_missing(value):
        return
    if not is_valid_amount(value):
        add_error(errors, field, "Amount must be greater than 0.")


def validate_email(value: Any, errors: Dict[str, str], field: str = "email") -> None:
    if _is_missing(value):
        return
    if not is_valid_email(value):
        add_error(errors, field, "Invalid email address.")


def validate_mobile_money_payment(payload: Dict[str, Any]) -> Dict[str, str]:
    """Validate a `/api/pay` body: amount, phone, network, email."""
    errors: Dict[str, str] = {}
    require_fields(payload, ("amount", "phone", "network", "email"), errors)

    phone = payload.get("phone")
    if not _is_missing(phone) and not is_valid_phone_number(_strip(phone)):
        add_error(errors, "phone", "Invalid phone number format.")

    network = payload.get("network")
    if not _is_missing(network) and not is_valid_network(network):
        add_error(errors, "network", "Network must be one of: mpesa, airtel.")

    validate_email(payload.get("email"), errors)
    validate_amount(payload.get("amount"), errors)
    return errors


def validate_card_payment(payload: Dict[str, Any], today: Optional[date] = None) -> Dict[str, str]:
    """Validate a `/api/card-pay` body: amount, number, cvv, expiry, email."""
    errors: Dict[str, str] = {}
    require_fields(payload, ("amount", "number", "cvv", "expiry", "email"), errors)

    number = payload.get("number")
    if not _is_missing(number) and not is_valid_card_number(number):
        add_error(errors, "number", "Invalid card number.")

    expiry = payload.get("expiry")
    if not _is_missing(expiry) and not is_valid_expiry(_strip(expiry), today=today):
        add_error(errors, "expiry", "Invalid expiry date.")

    cvv = payload.get("cvv")
    if not _is_missing(cvv) and not is_valid_cvv(_strip(cvv)):
        add_error(errors, "cvv", "Invalid CVV.")

    validate_email(payload.get("email"), errors)
    validate_amount(payload.get("amount"), errors)
    return errors


def validate_mpesa_widget_payment(payload: Dict[str, Any]) -> Dict[str, str]:
    """Validate a `/api/mpesa-pay` body.

    The M-Pesa widget formats the number before posting, so both the local
    form and the 254XXXXXXXXX form are accepted.
    """
    errors: Dict[str, str] = {}
    require_fields(payload, ("amount", "phone_number", "email"), errors)

    phone = _strip(payload.get("phone_number"))
    if phone and not (is_valid_phone_number(phone) or is_valid_international_phone_number(phone)):
        add_error(errors, "phone_number", "Please enter a valid Safaricom phone number")

    customer = payload.get("customer")
    if customer is not None and not isinstance(customer, dict):
        add_error(errors, "customer", "customer must be an object")

    validate_email(payload.get("email"), errors)
    validate_amount(payload.get("amount"), errors)
    return errors


def validate_transaction_id(value: Any) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    if not is_valid_transaction_id(value):
        add_error(errors, "transaction_id", "Invalid transaction id.")
    return errors


def raise_if_errors(errors: Dict[str, str], message: Optional[str] = None) -> None:
    """Raise `FormValidationError` when `errors` is non-empty.

    The top-level message is the missing-fields notice when any field is
    absent, otherwise the first field error.
    """
    if not errors:
        return
    if message is None:
        if any(msg.endswith(REQUIRED_SUFFIX) for msg in errors.values()):
            message = MISSING_FIELDS_MESSAGE
        else:
            message = next(iter(errors.values()))
    raise FormValidationError(field_errors=errors, message=message)
