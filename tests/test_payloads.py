"""Tests for gateway payload construction."""

import re

from src.checkout.payloads import (
    build_card_payload,
    build_mobile_money_payload,
    build_mpesa_widget_payload,
    new_tx_ref,
    redact_payload,
)
from src.integrations.contracts.interfaces import CheckoutRequest, EncryptedField, PaymentMethod
from src.integrations.security.card_encryption import decrypt_card_number
from src.utils.config_loader import GatewaySettings


def _mobile_request(method=PaymentMethod.MPESA):
    return CheckoutRequest(method=method, amount=100, email="a@b.com", phone_number="254712345678")


def _card_request():
    return CheckoutRequest(
        method=PaymentMethod.CARD,
        amount=250,
        email="a@b.com",
        card_number="4111111111111111",
        expiry="11/27",
        cvv="123",
    )


def test_tx_ref_is_time_derived_and_unique():
    assert re.match(r"^tx-1700000000000-[0-9a-f]{6}$", new_tx_ref(now=1_700_000_000))
    refs = {new_tx_ref(now=1_700_000_000) for _ in range(50)}
    assert len(refs) == 50


def test_mobile_money_payload_shape():
    payload = build_mobile_money_payload(_mobile_request())
    assert payload["tx_ref"].startswith("tx-")
    assert payload["amount"] == 100.0
    assert isinstance(payload["amount"], float)
    assert payload["currency"] == "KES"
    assert payload["phone_number"] == "254712345678"
    assert payload["customer"] == {"email": "a@b.com", "phone_number": "254712345678", "name": "Customer"}
    assert payload["customizations"]["title"] == "MPESA Payment"
    assert "MPESA" in payload["customizations"]["description"]


def test_airtel_payload_names_airtel():
    payload = build_mobile_money_payload(_mobile_request(PaymentMethod.AIRTEL))
    assert payload["customizations"]["title"] == "AIRTEL Payment"


def test_mpesa_widget_payload_merges_customer():
    settings = GatewaySettings(logo_url="https://example.com/logo.svg")
    payload = build_mpesa_widget_payload(
        _mobile_request(), customer={"name": "Jane", "email": None}, settings=settings
    )
    assert payload["payment_type"] == "mpesa"
    assert payload["customer"] == {"email": "a@b.com", "phone_number": "254712345678", "name": "Jane"}
    assert payload["customizations"] == {
        "title": "M-Pesa Payment",
        "description": "Complete your payment using M-Pesa",
        "logo": "https://example.com/logo.svg",
    }


def test_card_payload_carries_ciphertext_and_iv(encryption_key):
    payload = build_card_payload(_card_request(), encryption_key)
    assert payload["payment_type"] == "card"
    assert payload["card_number"] != "4111111111111111"
    assert len(payload["encryption_key"]) == 32
    assert payload["cvv"] == "123"
    assert payload["expiry"] == "11/27"
    assert payload["redirect_url"] == ""
    assert payload["customer"] == {"email": "a@b.com", "name": "Customer"}

    encrypted = EncryptedField(ciphertext=payload["card_number"], iv=payload["encryption_key"])
    assert decrypt_card_number(encrypted, encryption_key) == "4111111111111111"


def test_card_payloads_use_fresh_iv(encryption_key):
    first = build_card_payload(_card_request(), encryption_key)
    second = build_card_payload(_card_request(), encryption_key)
    assert first["encryption_key"] != second["encryption_key"]
    assert first["card_number"] != second["card_number"]
    assert first["tx_ref"] != second["tx_ref"]


def test_redact_payload_hides_card_fields(encryption_key):
    redacted = redact_payload(build_card_payload(_card_request(), encryption_key))
    assert redacted["card_number"] == "***"
    assert redacted["cvv"] == "***"
    assert redacted["encryption_key"] == "***"
    assert redacted["email"] == "a@b.com"
