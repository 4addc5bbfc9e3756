"""
Integrations layer.
This package contains all code used to communicate with the external payment
gateway (Flutterwave v3 charges and transaction verification).

Key rule:
- Endpoints MUST NOT call the gateway directly.
- Endpoints call a `PaymentGateway` client (under src/integrations/clients).
- We use the MOCK client when no secret key is configured and swap to the
  REAL_HTTP client when credentials are available.

Switching implementations:
- The selection of mock vs real clients happens in ONE place (src/api/dependencies.py).
"""

from .contracts.interfaces import (
    CheckoutRequest,
    EncryptedField,
    GatewayResult,
    PaymentGateway,
    PaymentMethod,
    TransactionStatus,
)
from .contracts.payments import (
    charge_type_for,
    is_terminal_status,
    parse_transaction_status,
    result_to_dict,
)

__all__ = [
    # interfaces
    "CheckoutRequest", "EncryptedField", "GatewayResult", "PaymentGateway",
    "PaymentMethod", "TransactionStatus",
    # payments
    "charge_type_for", "is_terminal_status", "parse_transaction_status", "result_to_dict",
]
