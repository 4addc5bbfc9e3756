from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class PaymentMethod(str, Enum):
    MPESA = "mpesa"
    AIRTEL = "airtel"
    CARD = "card"

    @property
    def is_mobile_money(self) -> bool:
        return self in (PaymentMethod.MPESA, PaymentMethod.AIRTEL)


class TransactionStatus(str, Enum):
    """Transaction states reported by the gateway's verify endpoint."""
    PENDING = "pending"
    SUCCESSFUL = "successful"
    FAILED = "failed"
    CANCELLED = "cancelled"
    UNKNOWN = "unknown"


# ---------------------------------------------------------------------------
# Shared data models
# ---------------------------------------------------------------------------

@dataclass
class CheckoutRequest:
    """One validated checkout submission. Lives for a single request."""
    method: PaymentMethod
    amount: float
    email: str
    currency: str = "KES"
    phone_number: Optional[str] = None   # international form, 254XXXXXXXXX
    card_number: Optional[str] = None    # digits only
    expiry: Optional[str] = None         # MM/YY
    cvv: Optional[str] = None
    customer_name: Optional[str] = None


@dataclass
class EncryptedField:
    ciphertext: str                      # hex
    iv: str                              # hex, 16 bytes


@dataclass
class GatewayResult:
    """Uniform outcome of one gateway call."""
    success: bool
    message: str
    data: Dict[str, Any] = field(default_factory=dict)
    transaction_id: Optional[str] = None
    tx_ref: Optional[str] = None
    status: TransactionStatus = TransactionStatus.UNKNOWN


# ---------------------------------------------------------------------------
# Abstract gateway interface
# ---------------------------------------------------------------------------

class PaymentGateway(ABC):
    """Every charge gateway client (real or mock) must implement this interface."""

    @property
    @abstractmethod
    def mode(self) -> str:
        """`live` for a real gateway, `test` for the in-process mock."""

    @abstractmethod
    async def charge(
        self,
        payload: Dict[str, Any],
        charge_type: PaymentMethod,
        *,
        default_failure_message: str = "Payment failed. Please try again.",
    ) -> GatewayResult:
        """Send one charge request and interpret the response envelope."""

    @abstractmethod
    async def verify_transaction(self, transaction_id: str) -> GatewayResult:
        """Look up the current status of a previously initiated charge."""
