"""
Payment Models

Enums and loose pydantic views of the payloads exchanged with the upstream
payment API. Request bodies are forwarded as-is, so these models describe the
fields the relay inspects rather than the full upstream schema.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class FiatCurrency(str, Enum):
    """Fiat currencies accepted when creating a payment intent"""

    TWD = "TWD"
    USD = "USD"

    @classmethod
    def values(cls) -> list:
        return [member.value for member in cls]


class WebhookStatus(str, Enum):
    """Payment status values reported by the upstream webhook"""

    SUCCESS = "success"
    EXPIRED = "expired"
    INSUFFICIENT_NOT_REFUNDED = "insufficient_not_refunded"
    INSUFFICIENT_REFUNDED = "insufficient_refunded"

    @classmethod
    def parse(cls, value: Any) -> Optional["WebhookStatus"]:
        """Return the matching status, or None for unknown values"""
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            return None


PAYMENT_INTENT_REQUIRED_FIELDS = ("fiat_amount", "fiat_currency")

ASSET_TRANSFER_REQUIRED_FIELDS = (
    "chain_id",
    "contract_address",
    "amount",
    "wallet_address",
)


class PaymentStatusUpdate(BaseModel):
    """Webhook payload sent by the upstream on payment status changes"""

    model_config = ConfigDict(extra="allow")

    status: Optional[Any] = None
    payment_intent_id: Optional[Any] = None
    payment_tx_hash: Optional[Any] = None
    received_amount: Optional[Any] = None
    aggregated_amount: Optional[Any] = None
    refund_tx_hash: Optional[Any] = None
    refund_amount: Optional[Any] = None
