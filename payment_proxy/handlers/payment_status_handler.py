"""
Payment Status Webhook Handler

Logs payment status transitions reported by the upstream payment API.
Payloads are not signature-verified; do not expose this handler beyond a
sandbox without adding verification.
"""

from typing import Any, Callable, Dict, Optional

from payment_proxy.models.payments import PaymentStatusUpdate, WebhookStatus
from payment_proxy.utils.logging_config import get_logger

logger = get_logger(__name__)


class WebhookHandler:
    """Dispatches payment status updates by WebhookStatus"""

    def __init__(self):
        self._handlers: Dict[WebhookStatus, Callable[[PaymentStatusUpdate], None]] = {
            WebhookStatus.SUCCESS: self.handle_success,
            WebhookStatus.EXPIRED: self.handle_expired,
            WebhookStatus.INSUFFICIENT_NOT_REFUNDED: self.handle_insufficient_not_refunded,
            WebhookStatus.INSUFFICIENT_REFUNDED: self.handle_insufficient_refunded,
        }

    def dispatch(self, payload: Any) -> Optional[WebhookStatus]:
        """
        Route a webhook payload to the handler for its status.

        Args:
            payload: Decoded JSON body; anything other than an object is
                treated as an empty payload

        Returns:
            The status that was handled, or None if it was ignored
        """
        update = PaymentStatusUpdate.model_validate(
            payload if isinstance(payload, dict) else {}
        )
        status = WebhookStatus.parse(update.status)

        if status is None:
            logger.debug(
                "Ignoring webhook with unrecognized status",
                extra={"status": str(update.status)},
            )
            return None

        self._handlers[status](update)
        return status

    def handle_success(self, update: PaymentStatusUpdate) -> None:
        logger.info(
            "Payment successful!",
            extra={
                "tx_hash": update.payment_tx_hash,
                "received_amount": update.received_amount,
                "aggregated_amount": update.aggregated_amount,
            },
        )

    def handle_expired(self, update: PaymentStatusUpdate) -> None:
        # Payment window closed without receiving funds
        logger.info(
            "Payment expired",
            extra={"payload": update.model_dump(exclude_unset=True)},
        )

    def handle_insufficient_not_refunded(self, update: PaymentStatusUpdate) -> None:
        logger.info(
            "Insufficient payment, pending refund",
            extra={"payload": update.model_dump(exclude_unset=True)},
        )

    def handle_insufficient_refunded(self, update: PaymentStatusUpdate) -> None:
        logger.info(
            "Insufficient payment refunded",
            extra={
                "refund_tx_hash": update.refund_tx_hash,
                "refund_amount": update.refund_amount,
            },
        )


webhook_handler = WebhookHandler()
