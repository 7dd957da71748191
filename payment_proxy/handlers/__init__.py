"""Handlers for upstream-initiated callbacks"""

from payment_proxy.handlers.payment_status_handler import webhook_handler

__all__ = [
    "webhook_handler",
]
