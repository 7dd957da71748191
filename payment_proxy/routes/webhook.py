"""
Payment Status Webhook Endpoint

Receives payment status callbacks from the upstream payment API, logs them,
and always acknowledges with 200 OK.
"""

import json

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from payment_proxy.handlers import webhook_handler
from payment_proxy.utils.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["webhook"])

ACKNOWLEDGEMENT = "Webhook received"


@router.post("/webhook")
async def payment_webhook(request: Request) -> PlainTextResponse:
    """
    Payment status webhook endpoint.

    The acknowledgment does not depend on how the payload was processed:
    unparsable bodies, unknown statuses and handler failures are logged and
    still answered with 200 OK.
    """
    raw = await request.body()

    try:
        payload = json.loads(raw) if raw.strip() else {}
    except ValueError as e:
        logger.warning(
            "Webhook body is not valid JSON",
            extra={"error": str(e), "body_size": len(raw)},
        )
        payload = {}

    try:
        status = webhook_handler.dispatch(payload)
        logger.debug(
            "Webhook processed",
            extra={"status": status.value if status else None},
        )
    except Exception as e:
        logger.error(
            f"Error processing webhook: {e}",
            extra={"error": str(e), "error_type": type(e).__name__},
        )

    return PlainTextResponse(ACKNOWLEDGEMENT, status_code=200)
