"""
Payment API Relay Endpoints

Forwards payment intent and asset transfer calls to the upstream payment API.
Write operations are validated before forwarding.
"""

import json
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from payment_proxy.services.upstream_service import UpstreamService, get_upstream_service
from payment_proxy.utils.exceptions import ValidationException
from payment_proxy.utils.logging_config import get_logger
from payment_proxy.utils.validation import validate_asset_transfer, validate_payment_intent

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["payments"])


async def read_json_object(request: Request) -> Dict[str, Any]:
    """
    Parse the request body as a JSON object.

    An empty body, or a JSON value that is not an object, yields an empty dict.
    """
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        body = json.loads(raw)
    except ValueError as e:
        raise ValidationException("Invalid JSON body", str(e)) from e
    return body if isinstance(body, dict) else {}


@router.get("/payment/intents")
async def list_payment_intents(
    request: Request,
    upstream: UpstreamService = Depends(get_upstream_service),
) -> Response:
    """Query all payment intents. Query parameters are passed through."""
    return await upstream.forward(
        "GET",
        "/payment/intents",
        request.headers,
        params=request.query_params.multi_items(),
    )


@router.post("/payment/intent")
async def create_payment_intent(
    request: Request,
    upstream: UpstreamService = Depends(get_upstream_service),
) -> Response:
    """Create a payment intent after checking fiat_amount and fiat_currency."""
    body = await read_json_object(request)
    validate_payment_intent(body)

    logger.info(
        "Creating payment intent",
        extra={
            "fiat_amount": body["fiat_amount"],
            "fiat_currency": body["fiat_currency"],
        },
    )

    return await upstream.forward(
        "POST",
        "/payment/intent",
        request.headers,
        json_body=body,
    )


@router.get("/payment/intent/{intent_id}")
async def get_payment_intent(
    intent_id: str,
    request: Request,
    upstream: UpstreamService = Depends(get_upstream_service),
) -> Response:
    return await upstream.forward(
        "GET",
        f"/payment/intent/{intent_id}",
        request.headers,
        params=request.query_params.multi_items(),
    )


@router.post("/asset_pro/transfer")
async def transfer_asset(
    request: Request,
    upstream: UpstreamService = Depends(get_upstream_service),
) -> Response:
    """Transfer an asset to a wallet address."""
    body = await read_json_object(request)
    validate_asset_transfer(body)

    logger.info(
        "Requesting asset transfer",
        extra={
            "chain_id": body["chain_id"],
            "contract_address": body["contract_address"],
            "wallet_address": body["wallet_address"],
        },
    )

    return await upstream.forward(
        "POST",
        "/asset_pro/transfer",
        request.headers,
        json_body=body,
    )
