"""
AWS Lambda Handler for the Payment Relay

Wraps the ASGI application with the Mangum adapter so the relay can be
deployed as a serverless function behind API Gateway.
"""

from mangum import Mangum

from payment_proxy.main import app
from payment_proxy.utils.logging_config import get_logger

logger = get_logger(__name__)


# api_gateway_base_path "/" lets Mangum strip stage prefixes itself
handler = Mangum(app, lifespan="off", api_gateway_base_path="/")


def lambda_handler(event, context):
    """
    AWS Lambda handler function with invocation logging.

    Args:
        event: API Gateway event containing HTTP request details
        context: Lambda context with runtime information

    Returns:
        API Gateway response format
    """
    request_context = event.get("requestContext", {})
    logger.info(
        "Lambda invocation started",
        extra={
            "request_id": context.aws_request_id,
            "function_name": context.function_name,
            "http_method": request_context.get("http", {}).get("method"),
            "raw_path": event.get("rawPath"),
        },
    )

    try:
        response = handler(event, context)

        logger.info(
            "Lambda invocation completed",
            extra={
                "request_id": context.aws_request_id,
                "status_code": response.get("statusCode"),
            },
        )

        return response

    except Exception as e:
        logger.error(
            f"Lambda invocation failed: {e}",
            extra={
                "request_id": context.aws_request_id,
                "error": str(e),
                "error_type": type(e).__name__,
            },
        )
        raise


__all__ = ["handler", "lambda_handler"]
