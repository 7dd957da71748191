"""
Test AWS Lambda Handler
"""

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
from mangum import Mangum

from payment_proxy import lambda_handler as lambda_module


@pytest.fixture
def lambda_context():
    return SimpleNamespace(aws_request_id="req-123", function_name="payment-relay")


@pytest.fixture
def http_api_event():
    return {
        "version": "2.0",
        "rawPath": "/webhook",
        "requestContext": {"http": {"method": "POST", "path": "/webhook"}},
    }


def test_handler_wraps_app():
    assert isinstance(lambda_module.handler, Mangum)


def test_lambda_handler_delegates_to_mangum(http_api_event, lambda_context):
    mock_handler = MagicMock(return_value={"statusCode": 200, "body": "Webhook received"})

    with patch.object(lambda_module, "handler", mock_handler), patch.object(
        lambda_module, "logger"
    ) as mock_logger:
        response = lambda_module.lambda_handler(http_api_event, lambda_context)

    assert response["statusCode"] == 200
    mock_handler.assert_called_once_with(http_api_event, lambda_context)
    assert mock_logger.info.call_count == 2


def test_lambda_handler_reraises_failures(http_api_event, lambda_context):
    mock_handler = MagicMock(side_effect=RuntimeError("adapter failure"))

    with patch.object(lambda_module, "handler", mock_handler), patch.object(
        lambda_module, "logger"
    ) as mock_logger:
        with pytest.raises(RuntimeError):
            lambda_module.lambda_handler(http_api_event, lambda_context)

    mock_logger.error.assert_called_once()
