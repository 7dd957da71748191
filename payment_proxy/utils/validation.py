"""
Request Validation

Required-field and format checks applied before a request body is forwarded
upstream. Failures raise ValidationException, which the application turns into
a 400 response.
"""

import math
import re
from typing import Any, Dict, List

from payment_proxy.models.payments import (
    ASSET_TRANSFER_REQUIRED_FIELDS,
    PAYMENT_INTENT_REQUIRED_FIELDS,
    FiatCurrency,
)
from payment_proxy.utils.exceptions import ValidationException

# Leading decimal literal, optionally followed by anything
_LEADING_NUMBER = re.compile(
    r"^\s*[+-]?(Infinity|(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?)"
)


def is_blank(value: Any) -> bool:
    """
    True when a field counts as missing.

    Absent, null, false, zero, NaN and the empty string are missing; empty
    lists and objects are present.
    """
    if value is None or value is False or value == "":
        return True
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0 or math.isnan(value)
    return False


def _as_text(value: Any) -> str:
    """String form used for number parsing; arrays join their items with commas"""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if isinstance(value, list):
        return ",".join(_as_text(item) for item in value)
    if isinstance(value, dict):
        return "[object Object]"
    return str(value)


def is_numeric(value: Any) -> bool:
    """
    True when the value starts with a parseable number.

    Arrays are read through their comma-joined form, so ``[5]`` and ``["12abc"]``
    are numbers while ``[]`` and ``["abc"]`` are not.
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return not math.isnan(value)
    if isinstance(value, (str, list)):
        return _LEADING_NUMBER.match(_as_text(value)) is not None
    return False


def missing_fields(body: Dict[str, Any], required: tuple) -> List[str]:
    """Required fields that are missing, in declared order"""
    return [field for field in required if is_blank(body.get(field))]


def validate_payment_intent(body: Dict[str, Any]) -> None:
    if missing_fields(body, PAYMENT_INTENT_REQUIRED_FIELDS):
        raise ValidationException(
            "Missing required fields",
            "fiat_amount and fiat_currency are required fields",
        )

    if body["fiat_currency"] not in FiatCurrency.values():
        raise ValidationException(
            "Invalid fiat_currency",
            "fiat_currency must be TWD or USD",
            details={"fiat_currency": body["fiat_currency"]},
        )


def validate_asset_transfer(body: Dict[str, Any]) -> None:
    missing = missing_fields(body, ASSET_TRANSFER_REQUIRED_FIELDS)
    if missing:
        raise ValidationException(
            "Missing required fields",
            f"Missing fields: {', '.join(missing)}",
            details={"missing_fields": missing},
        )

    if not is_numeric(body["amount"]):
        raise ValidationException(
            "Invalid amount",
            "amount must be a valid number",
            details={"amount": body["amount"]},
        )
