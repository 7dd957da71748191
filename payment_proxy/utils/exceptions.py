"""
Custom Exception Classes

Defines application-specific exceptions for better error handling and logging.
"""

from typing import Any, Dict, Optional

UPSTREAM_ERROR_MESSAGE = "Error forwarding request to external API"


class ProxyException(Exception):
    """Base exception for all proxy errors"""

    def __init__(
        self,
        message: str,
        error_code: str = "PROXY_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/API responses"""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(ProxyException):
    """
    Client input errors.

    ``error`` is the short label returned to the caller, ``message`` the
    human-readable explanation.
    """

    status_code = 400

    def __init__(
        self,
        error: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.error = error
        super().__init__(message, error_code="VALIDATION_ERROR", details=details)

    def to_response(self) -> Dict[str, Any]:
        return {"error": self.error, "message": self.message}


class UpstreamException(ProxyException):
    """Upstream API call failed (network error or non-2xx response)"""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Any = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        details = details or {}
        if status_code:
            details["status_code"] = status_code
        self.status_code = status_code
        self.body = body
        super().__init__(message, error_code="UPSTREAM_ERROR", details=details)

    @property
    def relay_status(self) -> int:
        """Status to answer the caller with"""
        return self.status_code or 500

    @property
    def has_body(self) -> bool:
        """False for falsy scalar bodies; empty objects and arrays still count"""
        if isinstance(self.body, (dict, list)):
            return True
        return bool(self.body)

    def to_response(self) -> Dict[str, Any]:
        return {
            "error": UPSTREAM_ERROR_MESSAGE,
            "details": self.body if self.has_body else self.message,
        }
