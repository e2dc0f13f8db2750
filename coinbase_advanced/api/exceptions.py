"""Exceptions for the Coinbase Advanced Trade API client."""

from typing import Any, Optional


class CoinbaseAPIError(Exception):
    """Base exception for Coinbase API errors."""

    pass


class TransportError(CoinbaseAPIError):
    """
    The request never produced a response.

    Raised for connection, DNS, TLS and timeout failures. Requests are not
    retried; the caller decides whether to try again.
    """

    pass


class DecodeError(CoinbaseAPIError):
    """
    Response body matched neither the expected payload nor the service error shape.

    Attributes:
        body: Raw response body
        cause: Validation error from the expected-payload parse
    """

    def __init__(self, message: str, body: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.body = body
        self.cause = cause


class ServiceError(CoinbaseAPIError):
    """
    Coinbase answered with a structured error.

    Attributes:
        error: Error identifier, e.g. "NOT_FOUND"
        code: Numeric error code
        message: Human-readable message
        details: Optional {type_url, value} detail object
    """

    def __init__(self, error: str, code: int, message: str, details: Any = None):
        super().__init__(f"{error} ({code}): {message}")
        self.error = error
        self.code = code
        self.message = message
        self.details = details
