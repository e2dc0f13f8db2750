"""
Dual-shape response decoding.

Coinbase answers with valid JSON in both the success and the error case; the
two are told apart only by their schema. A body is parsed as the expected
payload first, then as a service error, and only if both fail is it reported
as undecodable.
"""

import logging
from functools import lru_cache
from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from .exceptions import DecodeError, ServiceError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ErrorDetails(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type_url: str = ""
    value: Any = None


class ServiceErrorBody(BaseModel):
    """Error envelope returned by the Advanced Trade API."""

    model_config = ConfigDict(extra="ignore")

    error: str
    code: int
    message: str
    details: Optional[ErrorDetails] = None


SERVICE_ERROR_ADAPTER = TypeAdapter(ServiceErrorBody)


@lru_cache(maxsize=None)
def adapter_for(response_model: Type[T]) -> TypeAdapter:
    """Cached TypeAdapter for a response type (model class or typing generic)."""
    return TypeAdapter(response_model)


def decode_response(body: str, response_model: Type[T]) -> T:
    """
    Decode a response body into the expected type.

    Args:
        body: Raw response text
        response_model: Expected payload type

    Returns:
        Parsed payload

    Raises:
        ServiceError: If the body is a Coinbase error envelope
        DecodeError: If the body matches neither shape
    """
    try:
        return adapter_for(response_model).validate_json(body)
    except ValidationError as e:
        success_error = e

    try:
        parsed = SERVICE_ERROR_ADAPTER.validate_json(body)
    except ValidationError:
        logger.error(f"Undecodable response body: {body[:200]!r}")
        raise DecodeError(
            f"Response is neither a valid {getattr(response_model, '__name__', response_model)} "
            f"nor a service error: {success_error}",
            body=body,
            cause=success_error,
        ) from success_error

    logger.warning(f"Coinbase service error: {parsed.error} ({parsed.code}) - {parsed.message}")
    raise ServiceError(parsed.error, parsed.code, parsed.message, parsed.details)
