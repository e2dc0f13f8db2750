"""Request execution, response decoding, pagination and query building."""

from .decoding import SERVICE_ERROR_ADAPTER, ServiceErrorBody, decode_response
from .exceptions import CoinbaseAPIError, DecodeError, ServiceError, TransportError
from .executor import RequestExecutor
from .pagination import cursor_continuation, has_next_continuation, paginate
from .query import QueryArgs, build_url, format_datetime, format_timestamp

__all__ = [
    "RequestExecutor",
    "decode_response",
    "ServiceErrorBody",
    "SERVICE_ERROR_ADAPTER",
    "paginate",
    "has_next_continuation",
    "cursor_continuation",
    "QueryArgs",
    "build_url",
    "format_datetime",
    "format_timestamp",
    "CoinbaseAPIError",
    "TransportError",
    "DecodeError",
    "ServiceError",
]
