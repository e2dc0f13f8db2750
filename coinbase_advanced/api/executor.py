"""
Authenticated request executor for the Coinbase Advanced Trade API.

This module sends bearer-authenticated GET and POST requests and decodes the
response body into the caller's expected type. It handles:

- Reading the access token for every request
- JSON request bodies (pydantic models are dumped without None fields)
- Mapping network failures to TransportError
- Dual-shape decoding (see decoding.py)

Requests are never retried.
"""

import logging
from typing import Any, Optional, Type, TypeVar

import requests
from pydantic import BaseModel

from ..oauth.token_store import AccessTokenProvider
from .decoding import decode_response
from .exceptions import TransportError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RequestExecutor:
    """
    Executes authenticated requests and decodes their responses.

    Example:
        executor = RequestExecutor(token_store)
        response = executor.get(url, AccountsResponse)
    """

    def __init__(
        self,
        token_provider: AccessTokenProvider,
        session: Optional[requests.Session] = None,
        timeout: int = 30,
    ):
        """
        Initialize request executor.

        Args:
            token_provider: Source of the bearer token (TokenStore or AuthorizationFlow)
            session: HTTP session to use (creates one if not provided)
            timeout: Request timeout in seconds
        """
        self.token_provider = token_provider
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})

    def get(self, url: str, response_model: Type[T]) -> T:
        """
        Make authenticated GET request.

        Args:
            url: Full request URL including query string
            response_model: Expected payload type

        Returns:
            Decoded payload

        Raises:
            TransportError: If no response was received
            ServiceError: If Coinbase returned an error envelope
            DecodeError: If the body matches neither shape
            TokenNotAvailableError: If no access token is available
        """
        return self._request("GET", url, response_model)

    def post(self, url: str, body: Any, response_model: Type[T]) -> T:
        """
        Make authenticated POST request with a JSON body.

        Args:
            url: Full request URL
            body: pydantic model or JSON-serializable value
            response_model: Expected payload type

        Returns:
            Decoded payload
        """
        return self._request("POST", url, response_model, body=body)

    def _request(self, method: str, url: str, response_model: Type[T], body: Any = None) -> T:
        headers = {"Authorization": f"Bearer {self.token_provider.access_token()}"}

        json_data = None
        if body is not None:
            headers["Content-Type"] = "application/json"
            if isinstance(body, BaseModel):
                json_data = body.model_dump(mode="json", exclude_none=True)
            else:
                json_data = body

        # Log request (excluding sensitive headers)
        logger.debug(f"{method} {url}")

        try:
            response = self.session.request(
                method,
                url,
                headers=headers,
                json=json_data,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"{method} {url} failed: {e}")
            raise TransportError(f"{method} {url} failed: {e}") from e

        logger.debug(f"Response: {response.status_code}")

        # The body decides the shape, whatever the status code
        return decode_response(response.text, response_model)

    def close(self) -> None:
        """Close the HTTP session."""
        self.session.close()

    def __enter__(self) -> "RequestExecutor":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
