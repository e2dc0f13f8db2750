"""Tests for dual-shape response decoding."""

import json
from typing import List
from unittest import mock

import pytest
from pydantic import BaseModel, ValidationError

from coinbase_advanced.api import decoding
from coinbase_advanced.api.decoding import ServiceErrorBody, decode_response
from coinbase_advanced.api.exceptions import CoinbaseAPIError, DecodeError, ServiceError
from coinbase_advanced.models.accounts import AccountResponse, AccountsResponse

NOT_FOUND = {
    "error": "NOT_FOUND",
    "code": 5,
    "message": "account not found",
    "details": {"type_url": "type.googleapis.com/Error", "value": "abc"},
}


class Notice(BaseModel):
    """Permissive payload that an error envelope also satisfies."""

    message: str


class TestSuccessShape:
    """Bodies that match the expected payload."""

    def test_decodes_payload(self, account_payload):
        body = json.dumps({"account": account_payload(name="ETH Wallet", currency="ETH")})

        result = decode_response(body, AccountResponse)

        assert isinstance(result, AccountResponse)
        assert result.account.name == "ETH Wallet"

    def test_error_parse_not_attempted_on_success(self):
        """A body matching both shapes is a success; the error adapter is never consulted."""
        body = json.dumps(NOT_FOUND)

        with mock.patch.object(
            decoding, "SERVICE_ERROR_ADAPTER", wraps=decoding.SERVICE_ERROR_ADAPTER
        ) as spy:
            result = decode_response(body, Notice)

        assert result == Notice(message="account not found")
        spy.validate_json.assert_not_called()

    def test_generic_response_type(self):
        assert decode_response("[1, 2, 3]", List[int]) == [1, 2, 3]


class TestErrorShape:
    """Bodies that match only the service error envelope."""

    def test_service_error_fields(self):
        with pytest.raises(ServiceError) as exc_info:
            decode_response(json.dumps(NOT_FOUND), AccountResponse)

        error = exc_info.value
        assert error.error == "NOT_FOUND"
        assert error.code == 5
        assert error.message == "account not found"
        assert error.details.type_url == "type.googleapis.com/Error"
        assert error.details.value == "abc"
        assert str(error) == "NOT_FOUND (5): account not found"

    def test_details_optional(self):
        body = json.dumps({"error": "PERMISSION_DENIED", "code": 7, "message": "missing scope"})

        with pytest.raises(ServiceError, match="PERMISSION_DENIED") as exc_info:
            decode_response(body, AccountsResponse)

        assert exc_info.value.details is None

    def test_error_body_model(self):
        parsed = ServiceErrorBody.model_validate(NOT_FOUND)

        assert parsed.code == 5
        assert parsed.details.value == "abc"


class TestNeitherShape:
    """Bodies that match neither shape."""

    @pytest.mark.parametrize(
        "body",
        [
            "<html>Bad Gateway</html>",
            "",
            '{"accounts": "nope"}',
            '{"error": "INTERNAL", "message": "no code"}',
        ],
    )
    def test_decode_error(self, body):
        with pytest.raises(DecodeError) as exc_info:
            decode_response(body, AccountsResponse)

        error = exc_info.value
        assert error.body == body
        assert isinstance(error.cause, ValidationError)
        assert error.__cause__ is error.cause
        assert isinstance(error, CoinbaseAPIError)

    def test_message_names_expected_type(self):
        with pytest.raises(DecodeError, match="AccountsResponse"):
            decode_response("{}", AccountsResponse)
