"""Tests for account models."""

from decimal import Decimal
from uuid import UUID

import pytest
from pydantic import ValidationError

from coinbase_advanced.models.accounts import Account, AccountsResponse, AccountType


class TestAccount:
    """Tests for Account parsing."""

    def test_parse(self, account_payload):
        data = account_payload(
            name="USD Wallet",
            currency="USD",
            value="100.25",
            account_uuid="8bfc20d7-f7c6-4422-bf07-8243ca4169fe",
        )

        account = Account.model_validate(data)

        assert account.uuid == UUID("8bfc20d7-f7c6-4422-bf07-8243ca4169fe")
        assert account.available_balance.value == Decimal("100.25")
        assert account.type == AccountType.ACCOUNT_TYPE_CRYPTO
        assert account.deleted_at is None
        assert account.created_at.year == 2023

    def test_invalid_uuid(self, account_payload):
        with pytest.raises(ValidationError):
            Account.model_validate(account_payload(account_uuid="not-a-uuid"))

    def test_accounts_page(self, account_payload):
        page = AccountsResponse.model_validate(
            {
                "accounts": [account_payload(), account_payload(name="ETH Wallet")],
                "has_next": True,
                "cursor": "789100",
                "size": 2,
            }
        )

        assert page.has_next is True
        assert page.cursor == "789100"
        assert [a.name for a in page.accounts] == ["BTC Wallet", "ETH Wallet"]
