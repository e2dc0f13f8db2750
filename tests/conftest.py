"""Shared fixtures: canned Coinbase payloads and a populated token store."""

import uuid

import pytest

from coinbase_advanced.oauth.token_store import TokenData, TokenStore


def make_account(name="BTC Wallet", currency="BTC", value="1.5", account_uuid=None):
    """Account JSON as returned by the accounts endpoints."""
    return {
        "uuid": account_uuid or str(uuid.uuid4()),
        "name": name,
        "currency": currency,
        "available_balance": {"value": value, "currency": currency},
        "default": True,
        "active": True,
        "created_at": "2023-06-07T17:30:40.425Z",
        "updated_at": "2023-06-08T10:00:00Z",
        "deleted_at": None,
        "type": "ACCOUNT_TYPE_CRYPTO",
        "ready": True,
        "hold": {"value": "0", "currency": currency},
    }


def make_order(order_id="0000-000000-000001", product_id="BTC-USD", side="BUY"):
    """Historical order JSON."""
    return {
        "order_id": order_id,
        "product_id": product_id,
        "user_id": "2222-000000-000000",
        "order_configuration": {
            "market_market_ioc": {"quote_size": "10.00", "base_size": "0.001"}
        },
        "side": side,
        "client_order_id": "11111-000000-000000",
        "status": "FILLED",
        "time_in_force": "IMMEDIATE_OR_CANCEL",
        "created_time": "2021-05-31T09:59:59Z",
        "completion_percentage": "100",
        "filled_size": "0.001",
        "average_filled_price": "50",
        "fee": "",
        "number_of_fills": "2",
        "filled_value": "10000",
        "pending_cancel": False,
        "size_in_quote": False,
        "total_fees": "5.00",
        "size_inclusive_of_fees": False,
        "total_value_after_fees": "string",
        "trigger_status": "UNKNOWN_TRIGGER_STATUS",
        "order_type": "MARKET",
        "reject_reason": "REJECT_REASON_UNSPECIFIED",
        "settled": True,
        "product_type": "SPOT",
        "reject_message": "",
        "cancel_message": "",
        "order_placement_source": "RETAIL_ADVANCED",
        "outstanding_hold_amount": "0",
        "is_liquidation": False,
    }


def make_fill(entry_id="e1", product_id="BTC-USD"):
    """Fill JSON."""
    return {
        "entry_id": entry_id,
        "trade_id": f"t-{entry_id}",
        "order_id": "0000-000000-000001",
        "trade_time": "2021-05-31T09:59:59Z",
        "trade_type": "FILL",
        "price": "10000.00",
        "size": "0.001",
        "commission": "1.25",
        "product_id": product_id,
        "sequence_timestamp": "2021-05-31T09:58:59Z",
        "liquidity_indicator": "TAKER",
        "size_in_quote": False,
        "user_id": "3333-333333-3333333",
        "side": "BUY",
    }


def make_product(product_id="BTC-USD", price="27000.12"):
    """Product JSON."""
    base, quote = product_id.split("-")
    return {
        "product_id": product_id,
        "price": price,
        "price_percentage_change_24h": "1.25",
        "volume_24h": "1234.5",
        "volume_percentage_change_24h": "-3.2",
        "base_increment": "0.00000001",
        "quote_increment": "0.01",
        "quote_min_size": "1",
        "quote_max_size": "50000000",
        "base_min_size": "0.000016",
        "base_max_size": "2600",
        "base_name": "Bitcoin",
        "quote_name": "US Dollar",
        "watched": False,
        "is_disabled": False,
        "new": False,
        "status": "online",
        "cancel_only": False,
        "limit_only": False,
        "post_only": False,
        "trading_disabled": False,
        "auction_mode": False,
        "product_type": "SPOT",
        "quote_currency_id": quote,
        "base_currency_id": base,
        "fcm_trading_session_details": None,
        "mid_market_price": "",
        "alias": "",
        "alias_to": [],
        "base_display_symbol": base,
        "quote_display_symbol": quote,
        "view_only": False,
        "price_increment": "0.01",
    }


@pytest.fixture
def token_store():
    """TokenStore populated with test tokens."""
    store = TokenStore()
    store.populate(
        TokenData(
            access_token="test_access_token",
            refresh_token="test_refresh_token",
            expires_in=7200,
            scope="wallet:accounts:read",
        )
    )
    return store


@pytest.fixture
def account_payload():
    """Factory for account JSON."""
    return make_account


@pytest.fixture
def order_payload():
    """Factory for order JSON."""
    return make_order


@pytest.fixture
def fill_payload():
    """Factory for fill JSON."""
    return make_fill


@pytest.fixture
def product_payload():
    """Factory for product JSON."""
    return make_product
