"""Tests for the coinbase-advanced CLI."""

from unittest import mock

import pytest
from click.testing import CliRunner

from coinbase_advanced.api.exceptions import ServiceError, TransportError
from coinbase_advanced.cli import cli
from coinbase_advanced.models.accounts import Account
from coinbase_advanced.models.fees import TransactionsSummary
from coinbase_advanced.models.orders import Fill, Order
from coinbase_advanced.models.products import Product
from coinbase_advanced.oauth.exceptions import ConfigError, CsrfMismatchError, RevocationError


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture
def flow():
    """AuthorizationFlow stand-in returned by from_env()."""
    flow = mock.Mock()
    flow.add_scope.return_value = flow
    with mock.patch("coinbase_advanced.cli.AuthorizationFlow") as flow_class:
        flow_class.from_env.return_value = flow
        yield flow


@pytest.fixture
def client():
    """CoinbaseClient stand-in."""
    with mock.patch("coinbase_advanced.cli.CoinbaseClient") as client_class:
        yield client_class.return_value


class TestAccountsCommand:
    """Tests for 'accounts' and 'account'."""

    def test_accounts_lists_all_batches(self, runner, flow, client, account_payload):
        client.list_accounts.return_value = iter(
            [
                [Account.model_validate(account_payload(name="BTC Wallet"))],
                [Account.model_validate(account_payload(name="USD Wallet", currency="USD"))],
            ]
        )

        result = runner.invoke(cli, ["accounts", "--limit", "1"])

        assert result.exit_code == 0, result.output
        assert "BTC Wallet" in result.output
        assert "USD Wallet" in result.output
        assert "2 account(s)" in result.output
        client.list_accounts.assert_called_once_with(limit=1)
        flow.add_scope.assert_called_once_with("wallet:accounts:read")
        flow.authorize_once.assert_called_once_with(open_browser=False, timeout=None)
        flow.revoke_access.assert_called_once()
        client.close.assert_called_once()

    def test_account_verbose(self, runner, flow, client, account_payload):
        account = Account.model_validate(account_payload(name="ETH Wallet", value="2.5"))
        client.get_account.return_value = account

        result = runner.invoke(cli, ["-v", "account", str(account.uuid)])

        assert result.exit_code == 0, result.output
        assert str(account.uuid) in result.output
        assert "2.5" in result.output
        assert "ACCOUNT_TYPE_CRYPTO" in result.output
        client.get_account.assert_called_once_with(str(account.uuid))


class TestOtherCommands:
    """Tests for order, fill, product and fee commands."""

    def test_orders(self, runner, flow, client, order_payload):
        client.list_orders.return_value = iter([[Order.model_validate(order_payload(order_id="o-9"))]])

        result = runner.invoke(cli, ["orders", "--product-id", "BTC-USD"])

        assert result.exit_code == 0, result.output
        assert "o-9" in result.output
        assert "1 order(s)" in result.output
        client.list_orders.assert_called_once_with(product_id="BTC-USD", limit=None)
        flow.add_scope.assert_called_once_with("wallet:transactions:read")

    def test_fills(self, runner, flow, client, fill_payload):
        client.list_fills.return_value = iter([[Fill.model_validate(fill_payload())], []])

        result = runner.invoke(cli, ["fills", "--limit", "5"])

        assert result.exit_code == 0, result.output
        assert "2021-05-31 09:59:59" in result.output
        assert "1 fill(s)" in result.output

    def test_products(self, runner, flow, client, product_payload):
        client.list_products.return_value = [
            Product.model_validate(product_payload("BTC-USD")),
            Product.model_validate(product_payload("ETH-USD", price="")),
        ]

        result = runner.invoke(cli, ["products"])

        assert result.exit_code == 0, result.output
        assert "27000.12" in result.output
        assert "ETH-USD" in result.output
        assert "2 product(s)" in result.output
        flow.add_scope.assert_called_once_with("wallet:user:read")

    def test_product(self, runner, flow, client, product_payload):
        client.get_product.return_value = Product.model_validate(product_payload("SOL-USD"))

        result = runner.invoke(cli, ["product", "SOL-USD"])

        assert result.exit_code == 0, result.output
        assert "SOL-USD" in result.output

    def test_fees(self, runner, flow, client):
        client.get_transactions_summary.return_value = TransactionsSummary.model_validate(
            {
                "total_volume": 1500,
                "total_fees": 9,
                "fee_tier": {
                    "pricing_tier": "<$10k",
                    "usd_from": "0",
                    "usd_to": "10,000",
                    "taker_fee_rate": "0.006",
                    "maker_fee_rate": "0.004",
                },
                "advanced_trade_only_volume": 1500,
                "advanced_trade_only_fees": 9,
                "coinbase_pro_volume": 0,
                "coinbase_pro_fees": 0,
            }
        )

        result = runner.invoke(cli, ["fees"])

        assert result.exit_code == 0, result.output
        assert "<$10k" in result.output
        assert "0.006" in result.output


class TestSessionHandling:
    """Authorization, revocation and error handling around commands."""

    def test_extra_scopes_and_options(self, runner, flow, client):
        client.list_products.return_value = []

        result = runner.invoke(
            cli,
            ["--scope", "wallet:accounts:read", "--open-browser", "--timeout", "30", "products"],
        )

        assert result.exit_code == 0, result.output
        assert flow.add_scope.call_args_list == [
            mock.call("wallet:user:read"),
            mock.call("wallet:accounts:read"),
        ]
        flow.authorize_once.assert_called_once_with(open_browser=True, timeout=30.0)

    @pytest.mark.parametrize("timeout", ["0", "-1"])
    def test_rejects_non_positive_timeout(self, runner, flow, client, timeout):
        result = runner.invoke(cli, ["--timeout", timeout, "products"])

        assert result.exit_code == 2
        assert "--timeout" in result.output
        flow.authorize_once.assert_not_called()

    def test_api_error_still_revokes(self, runner, flow, client):
        client.get_product.side_effect = ServiceError("NOT_FOUND", 5, "product not found")

        result = runner.invoke(cli, ["product", "NOPE-USD"])

        assert result.exit_code == 1
        assert "NOT_FOUND (5): product not found" in result.output
        flow.revoke_access.assert_called_once()
        client.close.assert_called_once()

    def test_transport_error(self, runner, flow, client):
        client.list_products.side_effect = TransportError("GET failed")

        result = runner.invoke(cli, ["products"])

        assert result.exit_code == 1
        assert "Error: GET failed" in result.output

    def test_authorization_failure(self, runner, flow, client):
        flow.authorize_once.side_effect = CsrfMismatchError("state mismatch")

        result = runner.invoke(cli, ["accounts"])

        assert result.exit_code == 1
        assert "state mismatch" in result.output
        flow.revoke_access.assert_not_called()
        client.list_accounts.assert_not_called()

    def test_missing_credentials(self, runner, client):
        with mock.patch("coinbase_advanced.cli.AuthorizationFlow") as flow_class:
            flow_class.from_env.side_effect = ConfigError("CB_OAUTH_CLIENT_ID is not set")

            result = runner.invoke(cli, ["fees"])

        assert result.exit_code == 1
        assert "CB_OAUTH_CLIENT_ID" in result.output

    def test_listener_bind_failure(self, runner, flow, client):
        flow.authorize_once.side_effect = OSError("Address already in use")

        result = runner.invoke(cli, ["accounts"])

        assert result.exit_code == 1
        assert "callback listener" in result.output

    def test_revocation_failure_is_a_warning(self, runner, flow, client):
        client.list_products.return_value = []
        flow.revoke_access.side_effect = RevocationError("status 400")

        result = runner.invoke(cli, ["products"])

        assert result.exit_code == 0
        assert "Warning: Token revocation failed: status 400" in result.output
