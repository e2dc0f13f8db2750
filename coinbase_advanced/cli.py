"""
Click CLI for the Coinbase Advanced Trade client.

Every command runs one complete session: it authorizes through the browser,
performs its API calls, and revokes the tokens afterwards, even on failure.

Credentials are read from CB_OAUTH_CLIENT_ID, CB_OAUTH_CLIENT_SECRET and
CB_OAUTH_REDIRECT_URL (environment or .env).
"""

import logging
import sys
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

import click

from .api.exceptions import CoinbaseAPIError
from .client import CoinbaseClient
from .models.accounts import Account
from .models.orders import Fill, Order
from .models.products import Product
from .oauth.exceptions import CoinbaseOAuthError
from .oauth.flow import AuthorizationFlow

logger = logging.getLogger(__name__)

# Scopes each command needs; orders and fills are covered by transactions:read
ACCOUNT_SCOPES = ("wallet:accounts:read",)
ORDER_SCOPES = ("wallet:transactions:read",)
PRODUCT_SCOPES = ("wallet:user:read",)
FEE_SCOPES = ("wallet:transactions:read",)


@dataclass
class CLIContext:
    """Context object passed to all CLI commands.

    Attributes:
        scopes: Extra scopes requested with --scope
        open_browser: Open the authorization URL automatically
        timeout: Seconds to wait for the OAuth redirect
        verbose: Verbose output enabled
    """

    scopes: List[str] = field(default_factory=list)
    open_browser: bool = False
    timeout: Optional[float] = None
    verbose: bool = False


def print_error(message: str) -> None:
    """Print error message to stderr."""
    click.secho(f"Error: {message}", fg="red", err=True)


def print_warning(message: str) -> None:
    """Print warning message to stderr."""
    click.secho(f"Warning: {message}", fg="yellow", err=True)


@contextmanager
def authorized_client(cli_ctx: CLIContext, scopes: Tuple[str, ...]) -> Iterator[CoinbaseClient]:
    """
    Authorize, yield a client, then revoke.

    Raises:
        CoinbaseOAuthError: If configuration or authorization fails
    """
    flow = AuthorizationFlow.from_env()
    for scope in (*scopes, *cli_ctx.scopes):
        flow.add_scope(scope)

    token_store = flow.authorize_once(open_browser=cli_ctx.open_browser, timeout=cli_ctx.timeout)
    client = CoinbaseClient(token_store)
    try:
        yield client
    finally:
        client.close()
        try:
            flow.revoke_access()
        except CoinbaseOAuthError as e:
            print_warning(f"Token revocation failed: {e}")


def run_command(ctx: click.Context, scopes: Tuple[str, ...], action) -> None:
    """Run `action(client)` in an authorized session and map errors to exit code 1."""
    cli_ctx: CLIContext = ctx.obj
    try:
        with authorized_client(cli_ctx, scopes) as client:
            action(client)
    except (CoinbaseOAuthError, CoinbaseAPIError) as e:
        logger.debug("Command failed", exc_info=True)
        print_error(str(e))
        sys.exit(1)
    except OSError as e:
        print_error(f"Could not start the OAuth callback listener: {e}")
        sys.exit(1)


def print_account(account: Account) -> None:
    balance = account.available_balance
    click.echo(f"{account.uuid}  {account.name:<24} {balance.value} {balance.currency}")


def print_order(order: Order) -> None:
    click.echo(
        f"{order.order_id}  {order.product_id:<12} {order.side.value:<4} "
        f"{order.order_type.value:<10} {order.status.value:<10} filled {order.filled_size}"
    )


def print_fill(fill: Fill) -> None:
    click.echo(
        f"{fill.trade_time:%Y-%m-%d %H:%M:%S}  {fill.product_id:<12} {fill.side.value:<4} "
        f"{fill.size} @ {fill.price} (fee {fill.commission})"
    )


def print_product(product: Product) -> None:
    price = product.price if product.price is not None else "-"
    click.echo(f"{product.product_id:<14} {price:>18}  {product.status}")


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.option(
    "--scope",
    "scopes",
    multiple=True,
    help="Additional OAuth scope to request (repeatable)",
)
@click.option("--open-browser", is_flag=True, help="Open the authorization URL in a browser")
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Seconds to wait for the OAuth redirect (default: CB_OAUTH_CALLBACK_TIMEOUT)",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    scopes: Tuple[str, ...],
    open_browser: bool,
    timeout: Optional[float],
) -> None:
    """
    Coinbase Advanced Trade - read accounts, orders, products and fees.

    Each command asks you to authorize in the browser, then revokes access
    when it is done.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    ctx.obj = CLIContext(
        scopes=list(scopes), open_browser=open_browser, timeout=timeout, verbose=verbose
    )


@cli.command()
@click.option("--limit", type=int, default=None, help="Page size")
@click.pass_context
def accounts(ctx: click.Context, limit: Optional[int]) -> None:
    """List all accounts with their available balance."""

    def action(client: CoinbaseClient) -> None:
        total = 0
        for batch in client.list_accounts(limit=limit):
            for account in batch:
                print_account(account)
            total += len(batch)
        click.echo(f"{total} account(s)")

    run_command(ctx, ACCOUNT_SCOPES, action)


@cli.command()
@click.argument("account_uuid")
@click.pass_context
def account(ctx: click.Context, account_uuid: str) -> None:
    """Show a single account."""

    def action(client: CoinbaseClient) -> None:
        result = client.get_account(account_uuid)
        print_account(result)
        if ctx.obj.verbose:
            click.echo(f"  type: {result.type.value}  hold: {result.hold.value}")

    run_command(ctx, ACCOUNT_SCOPES, action)


@cli.command()
@click.option("--limit", type=int, default=None, help="Page size")
@click.option("--product-id", default=None, help="Only orders for this product")
@click.pass_context
def orders(ctx: click.Context, limit: Optional[int], product_id: Optional[str]) -> None:
    """List historical orders."""

    def action(client: CoinbaseClient) -> None:
        total = 0
        for batch in client.list_orders(product_id=product_id, limit=limit):
            for order in batch:
                print_order(order)
            total += len(batch)
        click.echo(f"{total} order(s)")

    run_command(ctx, ORDER_SCOPES, action)


@cli.command()
@click.option("--limit", type=int, default=None, help="Page size")
@click.option("--product-id", default=None, help="Only fills for this product")
@click.pass_context
def fills(ctx: click.Context, limit: Optional[int], product_id: Optional[str]) -> None:
    """List fills."""

    def action(client: CoinbaseClient) -> None:
        total = 0
        for batch in client.list_fills(product_id=product_id, limit=limit):
            for fill in batch:
                print_fill(fill)
            total += len(batch)
        click.echo(f"{total} fill(s)")

    run_command(ctx, ORDER_SCOPES, action)


@cli.command()
@click.option("--limit", type=int, default=None, help="Maximum number of products")
@click.pass_context
def products(ctx: click.Context, limit: Optional[int]) -> None:
    """List tradable products with their last price."""

    def action(client: CoinbaseClient) -> None:
        result = client.list_products(limit=limit)
        for product in result:
            print_product(product)
        click.echo(f"{len(result)} product(s)")

    run_command(ctx, PRODUCT_SCOPES, action)


@cli.command()
@click.argument("product_id")
@click.pass_context
def product(ctx: click.Context, product_id: str) -> None:
    """Show a single product."""

    def action(client: CoinbaseClient) -> None:
        print_product(client.get_product(product_id))

    run_command(ctx, PRODUCT_SCOPES, action)


@cli.command()
@click.pass_context
def fees(ctx: click.Context) -> None:
    """Show the fee tier and traded volume."""

    def action(client: CoinbaseClient) -> None:
        summary = client.get_transactions_summary()
        tier = summary.fee_tier
        click.echo(f"Pricing tier: {tier.pricing_tier}")
        click.echo(f"Maker fee:    {tier.maker_fee_rate}")
        click.echo(f"Taker fee:    {tier.taker_fee_rate}")
        click.echo(f"Volume:       {summary.total_volume}")
        click.echo(f"Fees paid:    {summary.total_fees}")

    run_command(ctx, FEE_SCOPES, action)


def main() -> None:
    """Main entry point for the CLI."""
    cli()


__all__ = ["cli", "main"]
