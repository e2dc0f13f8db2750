"""
Coinbase Advanced Trade API client.

This module exposes one method per Advanced Trade REST call. It handles:

- Building request URLs and query strings
- Bearer authentication through the request executor
- Lazy pagination for the account, order and fill listings

The client must be given an AccessTokenProvider, normally the TokenStore
returned by AuthorizationFlow.authorize_once().
"""

import logging
from datetime import datetime
from typing import Iterator, List, Optional, Sequence
from uuid import UUID

import requests

from . import endpoints
from .api.executor import RequestExecutor
from .api.pagination import cursor_continuation, has_next_continuation, paginate
from .api.query import QueryArgs, build_url, format_timestamp
from .models.accounts import Account, AccountResponse, AccountsResponse
from .models.fees import TransactionsSummary
from .models.orders import (
    CancelOrderResponse,
    CancelOrdersRequest,
    CancelOrdersResponse,
    CreateOrderResponse,
    Fill,
    FillsResponse,
    Order,
    OrderPlacementSource,
    OrderResponse,
    OrderSide,
    OrdersResponse,
    OrderToSend,
    OrderType,
    Status,
)
from .models.products import (
    Candle,
    CandlesResponse,
    ContractExpiryType,
    Granularity,
    MarketTrades,
    Pricebook,
    PricebookResponse,
    PricebooksResponse,
    Product,
    ProductsResponse,
    ProductType,
)
from .oauth.token_store import AccessTokenProvider

logger = logging.getLogger(__name__)


class CoinbaseClient:
    """
    Client for the Coinbase Advanced Trade API (v3).

    Example:
        flow = AuthorizationFlow.from_env().add_scope("wallet:accounts:read")
        client = CoinbaseClient(flow.authorize_once())

        for batch in client.list_accounts(limit=50):
            for account in batch:
                print(account.name, account.available_balance.value)

        flow.revoke_access()

    List methods return generators: no request is made until the first batch
    is pulled, and each further batch costs one request.
    """

    def __init__(
        self,
        token_provider: AccessTokenProvider,
        session: Optional[requests.Session] = None,
        timeout: int = 30,
        base_url: str = endpoints.BASE_URL,
    ):
        """
        Initialize Coinbase API client.

        Args:
            token_provider: Source of the bearer token
            session: HTTP session (creates one if not provided)
            timeout: Request timeout in seconds
            base_url: API root, overridable for testing
        """
        self.executor = RequestExecutor(token_provider, session=session, timeout=timeout)
        self.base_url = base_url.rstrip("/")

        logger.info("CoinbaseClient initialized")

    def _url(self, template: str, query: Optional[QueryArgs] = None, **path) -> str:
        return f"{self.base_url}{build_url(template, query, **path)}"

    # Accounts

    def list_accounts(
        self, limit: Optional[int] = None, cursor: Optional[str] = None
    ) -> Iterator[List[Account]]:
        """
        List the user's accounts, one batch per page.

        Args:
            limit: Page size
            cursor: Resume from this cursor

        Yields:
            Lists of accounts
        """

        def request(page_cursor: Optional[str]) -> AccountsResponse:
            query = QueryArgs().add_optional("limit", limit).add_optional("cursor", page_cursor)
            return self.executor.get(self._url(endpoints.ACCOUNTS, query), AccountsResponse)

        return paginate(request, has_next_continuation("accounts"), cursor=cursor)

    def get_account(self, account_uuid: UUID) -> Account:
        """Get a single account by its uuid."""
        url = self._url(endpoints.ACCOUNT, account_uuid=account_uuid)
        return self.executor.get(url, AccountResponse).account

    # Products & market data

    def get_best_bid_ask(self, product_ids: Optional[Sequence[str]] = None) -> List[Pricebook]:
        """Best bid/ask for all products, or for product_ids only."""
        query = QueryArgs().add_optional_list("product_ids", product_ids)
        url = self._url(endpoints.BEST_BID_ASK, query)
        return self.executor.get(url, PricebooksResponse).pricebooks

    def get_product_book(self, product_id: str, limit: Optional[int] = None) -> Pricebook:
        """Bids and asks for one product; limit caps the depth."""
        query = QueryArgs().add("product_id", product_id).add_optional("limit", limit)
        url = self._url(endpoints.PRODUCT_BOOK, query)
        return self.executor.get(url, PricebookResponse).pricebook

    def list_products(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        product_type: Optional[ProductType] = None,
        product_ids: Optional[Sequence[str]] = None,
        contract_expiry_type: Optional[ContractExpiryType] = None,
    ) -> List[Product]:
        """List tradable products (offset-based, not cursor-paginated)."""
        query = (
            QueryArgs()
            .add_optional("limit", limit)
            .add_optional("offset", offset)
            .add_optional("product_type", product_type)
            .add_optional_list("product_ids", product_ids)
            .add_optional("contract_expiry_type", contract_expiry_type)
        )
        url = self._url(endpoints.PRODUCTS, query)
        return self.executor.get(url, ProductsResponse).products

    def get_product(self, product_id: str) -> Product:
        url = self._url(endpoints.PRODUCT, product_id=product_id)
        return self.executor.get(url, Product)

    def get_product_candles(
        self, product_id: str, start: datetime, end: datetime, granularity: Granularity
    ) -> List[Candle]:
        """
        Get price buckets for a product.

        Args:
            product_id: Product, e.g. "BTC-USD"
            start: Start of the range (sent as a unix timestamp; naive means UTC)
            end: End of the range (sent as a unix timestamp; naive means UTC)
            granularity: Bucket size

        Returns:
            List of candles
        """
        query = (
            QueryArgs()
            .add("start", format_timestamp(start))
            .add("end", format_timestamp(end))
            .add("granularity", granularity)
        )
        url = self._url(endpoints.PRODUCT_CANDLES, query, product_id=product_id)
        return self.executor.get(url, CandlesResponse).candles

    def get_market_trades(self, product_id: str, limit: int) -> MarketTrades:
        """Latest trades of a product with the best bid and ask."""
        query = QueryArgs().add("limit", limit)
        url = self._url(endpoints.MARKET_TRADES, query, product_id=product_id)
        return self.executor.get(url, MarketTrades)

    # Orders

    def list_orders(
        self,
        product_id: Optional[str] = None,
        order_status: Optional[Sequence[Status]] = None,
        limit: Optional[int] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        user_native_currency: Optional[str] = None,
        order_type: Optional[OrderType] = None,
        order_side: Optional[OrderSide] = None,
        cursor: Optional[str] = None,
        product_type: Optional[ProductType] = None,
        order_placement_source: Optional[OrderPlacementSource] = None,
        contract_expiry_type: Optional[ContractExpiryType] = None,
    ) -> Iterator[List[Order]]:
        """
        List historical orders matching the filters, one batch per page.

        Yields:
            Lists of orders
        """

        def request(page_cursor: Optional[str]) -> OrdersResponse:
            query = (
                QueryArgs()
                .add_optional("product_id", product_id)
                .add_optional_list("order_status", order_status)
                .add_optional("limit", limit)
                .add_optional_datetime("start_date", start_date)
                .add_optional_datetime("end_date", end_date)
                .add_optional("user_native_currency", user_native_currency)
                .add_optional("order_type", order_type)
                .add_optional("order_side", order_side)
                .add_optional("cursor", page_cursor)
                .add_optional("product_type", product_type)
                .add_optional("order_placement_source", order_placement_source)
                .add_optional("contract_expiry_type", contract_expiry_type)
            )
            return self.executor.get(self._url(endpoints.ORDERS_HISTORICAL, query), OrdersResponse)

        return paginate(request, has_next_continuation("orders"), cursor=cursor)

    def list_fills(
        self,
        order_id: Optional[str] = None,
        product_id: Optional[str] = None,
        start_sequence_timestamp: Optional[datetime] = None,
        end_sequence_timestamp: Optional[datetime] = None,
        limit: Optional[int] = None,
        cursor: Optional[str] = None,
    ) -> Iterator[List[Fill]]:
        """
        List fills, one batch per page.

        The fills listing has no has_next flag; the last page has an empty cursor.

        Yields:
            Lists of fills
        """

        def request(page_cursor: Optional[str]) -> FillsResponse:
            query = (
                QueryArgs()
                .add_optional("order_id", order_id)
                .add_optional("product_id", product_id)
                .add_optional_datetime("start_sequence_timestamp", start_sequence_timestamp)
                .add_optional_datetime("end_sequence_timestamp", end_sequence_timestamp)
                .add_optional("limit", limit)
                .add_optional("cursor", page_cursor)
            )
            return self.executor.get(self._url(endpoints.FILLS, query), FillsResponse)

        return paginate(request, cursor_continuation("fills"), cursor=cursor)

    def get_order(self, order_id: str) -> Order:
        url = self._url(endpoints.ORDER, order_id=order_id)
        return self.executor.get(url, OrderResponse).order

    # Fees

    def get_transactions_summary(
        self,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        user_native_currency: Optional[str] = None,
        product_type: Optional[ProductType] = None,
        contract_expiry_type: Optional[ContractExpiryType] = None,
    ) -> TransactionsSummary:
        """Fee tier, total volume and fees over the given period."""
        query = (
            QueryArgs()
            .add_optional_datetime("start_date", start_date)
            .add_optional_datetime("end_date", end_date)
            .add_optional("user_native_currency", user_native_currency)
            .add_optional("product_type", product_type)
            .add_optional("contract_expiry_type", contract_expiry_type)
        )
        url = self._url(endpoints.TRANSACTION_SUMMARY, query)
        return self.executor.get(url, TransactionsSummary)

    # Trading

    def create_order(self, order: OrderToSend) -> CreateOrderResponse:
        """
        Place an order built with one of the create_* helpers.

        WARNING: this places a real order and may result in a financial loss.
        """
        logger.info(f"Creating {order.side.value} order on {order.product_id}")
        return self.executor.post(self._url(endpoints.ORDERS), order, CreateOrderResponse)

    def cancel_orders(self, order_ids: Sequence[str]) -> List[CancelOrderResponse]:
        """
        Request cancellation of one or more orders.

        WARNING: this acts on real orders.
        """
        logger.info(f"Cancelling {len(order_ids)} order(s)")
        body = CancelOrdersRequest(order_ids=list(order_ids))
        url = self._url(endpoints.CANCEL_ORDERS)
        return self.executor.post(url, body, CancelOrdersResponse).results

    def close(self) -> None:
        self.executor.close()
        logger.info("CoinbaseClient closed")

    def __enter__(self) -> "CoinbaseClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
