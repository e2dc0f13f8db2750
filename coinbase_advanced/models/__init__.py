"""Pydantic models for Coinbase Advanced Trade API requests and responses."""

from .accounts import Account, AccountResponse, AccountsResponse, AccountType, Balance
from .fees import FeeTier, GoodsAndServicesTax, GoodsAndServicesTaxType, MarginRate, TransactionsSummary
from .orders import (
    CancelOrderFailureReason,
    CancelOrderResponse,
    CancelOrdersRequest,
    CancelOrdersResponse,
    CreateOrderFailureReason,
    CreateOrderResponse,
    Fill,
    FillsResponse,
    Limit,
    LiquidityIndicator,
    Market,
    Order,
    OrderConfiguration,
    OrderPlacementSource,
    OrderResponse,
    OrderSide,
    OrdersResponse,
    OrderToSend,
    OrderType,
    Status,
    StopDirection,
    StopLimit,
    TimeInForce,
    create_limit_order_gtc,
    create_limit_order_gtd,
    create_market_order,
    create_stop_limit_order_gtc,
    create_stop_limit_order_gtd,
)
from .products import (
    Ask,
    Bid,
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
    Side,
    Trade,
    TradeType,
)

__all__ = [
    # Accounts
    "Account",
    "AccountResponse",
    "AccountsResponse",
    "AccountType",
    "Balance",
    # Fees
    "FeeTier",
    "GoodsAndServicesTax",
    "GoodsAndServicesTaxType",
    "MarginRate",
    "TransactionsSummary",
    # Orders
    "CancelOrderFailureReason",
    "CancelOrderResponse",
    "CancelOrdersRequest",
    "CancelOrdersResponse",
    "CreateOrderFailureReason",
    "CreateOrderResponse",
    "Fill",
    "FillsResponse",
    "Limit",
    "LiquidityIndicator",
    "Market",
    "Order",
    "OrderConfiguration",
    "OrderPlacementSource",
    "OrderResponse",
    "OrderSide",
    "OrdersResponse",
    "OrderToSend",
    "OrderType",
    "Status",
    "StopDirection",
    "StopLimit",
    "TimeInForce",
    "create_limit_order_gtc",
    "create_limit_order_gtd",
    "create_market_order",
    "create_stop_limit_order_gtc",
    "create_stop_limit_order_gtd",
    # Products
    "Ask",
    "Bid",
    "Candle",
    "CandlesResponse",
    "ContractExpiryType",
    "Granularity",
    "MarketTrades",
    "Pricebook",
    "PricebookResponse",
    "PricebooksResponse",
    "Product",
    "ProductsResponse",
    "ProductType",
    "Side",
    "Trade",
    "TradeType",
]
