"""Pydantic models for products, price books, candles and market trades.

Coinbase reports missing prices either as null or as an empty string, so the
price and volume statistics of a Product are parsed leniently: an empty or
unparseable value becomes None instead of failing the whole response.
"""

from datetime import datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, field_validator


class ProductType(str, Enum):
    SPOT = "SPOT"
    FUTURE = "FUTURE"


class ContractExpiryType(str, Enum):
    UNKNOWN_CONTRACT_EXPIRY_TYPE = "UNKNOWN_CONTRACT_EXPIRY_TYPE"
    EXPIRING = "EXPIRING"


class Granularity(str, Enum):
    UNKNOWN_GRANULARITY = "UNKNOWN_GRANULARITY"
    ONE_MINUTE = "ONE_MINUTE"
    FIVE_MINUTE = "FIVE_MINUTE"
    FIFTEEN_MINUTE = "FIFTEEN_MINUTE"
    THIRTY_MINUTE = "THIRTY_MINUTE"
    ONE_HOUR = "ONE_HOUR"
    TWO_HOUR = "TWO_HOUR"
    SIX_HOUR = "SIX_HOUR"
    ONE_DAY = "ONE_DAY"


class Side(str, Enum):
    UNKNOWN_ORDER_SIDE = "UNKNOWN_ORDER_SIDE"
    BUY = "BUY"
    SELL = "SELL"


class TradeType(str, Enum):
    FILL = "FILL"
    REVERSAL = "REVERSAL"
    CORRECTION = "CORRECTION"
    SYNTHETIC = "SYNTHETIC"


class Bid(BaseModel):
    price: Decimal
    size: Decimal


class Ask(BaseModel):
    price: Decimal
    size: Decimal


class Pricebook(BaseModel):
    """Bids and asks for one product at a point in time."""

    product_id: str
    bids: List[Bid]
    asks: List[Ask]
    time: datetime


class PricebooksResponse(BaseModel):
    pricebooks: List[Pricebook]


class PricebookResponse(BaseModel):
    pricebook: Pricebook


class FcmTradingSessionDetails(BaseModel):
    is_session_open: bool
    open_time: datetime
    close_time: Optional[datetime] = None


class PerpetualDetails(BaseModel):
    open_interest: str
    funding_rate: str
    funding_time: Optional[datetime] = None


class FutureProductDetails(BaseModel):
    venue: str
    contract_code: str
    contract_expiry: datetime
    contract_size: str
    contract_root_unit: str
    group_description: str
    contract_expiry_timezone: str
    group_short_description: str
    risk_managed_by: str
    contract_expiry_type: str
    perpetual_details: PerpetualDetails
    contract_display_name: str


class Product(BaseModel):
    """A tradable currency pair.

    Attributes:
        product_id: Pair identifier, e.g. "BTC-USD"
        price: Last price, None when Coinbase has none
        price_percentage_change_24h: 24h price change in percent
        volume_24h: 24h traded volume
        volume_percentage_change_24h: 24h volume change in percent
        base_increment / quote_increment: Size precision
        base_min_size / base_max_size: Order size bounds in base currency
        quote_min_size / quote_max_size: Order size bounds in quote currency
        status: Trading status, e.g. "online"
        product_type: "SPOT" or "FUTURE"
    """

    product_id: str
    price: Optional[Decimal] = None
    price_percentage_change_24h: Optional[Decimal] = None
    volume_24h: Optional[Decimal] = None
    volume_percentage_change_24h: Optional[Decimal] = None
    base_increment: Decimal
    quote_increment: Decimal
    quote_min_size: Decimal
    quote_max_size: Decimal
    base_min_size: Decimal
    base_max_size: Decimal
    base_name: str
    quote_name: str
    watched: bool
    is_disabled: bool
    new: bool
    status: str
    cancel_only: bool
    limit_only: bool
    post_only: bool
    trading_disabled: bool
    auction_mode: bool
    product_type: str
    quote_currency_id: str
    base_currency_id: str
    fcm_trading_session_details: Optional[FcmTradingSessionDetails] = None
    mid_market_price: str
    alias: str
    alias_to: List[str]
    base_display_symbol: str
    quote_display_symbol: str
    view_only: bool
    price_increment: Decimal
    future_product_details: Optional[FutureProductDetails] = None

    @field_validator(
        "price",
        "price_percentage_change_24h",
        "volume_24h",
        "volume_percentage_change_24h",
        mode="before",
    )
    @classmethod
    def lenient_decimal(cls, v: Any) -> Optional[Decimal]:
        """Map empty or unparseable values to None."""
        if v is None or v == "":
            return None
        try:
            value = Decimal(str(v))
        except InvalidOperation:
            return None
        return value if value.is_finite() else None


class ProductsResponse(BaseModel):
    products: List[Product]
    num_products: int


class Candle(BaseModel):
    """Price bucket; start is the bucket's unix timestamp as a string."""

    start: str
    low: Decimal
    high: Decimal
    open: Decimal
    close: Decimal
    volume: Decimal


class CandlesResponse(BaseModel):
    candles: List[Candle]


class Trade(BaseModel):
    trade_id: str
    product_id: str
    price: Decimal
    size: Decimal
    time: datetime
    side: Side
    # Coinbase sends "" for these
    bid: Optional[str] = None
    ask: Optional[str] = None


class MarketTrades(BaseModel):
    """Latest trades of a product with the best bid and ask."""

    trades: List[Trade]
    best_bid: Decimal
    best_ask: Decimal
