"""Pydantic models for orders and fills, and builders for new orders.

The create_* helpers only build an OrderToSend; nothing is sent until it is
passed to CoinbaseClient.create_order().
"""

import uuid
from datetime import datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, Field

from .products import ProductType, Side, TradeType

OrderSide = Side

Amount = Union[Decimal, float, int, str]


class StopDirection(str, Enum):
    UNKNOWN_STOP_DIRECTION = "UNKNOWN_STOP_DIRECTION"
    STOP_DIRECTION_STOP_UP = "STOP_DIRECTION_STOP_UP"
    STOP_DIRECTION_STOP_DOWN = "STOP_DIRECTION_STOP_DOWN"


class Status(str, Enum):
    OPEN = "OPEN"
    FILLED = "FILLED"
    CANCELLED = "CANCELLED"
    EXPIRED = "EXPIRED"
    FAILED = "FAILED"
    UNKNOWN_ORDER_STATUS = "UNKNOWN_ORDER_STATUS"


class TimeInForce(str, Enum):
    UNKNOWN_TIME_IN_FORCE = "UNKNOWN_TIME_IN_FORCE"
    GOOD_UNTIL_DATE_TIME = "GOOD_UNTIL_DATE_TIME"
    GOOD_UNTIL_CANCELLED = "GOOD_UNTIL_CANCELLED"
    IMMEDIATE_OR_CANCEL = "IMMEDIATE_OR_CANCEL"
    FILL_OR_KILL = "FILL_OR_KILL"


class TriggerStatus(str, Enum):
    UNKNOWN_TRIGGER_STATUS = "UNKNOWN_TRIGGER_STATUS"
    INVALID_ORDER_TYPE = "INVALID_ORDER_TYPE"
    STOP_PENDING = "STOP_PENDING"
    STOP_TRIGGERED = "STOP_TRIGGERED"


class OrderType(str, Enum):
    UNKNOWN_ORDER_TYPE = "UNKNOWN_ORDER_TYPE"
    MARKET = "MARKET"
    LIMIT = "LIMIT"
    STOP = "STOP"
    STOP_LIMIT = "STOP_LIMIT"


class RejectReason(str, Enum):
    REJECT_REASON_UNSPECIFIED = "REJECT_REASON_UNSPECIFIED"


class OrderPlacementSource(str, Enum):
    RETAIL_SIMPLE = "RETAIL_SIMPLE"
    RETAIL_ADVANCED = "RETAIL_ADVANCED"


class LiquidityIndicator(str, Enum):
    UNKNOWN_LIQUIDITY_INDICATOR = "UNKNOWN_LIQUIDITY_INDICATOR"
    MAKER = "MAKER"
    TAKER = "TAKER"


class CreateOrderFailureReason(str, Enum):
    UNKNOWN_FAILURE_REASON = "UNKNOWN_FAILURE_REASON"
    UNSUPPORTED_ORDER_CONFIGURATION = "UNSUPPORTED_ORDER_CONFIGURATION"
    INVALID_SIDE = "INVALID_SIDE"
    INVALID_PRODUCT_ID = "INVALID_PRODUCT_ID"
    INVALID_SIZE_PRECISION = "INVALID_SIZE_PRECISION"
    INVALID_PRICE_PRECISION = "INVALID_PRICE_PRECISION"
    INSUFFICIENT_FUND = "INSUFFICIENT_FUND"
    INVALID_LEDGER_BALANCE = "INVALID_LEDGER_BALANCE"
    ORDER_ENTRY_DISABLED = "ORDER_ENTRY_DISABLED"
    INELIGIBLE_PAIR = "INELIGIBLE_PAIR"
    INVALID_LIMIT_PRICE_POST_ONLY = "INVALID_LIMIT_PRICE_POST_ONLY"
    INVALID_LIMIT_PRICE = "INVALID_LIMIT_PRICE"
    INVALID_NO_LIQUIDITY = "INVALID_NO_LIQUIDITY"
    INVALID_REQUEST = "INVALID_REQUEST"
    COMMANDER_REJECTED_NEW_ORDER = "COMMANDER_REJECTED_NEW_ORDER"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"


class PreviewCreateOrderFailureReason(str, Enum):
    UNKNOWN_PREVIEW_FAILURE_REASON = "UNKNOWN_PREVIEW_FAILURE_REASON"
    PREVIEW_MISSING_COMMISSION_RATE = "PREVIEW_MISSING_COMMISSION_RATE"
    PREVIEW_INVALID_SIDE = "PREVIEW_INVALID_SIDE"
    PREVIEW_INVALID_ORDER_CONFIG = "PREVIEW_INVALID_ORDER_CONFIG"
    PREVIEW_INVALID_PRODUCT_ID = "PREVIEW_INVALID_PRODUCT_ID"
    PREVIEW_INVALID_SIZE_PRECISION = "PREVIEW_INVALID_SIZE_PRECISION"
    PREVIEW_INVALID_PRICE_PRECISION = "PREVIEW_INVALID_PRICE_PRECISION"
    PREVIEW_MISSING_PRODUCT_PRICE_BOOK = "PREVIEW_MISSING_PRODUCT_PRICE_BOOK"
    PREVIEW_INVALID_LEDGER_BALANCE = "PREVIEW_INVALID_LEDGER_BALANCE"
    PREVIEW_INSUFFICIENT_LEDGER_BALANCE = "PREVIEW_INSUFFICIENT_LEDGER_BALANCE"
    PREVIEW_INVALID_LIMIT_PRICE_POST_ONLY = "PREVIEW_INVALID_LIMIT_PRICE_POST_ONLY"
    PREVIEW_INVALID_LIMIT_PRICE = "PREVIEW_INVALID_LIMIT_PRICE"
    PREVIEW_INVALID_NO_LIQUIDITY = "PREVIEW_INVALID_NO_LIQUIDITY"
    PREVIEW_INSUFFICIENT_FUND = "PREVIEW_INSUFFICIENT_FUND"
    PREVIEW_INVALID_COMMISSION_CONFIGURATION = "PREVIEW_INVALID_COMMISSION_CONFIGURATION"
    PREVIEW_INVALID_STOP_PRICE = "PREVIEW_INVALID_STOP_PRICE"
    PREVIEW_INVALID_BASE_SIZE_TOO_LARGE = "PREVIEW_INVALID_BASE_SIZE_TOO_LARGE"
    PREVIEW_INVALID_BASE_SIZE_TOO_SMALL = "PREVIEW_INVALID_BASE_SIZE_TOO_SMALL"
    PREVIEW_INVALID_QUOTE_SIZE_PRECISION = "PREVIEW_INVALID_QUOTE_SIZE_PRECISION"
    PREVIEW_INVALID_QUOTE_SIZE_TOO_LARGE = "PREVIEW_INVALID_QUOTE_SIZE_TOO_LARGE"
    PREVIEW_INVALID_PRICE_TOO_LARGE = "PREVIEW_INVALID_PRICE_TOO_LARGE"
    PREVIEW_INVALID_QUOTE_SIZE_TOO_SMALL = "PREVIEW_INVALID_QUOTE_SIZE_TOO_SMALL"
    PREVIEW_INSUFFICIENT_FUNDS_FOR_FUTURES = "PREVIEW_INSUFFICIENT_FUNDS_FOR_FUTURES"
    PREVIEW_BREACHED_PRICE_LIMIT = "PREVIEW_BREACHED_PRICE_LIMIT"
    PREVIEW_BREACHED_ACCOUNT_POSITION_LIMIT = "PREVIEW_BREACHED_ACCOUNT_POSITION_LIMIT"
    PREVIEW_BREACHED_COMPANY_POSITION_LIMIT = "PREVIEW_BREACHED_COMPANY_POSITION_LIMIT"
    PREVIEW_INVALID_MARGIN_HEALTH = "PREVIEW_INVALID_MARGIN_HEALTH"
    PREVIEW_RISK_PROXY_FAILURE = "PREVIEW_RISK_PROXY_FAILURE"
    PREVIEW_UNTRADABLE_FCM_ACCOUNT_STATUS = "PREVIEW_UNTRADABLE_FCM_ACCOUNT_STATUS"


class CancelOrderFailureReason(str, Enum):
    UNKNOWN_CANCEL_FAILURE_REASON = "UNKNOWN_CANCEL_FAILURE_REASON"
    INVALID_CANCEL_REQUEST = "INVALID_CANCEL_REQUEST"
    UNKNOWN_CANCEL_ORDER = "UNKNOWN_CANCEL_ORDER"
    COMMANDER_REJECTED_CANCEL_ORDER = "COMMANDER_REJECTED_CANCEL_ORDER"
    DUPLICATE_CANCEL_REQUEST = "DUPLICATE_CANCEL_REQUEST"


class Market(BaseModel):
    quote_size: Optional[Decimal] = None
    base_size: Optional[Decimal] = None


class Limit(BaseModel):
    base_size: Decimal
    limit_price: Decimal
    end_time: Optional[datetime] = None
    post_only: Optional[bool] = None


class StopLimit(BaseModel):
    base_size: Decimal
    limit_price: Decimal
    stop_price: Decimal
    stop_direction: StopDirection
    end_time: Optional[datetime] = None


class OrderConfiguration(BaseModel):
    """Exactly one of the fields is set for a given order."""

    market_market_ioc: Optional[Market] = None
    limit_limit_gtc: Optional[Limit] = None
    limit_limit_gtd: Optional[Limit] = None
    stop_limit_stop_limit_gtc: Optional[StopLimit] = None
    stop_limit_stop_limit_gtd: Optional[StopLimit] = None


class Order(BaseModel):
    """A historical order as returned by the orders endpoints."""

    order_id: str
    product_id: str
    user_id: str
    order_configuration: OrderConfiguration
    side: OrderSide
    client_order_id: str
    status: Status
    time_in_force: TimeInForce
    created_time: datetime
    completion_percentage: str
    filled_size: str
    average_filled_price: str
    fee: str
    number_of_fills: str
    filled_value: str
    pending_cancel: bool
    size_in_quote: bool
    total_fees: str
    size_inclusive_of_fees: bool
    total_value_after_fees: str
    trigger_status: TriggerStatus
    order_type: OrderType
    reject_reason: RejectReason
    # True once the order is fully filled
    settled: bool
    product_type: ProductType
    reject_message: Optional[str] = None
    cancel_message: Optional[str] = None
    order_placement_source: OrderPlacementSource
    # holdAmount - holdAmountReleased, 0 once the hold is released
    outstanding_hold_amount: str
    is_liquidation: bool


class OrderResponse(BaseModel):
    order: Order


class OrdersResponse(BaseModel):
    """One page of the historical orders listing."""

    orders: List[Order]
    sequence: str
    has_next: bool
    cursor: str


class Fill(BaseModel):
    entry_id: str
    trade_id: str
    order_id: str
    trade_time: datetime
    trade_type: TradeType
    price: str
    size: str
    commission: str
    product_id: str
    sequence_timestamp: datetime
    liquidity_indicator: LiquidityIndicator
    size_in_quote: bool
    user_id: str
    side: OrderSide


class FillsResponse(BaseModel):
    """One page of fills; an empty cursor marks the last page."""

    fills: List[Fill]
    cursor: str


class OrderToSend(BaseModel):
    """Body of a create-order request."""

    client_order_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    product_id: str
    side: OrderSide
    order_configuration: OrderConfiguration


class OrderSuccessResponse(BaseModel):
    order_id: str
    product_id: str
    side: OrderSide
    client_order_id: str


class OrderErrorResponse(BaseModel):
    error: CreateOrderFailureReason
    message: str
    error_details: str
    preview_failure_reason: PreviewCreateOrderFailureReason
    new_order_failure_reason: CreateOrderFailureReason


class CreateOrderResponse(BaseModel):
    success: bool
    failure_reason: CreateOrderFailureReason
    order_id: str
    success_response: Optional[OrderSuccessResponse] = None
    error_response: Optional[OrderErrorResponse] = None
    order_configuration: OrderConfiguration


class CancelOrderResponse(BaseModel):
    success: bool
    failure_reason: Optional[CancelOrderFailureReason] = None
    order_id: str


class CancelOrdersResponse(BaseModel):
    results: List[CancelOrderResponse]


class CancelOrdersRequest(BaseModel):
    order_ids: List[str]


def _to_decimal(value: Amount, name: str) -> Decimal:
    try:
        result = Decimal(str(value))
    except InvalidOperation as e:
        raise ValueError(f"{name} is not a valid amount: {value!r}") from e
    if not result.is_finite():
        raise ValueError(f"{name} is not a valid amount: {value!r}")
    return result


def _check_side(side: OrderSide) -> OrderSide:
    side = OrderSide(side)
    if side not in (OrderSide.BUY, OrderSide.SELL):
        raise ValueError(f"Order side should be BUY or SELL. Got: {side.value}")
    return side


def create_market_order(product_id: str, side: OrderSide, order_size: Amount) -> OrderToSend:
    """
    Build a market IOC order.

    For a BUY, order_size is in quote currency (e.g. USD to spend); for a
    SELL it is in base currency (e.g. BTC to sell).

    Raises:
        ValueError: If side is not BUY/SELL or order_size is not a finite number
    """
    side = _check_side(side)
    size = _to_decimal(order_size, "order_size")

    if side == OrderSide.BUY:
        market = Market(quote_size=size)
    else:
        market = Market(base_size=size)

    return OrderToSend(
        product_id=product_id,
        side=side,
        order_configuration=OrderConfiguration(market_market_ioc=market),
    )


def create_limit_order_gtc(
    product_id: str,
    side: OrderSide,
    base_size: Amount,
    limit_price: Amount,
    post_only: bool = False,
) -> OrderToSend:
    """Build a limit order that stays open until cancelled."""
    side = _check_side(side)
    limit = Limit(
        base_size=_to_decimal(base_size, "base_size"),
        limit_price=_to_decimal(limit_price, "limit_price"),
        post_only=post_only,
    )
    return OrderToSend(
        product_id=product_id,
        side=side,
        order_configuration=OrderConfiguration(limit_limit_gtc=limit),
    )


def create_limit_order_gtd(
    product_id: str,
    side: OrderSide,
    base_size: Amount,
    limit_price: Amount,
    end_time: datetime,
    post_only: bool = False,
) -> OrderToSend:
    """Build a limit order that expires at end_time."""
    side = _check_side(side)
    limit = Limit(
        base_size=_to_decimal(base_size, "base_size"),
        limit_price=_to_decimal(limit_price, "limit_price"),
        end_time=end_time,
        post_only=post_only,
    )
    return OrderToSend(
        product_id=product_id,
        side=side,
        order_configuration=OrderConfiguration(limit_limit_gtd=limit),
    )


def create_stop_limit_order_gtc(
    product_id: str,
    side: OrderSide,
    base_size: Amount,
    limit_price: Amount,
    stop_price: Amount,
    stop_direction: StopDirection,
) -> OrderToSend:
    """Build a stop-limit order that stays open until cancelled."""
    side = _check_side(side)
    stop_limit = StopLimit(
        base_size=_to_decimal(base_size, "base_size"),
        limit_price=_to_decimal(limit_price, "limit_price"),
        stop_price=_to_decimal(stop_price, "stop_price"),
        stop_direction=stop_direction,
    )
    return OrderToSend(
        product_id=product_id,
        side=side,
        order_configuration=OrderConfiguration(stop_limit_stop_limit_gtc=stop_limit),
    )


def create_stop_limit_order_gtd(
    product_id: str,
    side: OrderSide,
    base_size: Amount,
    limit_price: Amount,
    stop_price: Amount,
    end_time: datetime,
    stop_direction: StopDirection,
) -> OrderToSend:
    """Build a stop-limit order that expires at end_time."""
    side = _check_side(side)
    stop_limit = StopLimit(
        base_size=_to_decimal(base_size, "base_size"),
        limit_price=_to_decimal(limit_price, "limit_price"),
        stop_price=_to_decimal(stop_price, "stop_price"),
        stop_direction=stop_direction,
        end_time=end_time,
    )
    return OrderToSend(
        product_id=product_id,
        side=side,
        order_configuration=OrderConfiguration(stop_limit_stop_limit_gtd=stop_limit),
    )
