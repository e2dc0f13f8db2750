"""Pydantic models for the transaction summary (fee tier) response."""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class FeeTier(BaseModel):
    pricing_tier: str
    usd_from: str
    usd_to: str
    taker_fee_rate: Decimal
    maker_fee_rate: Decimal


class MarginRate(BaseModel):
    value: str


class GoodsAndServicesTaxType(str, Enum):
    INCLUSIVE = "INCLUSIVE"
    EXCLUSIVE = "EXCLUSIVE"


class GoodsAndServicesTax(BaseModel):
    rate: str
    type: GoodsAndServicesTaxType


class TransactionsSummary(BaseModel):
    """Trading volume, fees and the current fee tier.

    Attributes:
        total_volume: Total trading volume over the period
        total_fees: Total fees paid over the period
        fee_tier: Maker/taker rates that apply to the user
        margin_rate: Margin rate, when applicable
        goods_and_services_tax: GST applied to fees, when applicable
    """

    total_volume: Decimal
    total_fees: Decimal
    fee_tier: FeeTier
    margin_rate: Optional[MarginRate] = None
    goods_and_services_tax: Optional[GoodsAndServicesTax] = None
    advanced_trade_only_volume: Decimal
    advanced_trade_only_fees: Decimal
    coinbase_pro_volume: Decimal
    coinbase_pro_fees: Decimal
