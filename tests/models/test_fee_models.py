"""Tests for the transaction summary model."""

from decimal import Decimal

from coinbase_advanced.models.fees import GoodsAndServicesTaxType, TransactionsSummary


def test_transactions_summary():
    summary = TransactionsSummary.model_validate(
        {
            "total_volume": 1000,
            "total_fees": 25,
            "fee_tier": {
                "pricing_tier": "<$10k",
                "usd_from": "0",
                "usd_to": "10,000",
                "taker_fee_rate": "0.0010",
                "maker_fee_rate": "0.0020",
            },
            "margin_rate": {"value": "string"},
            "goods_and_services_tax": {"rate": "string", "type": "INCLUSIVE"},
            "advanced_trade_only_volume": 1000,
            "advanced_trade_only_fees": 25,
            "coinbase_pro_volume": 1000,
            "coinbase_pro_fees": 25,
        }
    )

    assert summary.fee_tier.taker_fee_rate == Decimal("0.0010")
    assert summary.goods_and_services_tax.type == GoodsAndServicesTaxType.INCLUSIVE
    assert summary.total_volume == Decimal("1000")


def test_optional_sections():
    summary = TransactionsSummary.model_validate(
        {
            "total_volume": 0,
            "total_fees": 0,
            "fee_tier": {
                "pricing_tier": "",
                "usd_from": "0",
                "usd_to": "0",
                "taker_fee_rate": "0.006",
                "maker_fee_rate": "0.004",
            },
            "advanced_trade_only_volume": 0,
            "advanced_trade_only_fees": 0,
            "coinbase_pro_volume": 0,
            "coinbase_pro_fees": 0,
        }
    )

    assert summary.margin_rate is None
    assert summary.goods_and_services_tax is None
