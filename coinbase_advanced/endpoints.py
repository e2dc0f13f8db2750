"""
Coinbase Advanced Trade API endpoint definitions.

Paths are relative to BASE_URL; {name} placeholders are filled by build_url().

Documentation: https://docs.cloud.coinbase.com/advanced-trade-api/reference
"""

BASE_URL = "https://api.coinbase.com/api/v3"

# Accounts
ACCOUNTS = "/brokerage/accounts"
ACCOUNT = "/brokerage/accounts/{account_uuid}"

# Products & market data
BEST_BID_ASK = "/brokerage/best_bid_ask"
PRODUCT_BOOK = "/brokerage/product_book"
PRODUCTS = "/brokerage/products"
PRODUCT = "/brokerage/products/{product_id}"
PRODUCT_CANDLES = "/brokerage/products/{product_id}/candles"
MARKET_TRADES = "/brokerage/products/{product_id}/ticker"

# Orders
ORDERS = "/brokerage/orders"
ORDERS_HISTORICAL = "/brokerage/orders/historical/batch"
FILLS = "/brokerage/orders/historical/fills"
ORDER = "/brokerage/orders/historical/{order_id}"
CANCEL_ORDERS = "/brokerage/orders/batch_cancel"

# Fees
TRANSACTION_SUMMARY = "/brokerage/transaction_summary"
