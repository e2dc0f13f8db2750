"""
Valid OAuth scopes for Coinbase.

See https://docs.cloud.coinbase.com/sign-in-with-coinbase/docs/permissions-scopes
"""

VALID_SCOPES = frozenset(
    [
        "wallet:accounts:read",  # List user's accounts and their balances
        "wallet:accounts:update",  # Update account (e.g. change name)
        "wallet:accounts:create",  # Create a new account (e.g. BTC wallet)
        "wallet:accounts:delete",  # Delete existing account
        "wallet:addresses:read",  # List account's bitcoin or ethereum addresses
        "wallet:addresses:create",  # Create new bitcoin or ethereum addresses
        "wallet:buys:read",  # List account's buys
        "wallet:buys:create",  # Buy bitcoin or ethereum
        "wallet:deposits:read",  # List account's deposits
        "wallet:deposits:create",  # Create a new deposit
        "wallet:notifications:read",  # List user's notifications
        "wallet:payment-methods:read",  # List user's payment methods
        "wallet:payment-methods:delete",  # Remove existing payment methods
        "wallet:payment-methods:limits",  # Detailed limits for payment methods
        "wallet:sells:read",  # List account's sells
        "wallet:sells:create",  # Sell bitcoin or ethereum
        "wallet:transactions:read",  # List account's transactions
        "wallet:transactions:send",  # Send bitcoin or ethereum
        "wallet:transactions:request",  # Request bitcoin or ethereum from a Coinbase user
        "wallet:transactions:transfer",  # Transfer funds between user's accounts
        "wallet:user:read",  # List detailed user information
        "wallet:user:update",  # Update current user
        "wallet:user:email",  # Read current user's email address
        "wallet:withdrawals:read",  # List account's withdrawals
        "wallet:withdrawals:create",  # Create a new withdrawal
    ]
)


def is_valid_scope(scope: str) -> bool:
    """Return True if `scope` is one of the Coinbase OAuth scopes."""
    return scope in VALID_SCOPES
