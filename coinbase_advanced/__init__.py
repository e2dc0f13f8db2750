"""
Coinbase Advanced Trade API client.

Authorize once through the browser, call the API, revoke:

    from coinbase_advanced import AuthorizationFlow, CoinbaseClient

    flow = AuthorizationFlow.from_env().add_scope("wallet:accounts:read")
    client = CoinbaseClient(flow.authorize_once())
    for batch in client.list_accounts():
        ...
    flow.revoke_access()
"""

from .api.exceptions import CoinbaseAPIError, DecodeError, ServiceError, TransportError
from .client import CoinbaseClient
from .oauth.exceptions import CoinbaseOAuthError
from .oauth.flow import AuthorizationFlow
from .oauth.token_store import TokenStore

__version__ = "0.1.0"

__all__ = [
    "AuthorizationFlow",
    "CoinbaseClient",
    "TokenStore",
    "CoinbaseOAuthError",
    "CoinbaseAPIError",
    "TransportError",
    "DecodeError",
    "ServiceError",
]
