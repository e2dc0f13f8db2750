"""Pydantic models for Coinbase account responses."""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel


class AccountType(str, Enum):
    ACCOUNT_TYPE_UNSPECIFIED = "ACCOUNT_TYPE_UNSPECIFIED"
    ACCOUNT_TYPE_CRYPTO = "ACCOUNT_TYPE_CRYPTO"
    ACCOUNT_TYPE_FIAT = "ACCOUNT_TYPE_FIAT"
    ACCOUNT_TYPE_VAULT = "ACCOUNT_TYPE_VAULT"


class Balance(BaseModel):
    """Amount of a currency."""

    value: Decimal
    currency: str


class Account(BaseModel):
    """A Coinbase wallet (one per currency).

    Attributes:
        uuid: Account identifier, used by get_account()
        name: Display name, e.g. "BTC Wallet"
        currency: Currency code
        available_balance: Spendable balance
        default: Whether this is the default account for the currency
        active: Whether the account is active
        type: Crypto, fiat or vault account
        ready: Whether the account is ready for trading
        hold: Amount on hold
    """

    uuid: UUID
    name: str
    currency: str
    available_balance: Balance
    default: bool
    active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None
    type: AccountType
    ready: bool
    hold: Balance


class AccountsResponse(BaseModel):
    """One page of the account listing."""

    accounts: List[Account]
    has_next: bool
    cursor: str
    size: int


class AccountResponse(BaseModel):
    account: Account
