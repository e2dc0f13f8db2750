"""
Query string assembly for Coinbase API URLs.

QueryArgs collects (key, value) pairs in insertion order:

- optional values are skipped when None
- booleans are rendered lowercase
- enums are rendered by value
- lists become one repeated key per element
- datetimes are rendered as RFC 3339 UTC with a Z suffix
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Iterable, List, Optional, Tuple
from urllib.parse import quote, urlencode


def as_utc(value: datetime) -> datetime:
    """Convert to UTC; naive datetimes are taken as UTC, never local time."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_datetime(value: datetime) -> str:
    """RFC 3339 with seconds precision in UTC."""
    return as_utc(value).strftime("%Y-%m-%dT%H:%M:%SZ")


def format_timestamp(value: datetime) -> int:
    """Unix seconds, with the same UTC rule as format_datetime."""
    return int(as_utc(value).timestamp())


def format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, datetime):
        return format_datetime(value)
    return str(value)


class QueryArgs:
    """Ordered query arguments; the add methods chain."""

    def __init__(self):
        self._pairs: List[Tuple[str, str]] = []

    def add(self, key: str, value: Any) -> "QueryArgs":
        self._pairs.append((key, format_value(value)))
        return self

    def add_optional(self, key: str, value: Optional[Any]) -> "QueryArgs":
        if value is not None:
            self.add(key, value)
        return self

    def add_optional_list(self, key: str, values: Optional[Iterable[Any]]) -> "QueryArgs":
        for value in values or ():
            self.add(key, value)
        return self

    def add_optional_datetime(self, key: str, value: Optional[datetime]) -> "QueryArgs":
        if value is not None:
            self._pairs.append((key, format_datetime(value)))
        return self

    @property
    def pairs(self) -> List[Tuple[str, str]]:
        return list(self._pairs)

    def encode(self) -> str:
        return urlencode(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __repr__(self) -> str:
        return f"QueryArgs({self._pairs!r})"


def build_url(template: str, query: Optional[QueryArgs] = None, **path: Any) -> str:
    """
    Expand a URL template and append the query string.

    Args:
        template: URL with {name} placeholders
        query: Query arguments (no "?" is added when empty)
        **path: Values for the placeholders, percent-encoded

    Returns:
        Complete URL

    Example:
        build_url(ACCOUNT, account_uuid="8bfc...")
    """
    url = template.format(**{name: quote(str(value), safe="") for name, value in path.items()})
    if query:
        url = f"{url}?{query.encode()}"
    return url
