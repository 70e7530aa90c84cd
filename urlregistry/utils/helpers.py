"""Helper utilities for registry callers.

Functions:
    get_short_url() -> str
        Get string representation of short URL for a given alias
    strip_base_url() -> str
        Extract the alias from either a full short URL or a bare alias
    parse_datetime() -> datetime | None
        Parse an ISO-8601 date-time string (or the 'null' sentinel)
    format_datetime() -> str
        Render a date-time (or None) for the durable store

Example:
    >>> from urlregistry.utils.helpers import get_short_url, strip_base_url
    >>> get_short_url('1a2b3c4d', 'http://short.url/')
    'http://short.url/1a2b3c4d'
    >>> strip_base_url('http://short.url/1a2b3c4d', 'http://short.url/')
    '1a2b3c4d'
    >>> strip_base_url('1a2b3c4d', 'http://short.url/')
    '1a2b3c4d'
"""

from datetime import datetime

from urlregistry.constants import Store


def get_short_url(alias: str, base_url: str) -> str:
    """Get string representation of shortened URL

    Args:
        alias (str): alias
        base_url (str): configured base URL prefix

    Returns:
        str: short url string representation
    """
    return f'{base_url.rstrip("/")}/{alias}'


def strip_base_url(short_url_or_alias: str, base_url: str) -> str:
    """Return the alias part of a short URL.

    Input that doesn't carry the base URL prefix is returned unchanged
    (minus surrounding whitespace), so callers may pass either form.

    Args:
        short_url_or_alias (str): full short URL or bare alias
        base_url (str): configured base URL prefix

    Returns:
        str: alias
    """
    value = short_url_or_alias.strip()
    prefix = f'{base_url.rstrip("/")}/'
    if value.startswith(prefix):
        return value[len(prefix):]
    return value


def format_datetime(value: datetime | None) -> str:
    """Render an expiration date for the durable store ('null' if absent)."""
    return Store.NULL if value is None else value.isoformat()


def parse_datetime(value: str) -> datetime | None:
    """Parse an ISO-8601 date-time string.

    The 'null' sentinel (and an empty string) parse to None.

    Raises:
        ValueError: If the value isn't a valid ISO-8601 date-time.

    Example:
        >>> parse_datetime('2026-01-01T00:00:00')
        datetime.datetime(2026, 1, 1, 0, 0)
        >>> parse_datetime('null') is None
        True
    """
    value = value.strip()
    if not value or value == Store.NULL:
        return None
    return datetime.fromisoformat(value)
