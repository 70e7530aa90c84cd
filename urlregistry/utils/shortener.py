"""Alias generation utility

This module provides a helper function for generating short, deterministic
aliases from a long URL using a 32-bit xxHash digest.

Functions:
    generate_alias(long_url, attempt=0, length=8):
        Generate a lowercase hexadecimal alias suitable for use as a URL slug.

Example:
    >>> from urlregistry.utils import generate_alias
    >>> alias = generate_alias('https://example.com')
    >>> len(alias)
    8
    >>> generate_alias('https://example.com') == alias
    True
    >>> generate_alias('https://example.com', attempt=1) == alias
    False
"""

import xxhash

from urlregistry.constants import Alias


def generate_alias(long_url: str, attempt: int = 0, length: int = Alias.HEX_LENGTH) -> str:
    """Generate a deterministic alias for a long URL.

    The URL is hashed with 32-bit xxHash and rendered as zero padded lowercase
    hex. The attempt number is used as the hash seed, so every retry after a
    collision hashes a different input while the sequence of candidates stays
    reproducible for the same URL.

    Args:
        long_url (str):
            The URL to derive an alias from.

        attempt (int, optional):
            Retry number (0 for the first candidate). Defaults to 0.

        length (int, optional):
            Number of hex characters to keep (1 to 8). Defaults to 8.

    Returns:
        str: A lowercase hexadecimal alias.

    Raises:
        TypeError: If `long_url` isn't a string or `attempt` isn't an integer.
        ValueError: If `attempt` is negative or `length` is out of range.

    Example:
        >>> alias = generate_alias('https://example.com/page', attempt=3)
        >>> all(c in '0123456789abcdef' for c in alias)
        True
    """
    if not isinstance(long_url, str):
        raise TypeError(f'Long URL must be of type string (given type: {type(long_url)}).')
    if not isinstance(attempt, int) or isinstance(attempt, bool):
        raise TypeError(f'Attempt must be of type integer (given type: {type(attempt)}).')
    if attempt < 0:
        raise ValueError(f'Attempt must be a non-negative integer (given value: {attempt}).')
    if not 1 <= length <= Alias.HEX_LENGTH:
        raise ValueError(f'Length must be between 1 and {Alias.HEX_LENGTH} (given value: {length}).')

    # NOTE: xxh32 seeds are unsigned 32-bit integers
    digest = xxhash.xxh32_intdigest(long_url.encode('utf-8'), seed=attempt & 0xFFFFFFFF)
    return f'{digest:08x}'[-length:]
