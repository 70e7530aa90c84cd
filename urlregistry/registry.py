"""URL registry: the mapping and persistence engine

This module owns the two views of the shortened URL data and keeps them
consistent:

    forward: alias -> ShortURLModel
    reverse: long URL -> alias

Every public operation runs to completion under one lock
(validate -> mutate -> persist -> return), so the two maps are never observed
half updated and concurrent expansions never lose a hit.

Responsibilities:
    - Validate long URLs and custom aliases;
    - Generate collision free aliases with a bounded retry budget;
    - Track hit counters and optional expiration dates;
    - Hydrate from and flush to a RegistryStoreBase after every mutation;
    - Report failed flushes as a non-fatal PersistenceWarning.

Classes:
    URLRegistry:
        Shorten, expand and inspect URLs backed by a durable store.

Example:
    >>> from urlregistry import URLRegistry
    >>> from urlregistry.store import FileRegistryStore

    >>> registry = URLRegistry(FileRegistryStore('urls.txt'), base_url='http://short.url/')
    >>> short_url = registry.shorten('https://example.com/page', custom_alias='page')
    >>> short_url
    'http://short.url/page'

    >>> registry.expand(short_url)
    'https://example.com/page'
    >>> registry.inspect('page').hits
    1
"""

import re
import logging
import warnings
import threading
import dataclasses
from datetime import datetime
from types import MappingProxyType
from collections.abc import Mapping

from beartype import beartype

from urlregistry.types import AppConfig
from urlregistry.models import ShortURLModel
from urlregistry.store import RegistryStoreBase, FileRegistryStore
from urlregistry.constants import URL_PATTERN, Alias, Defaults
from urlregistry.exceptions import (
    AliasGenerationError,
    AliasInUseError,
    DataStoreError,
    InvalidAliasError,
    InvalidURLError,
    PersistenceWarning,
    ShortURLExpiredError,
    ShortURLNotFoundError,
)
from urlregistry.utils import generate_alias, get_short_url, strip_base_url, load_config


logger = logging.getLogger(__name__)

_URL_RE = re.compile(URL_PATTERN)
_ALIAS_RE = re.compile(Alias.PATTERN)


def _is_utf8(value: str) -> bool:
    """Return False for strings holding lone surrogates (e.g. undecodable argv bytes)."""
    try:
        value.encode('utf-8')
    except UnicodeEncodeError:
        return False
    return True


class URLRegistry:
    """In-memory URL registry flushed to a durable store

    Attributes:
        store (RegistryStoreBase):
            Durable store the registry is hydrated from and flushed to.
        base_url (str):
            Prefix prepended to every alias handed back to callers.
        max_alias_attempts (int):
            Number of alias candidates tried before giving up.
        last_persist_error (DataStoreError | None):
            Error of the most recent flush, None if it succeeded.

    Methods:
        load() -> int:
            Replace the in-memory state with the store content.

        shorten(long_url: str, custom_alias: str | None = None, expires_at: datetime | None = None) -> str:
            Map a long URL to an alias and return the short URL.
            Raises InvalidURLError, InvalidAliasError, AliasInUseError or AliasGenerationError.

        expand(short_url_or_alias: str) -> str:
            Return the long URL behind an alias and count the hit.
            Raises ShortURLNotFoundError or ShortURLExpiredError.

        inspect(short_url_or_alias: str) -> ShortURLModel:
            Return a read-only snapshot of a record without counting a hit.
            Raises ShortURLNotFoundError.

    NOTE:
        - Expired records are never deleted. They are rejected on every
          expansion until re-shortening the same URL replaces the expiration.
        - Failed flushes emit PersistenceWarning (see `warnings`) and leave
          the in-memory state authoritative.
    """

    def __init__(
        self,
        store: RegistryStoreBase,
        base_url: str = Defaults.BASE_URL,
        max_alias_attempts: int = Alias.MAX_ATTEMPTS,
        load: bool = True,
    ):
        """Initialize the registry and hydrate it from the store

        Args:
            store (RegistryStoreBase):
                Durable store implementation.

            base_url (str):
                Base URL prefix for short links. Defaults to 'http://short.url/'.

            max_alias_attempts (int):
                Alias candidates tried per shorten() call. Defaults to 64.

            load (bool):
                If True, hydrate from the store immediately. Defaults to True.

        Raises:
            DataStoreError:
                If the store exists but can't be read.
        """
        if max_alias_attempts < 1:
            raise ValueError(f'max_alias_attempts must be a positive integer (given value: {max_alias_attempts}).')

        self.store = store
        self.base_url = base_url
        self.max_alias_attempts = max_alias_attempts

        self._forward: dict[str, ShortURLModel] = {}
        self._reverse: dict[str, str] = {}
        self._lock = threading.RLock()
        self.last_persist_error: DataStoreError | None = None

        if load:
            self.load()

    @classmethod
    def from_config(cls, config: AppConfig | None = None) -> 'URLRegistry':
        """Build a file backed registry from the application configuration

        Example:
            >>> registry = URLRegistry.from_config()
            >>> registry.store
            FileRegistryStore(path='/srv/app/urls.txt')
        """
        if config is None:
            config = load_config()
        return cls(
            FileRegistryStore(config['store_path']),
            base_url=config['base_url'],
            max_alias_attempts=config['max_alias_attempts'],
        )

    def __repr__(self) -> str:
        return f'{type(self).__name__}(store={self.store!r}, base_url={self.base_url!r}, size={len(self)})'

    def __len__(self) -> int:
        with self._lock:
            return len(self._forward)

    def __contains__(self, alias: object) -> bool:
        with self._lock:
            return alias in self._forward

    @property
    def forward(self) -> Mapping[str, ShortURLModel]:
        """Read-only copy of the alias -> record map."""
        with self._lock:
            return MappingProxyType(dict(self._forward))

    @property
    def reverse(self) -> Mapping[str, str]:
        """Read-only copy of the long URL -> alias map."""
        with self._lock:
            return MappingProxyType(dict(self._reverse))

    def load(self) -> int:
        """Replace the in-memory state with the store content

        Records reusing an alias or a long URL already loaded are dropped
        (first one wins) so both maps stay exact inverses.

        Returns:
            int: number of records loaded.

        Raises:
            DataStoreError:
                If the store exists but can't be read.
        """
        records = self.store.load()

        with self._lock:
            self._forward.clear()
            self._reverse.clear()
            for record in records:
                if record.shortcode in self._forward or record.target in self._reverse:
                    logger.debug('Skipping duplicate store record.', extra={'alias': record.shortcode})
                    continue
                self._insert(record)

            logger.info('Loaded URL registry.', extra={'records': len(self._forward), 'store': repr(self.store)})
            return len(self._forward)

    @beartype
    def shorten(self, long_url: str, custom_alias: str | None = None, expires_at: datetime | None = None) -> str:
        """Map a long URL to an alias and return the short URL

        If the long URL is already shortened, its expiration date is replaced
        with `expires_at` (None clears it) and the existing short URL is
        returned; `custom_alias` is ignored in that case.

        Args:
            long_url (str):
                URL to shorten. Must start with http:// or https://.

            custom_alias (str | None):
                Alias to use instead of a generated one. Empty means absent.

            expires_at (datetime | None):
                Moment after which expansion is rejected. None never expires.

        Returns:
            str: short URL (base URL + alias).

        Raises:
            InvalidURLError:
                If `long_url` doesn't use an http(s) scheme, holds control
                characters or can't be encoded as UTF-8.
            InvalidAliasError:
                If `custom_alias` holds a comma, a control character or
                surrounding whitespace.
            AliasInUseError:
                If `custom_alias` already maps to another URL.
            AliasGenerationError:
                If every generated alias candidate collided.

        Example:
            >>> registry.shorten('https://example.com')
            'http://short.url/9bd2f7e1'
            >>> registry.shorten('ftp://example.com')
            Traceback (most recent call last):
                ...
            urlregistry.exceptions.InvalidURLError: Invalid URL 'ftp://example.com' (expected http:// or https:// without control characters).
        """
        if not _URL_RE.fullmatch(long_url) or not _is_utf8(long_url):
            raise InvalidURLError(f"Invalid URL {long_url!r} (expected http:// or https:// without control characters).")

        with self._lock:
            alias = self._reverse.get(long_url)
            if alias is not None:
                record = dataclasses.replace(self._forward[alias], expires_at=expires_at)
                self._forward[alias] = record
                logger.info('URL already shortened. Updated expiration date.', extra={'alias': alias, 'expiresAt': expires_at})
                self._persist()
                return get_short_url(alias, self.base_url)

            if custom_alias:
                if not _ALIAS_RE.fullmatch(custom_alias) or custom_alias != custom_alias.strip() or not _is_utf8(custom_alias):
                    raise InvalidAliasError(f"Invalid alias {custom_alias!r} (no commas, control characters or surrounding whitespace).")
                if custom_alias in self._forward:
                    raise AliasInUseError(f"Alias '{custom_alias}' is already in use.")
                alias = custom_alias
            else:
                alias = self._generate_alias(long_url)

            self._insert(ShortURLModel(target=long_url, shortcode=alias, hits=0, expires_at=expires_at))
            logger.info('Shortened URL.', extra={'alias': alias, 'custom': bool(custom_alias), 'expiresAt': expires_at})
            self._persist()
            return get_short_url(alias, self.base_url)

    @beartype
    def expand(self, short_url_or_alias: str) -> str:
        """Return the long URL behind an alias and count the hit

        Args:
            short_url_or_alias (str):
                Full short URL or bare alias.

        Returns:
            str: the original long URL.

        Raises:
            ShortURLNotFoundError:
                If the alias isn't registered.
            ShortURLExpiredError:
                If the alias is past its expiration date. The hit counter
                is left untouched.
        """
        alias = strip_base_url(short_url_or_alias, self.base_url)

        with self._lock:
            record = self._get(alias)
            if record.is_expired():
                logger.info('Rejected expired short URL.', extra={'alias': alias, 'expiresAt': record.expires_at})
                raise ShortURLExpiredError(f"Short URL with alias '{alias}' expired at {record.expires_at.isoformat()}.")

            record = dataclasses.replace(record, hits=record.hits + 1)
            self._forward[alias] = record
            logger.debug('Expanded short URL.', extra={'alias': alias, 'hits': record.hits})
            self._persist()
            return record.target

    @beartype
    def inspect(self, short_url_or_alias: str) -> ShortURLModel:
        """Return a read-only snapshot of a record

        Doesn't count a hit and doesn't touch the store. Expired records are
        still returned.

        Raises:
            ShortURLNotFoundError:
                If the alias isn't registered.
        """
        alias = strip_base_url(short_url_or_alias, self.base_url)
        with self._lock:
            return self._get(alias)

    def _get(self, alias: str) -> ShortURLModel:
        record = self._forward.get(alias)
        if record is None:
            logger.debug('Short URL not found.', extra={'alias': alias})
            raise ShortURLNotFoundError(f"Short URL with alias '{alias}' not found.")
        return record

    def _insert(self, record: ShortURLModel) -> None:
        # Both maps are updated together while holding the lock
        self._forward[record.shortcode] = record
        self._reverse[record.target] = record.shortcode

    def _generate_alias(self, long_url: str) -> str:
        """Pick the first free alias candidate for `long_url`

        Each attempt seeds the hash differently, so a collision never repeats
        the same candidate and the loop is bounded by `max_alias_attempts`.
        """
        for attempt in range(self.max_alias_attempts):
            alias = generate_alias(long_url, attempt=attempt)
            if alias not in self._forward:
                return alias
            logger.debug('Alias collision. Retrying.', extra={'alias': alias, 'attempt': attempt})

        raise AliasGenerationError(f'No free alias for {long_url} after {self.max_alias_attempts} attempt(s).')

    def _persist(self) -> bool:
        """Flush the full state to the store

        Returns:
            bool: True if the store was written, False otherwise.
        """
        try:
            self.store.save(list(self._forward.values()))
        except DataStoreError as e:
            self.last_persist_error = e
            logger.warning('Failed to persist URL registry. In-memory state is kept.', exc_info=True, extra={'store': repr(self.store)})
            # Every failed flush must reach the caller, not only the first one per call site
            with warnings.catch_warnings():
                warnings.simplefilter('always', PersistenceWarning)
                warnings.warn(f'Registry change not persisted: {e}', PersistenceWarning, stacklevel=3)
            return False
        self.last_persist_error = None
        return True
