"""Flat text file implementation of the registry store

This module provides a line oriented text file implementation of
RegistryStoreBase. Every line holds one record:

    alias,longUrl,accessCount,expirationDateOrNull

e.g.

    1a2b3c4d,https://example.com/page,3,null
    docs,https://example.com/docs,0,2026-01-01T00:00:00

Responsibilities:
    - Hydrate records from the store file (a missing file is an empty store);
    - Skip malformed lines instead of failing startup;
    - Rewrite the whole file atomically on every save;
    - Convert filesystem errors into DataStoreError.

Classes:
    FileRegistryStore:
        Store for reading and writing ShortURLModel records in a text file.

NOTE:
    Fields are neither quoted nor escaped. Aliases can't contain commas (the
    registry validates them) and URLs can't contain newlines, so the parser
    takes the alias from the front of the line and the access count and
    expiration date from the back; whatever is left in between is the long
    URL, commas included.

Example:
    >>> from urlregistry.store import FileRegistryStore
    >>> store = FileRegistryStore('/tmp/urls.txt')
    >>> store.load()
    []
"""

import os
import logging
import tempfile
from pathlib import Path
from collections.abc import Sequence

from beartype import beartype

from urlregistry.types import StoreRow
from urlregistry.models import ShortURLModel
from urlregistry.constants import Store
from urlregistry.exceptions import DataStoreError
from urlregistry.store.base import RegistryStoreBase
from urlregistry.store.helpers import handle_os_error
from urlregistry.utils.helpers import format_datetime, parse_datetime


logger = logging.getLogger(__name__)


def encode_record(record: ShortURLModel) -> str:
    """Render one record as a store line (without the trailing newline)."""
    return Store.SEPARATOR.join((record.shortcode, record.target, str(record.hits), format_datetime(record.expires_at)))


def decode_line(line: str) -> StoreRow | None:
    """Parse one store line.

    Returns:
        StoreRow | None:
            (alias, long URL, access count, expiration date), or None if the
            line is malformed.

    Example:
        >>> decode_line('abc,https://example.com,2,null')
        ('abc', 'https://example.com', 2, None)
        >>> decode_line('abc,https://example.com,2') is None
        True
    """
    head = line.split(Store.SEPARATOR, 1)
    if len(head) != 2:
        return None
    alias, rest = head

    tail = rest.rsplit(Store.SEPARATOR, 2)
    if len(tail) != Store.FIELDS - 1:
        return None
    target, hits, expires_at = tail

    if not alias or not target:
        return None
    try:
        hits = int(hits)
        expires_at = parse_datetime(expires_at)
    except ValueError:
        return None
    if hits < 0:
        return None

    return alias, target, hits, expires_at


class FileRegistryStore(RegistryStoreBase):
    """Text file based store for registry records

    Attributes:
        path (Path):
            Location of the store file.
        encoding (str):
            Text encoding of the store file.

    Methods:
        load(**kwargs) -> list[ShortURLModel]:
            Read and parse the store file, skipping malformed lines.
            Raises DataStoreError when the file exists but can't be read.

        save(records: Sequence[ShortURLModel], **kwargs) -> FileRegistryStore:
            Atomically rewrite the store file.
            Raises DataStoreError when the file can't be written.

    Example:
        >>> store = FileRegistryStore('urls.txt')
        >>> store.save([ShortURLModel(target='https://example.com', shortcode='abc123')])
        FileRegistryStore(path='urls.txt')
        >>> store.load()[0].target
        'https://example.com'
    """

    def __init__(self, path: str | os.PathLike, encoding: str = 'utf-8'):
        self.path = Path(path)
        self.encoding = encoding

    def __repr__(self) -> str:
        return f'{type(self).__name__}(path={str(self.path)!r})'

    @handle_os_error
    @beartype
    def load(self, **kwargs) -> list[ShortURLModel]:
        """Read every record from the store file

        Lines that aren't valid text in the store encoding, or have the wrong
        number of fields, a non-numeric or negative access count, or an
        unparseable expiration date are skipped. Only LF ends a line, so a
        stray CR stays inside its field.

        Returns:
            list[ShortURLModel]:
                Parsed records in file order. Empty if the file doesn't exist.

        Raises:
            DataStoreError:
                If the file exists but can't be read.
        """
        if not self.path.exists():
            logger.debug('Store file does not exist yet. Starting empty.', extra={'storePath': str(self.path)})
            return []

        records = []
        with open(self.path, 'rb') as f:
            for lineno, raw in enumerate(f, start=1):
                raw = raw.rstrip(b'\r\n')
                if not raw:
                    continue

                try:
                    row = decode_line(raw.decode(self.encoding))
                except UnicodeDecodeError:
                    row = None
                if row is None:
                    logger.debug('Skipping malformed store line %s.', lineno, extra={'storePath': str(self.path)})
                    continue

                alias, target, hits, expires_at = row
                records.append(ShortURLModel(target=target, shortcode=alias, hits=hits, expires_at=expires_at))

        logger.debug('Loaded %s record(s) from store.', len(records), extra={'storePath': str(self.path)})
        return records

    @handle_os_error
    @beartype
    def save(self, records: Sequence[ShortURLModel], **kwargs) -> 'FileRegistryStore':
        """Rewrite the store file with `records`

        The records are written to a temporary file next to the store and
        moved over it with os.replace(), so readers (and a crash mid-write)
        only ever see the old or the new content in full.

        Args:
            records (Sequence[ShortURLModel]):
                Every record of the registry.

        Returns:
            FileRegistryStore: self (for method chaining)

        Raises:
            DataStoreError:
                If the file can't be written.
        """
        lines = [f'{encode_record(record)}\n' for record in records]
        try:
            payload = ''.join(lines).encode(self.encoding)
        except UnicodeEncodeError as e:
            raise DataStoreError(f"Can't encode records as {self.encoding} for durable store at {self.path}.") from e

        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=f'.{self.path.name}.', suffix='.tmp')
        try:
            with os.fdopen(fd, 'wb') as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except BaseException:
            # Don't leave half written temp files next to the store
            try:
                os.unlink(tmp_path)
            except FileNotFoundError:
                pass
            raise

        logger.debug('Saved %s record(s) to store.', len(lines), extra={'storePath': str(self.path)})
        return self
