"""Abstract base class for registry stores.

This class establishes a consistent contract for all durable stores the URL
registry can be hydrated from and flushed to, regardless of the underlying
storage mechanism (e.g. a flat text file, an append-only log, SQLite).

Responsibilities:
    - Provide an interface for loading and saving the full set of records.
    - Standardize error handling across multiple store implementations.

Example:
    Typical usage with a store-specific implementation:

        >>> from urlregistry.models import ShortURLModel
        >>> from urlregistry.store import FileRegistryStore

        >>> store = FileRegistryStore('urls.txt')
        >>> store.save([ShortURLModel(target='https://example.com', shortcode='abc123')])
        FileRegistryStore(path='urls.txt')

        >>> store.load()
        [ShortURLModel(target='https://example.com', shortcode='abc123', hits=0, expires_at=None)]
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from urlregistry.models import ShortURLModel


class RegistryStoreBase(ABC):
    """Interface for registry stores.

    Methods:
        load(**kwargs) -> list[ShortURLModel]:
            Read every record from the durable store.
            Returns an empty list if the store doesn't exist yet.
            Raises DataStoreError on read failure.

        save(records: Sequence[ShortURLModel], **kwargs) -> RegistryStoreBase:
            Replace the durable store content with the given records.
            Raises DataStoreError on write failure.

    Subclassing:
        Store-specific implementations (e.g., FileRegistryStore) must extend
        this class and implement all abstract methods.

    NOTE:
        - Stores are tolerant readers: entries which can't be parsed are
          skipped instead of failing the whole load.
    """

    @abstractmethod
    def load(self, **kwargs) -> list[ShortURLModel]:
        """Read every record from the durable store.

        Returns:
            list[ShortURLModel]: stored records, in store order.

        Raises:
            DataStoreError:
                If the store exists but can't be read.
        """
        pass

    @abstractmethod
    def save(self, records: Sequence[ShortURLModel], **kwargs) -> 'RegistryStoreBase':
        """Replace the durable store content with `records`.

        Args:
            records (Sequence[ShortURLModel]):
                Every record of the registry, one entry per alias.

        Returns:
            RegistryStoreBase: self (for method chaining)

        Raises:
            DataStoreError:
                If the store can't be written.
        """
        pass
