"""Exceptions raised by the URL registry and its durable store.

Every exception carries a stable `error_code` which callers (e.g. the CLI)
surface next to the human readable message.

Classes:
    RegistryError:
        Base exception for all application-specific errors.

    InvalidURLError:
        Raised when a long URL doesn't use an http(s) scheme.

    InvalidAliasError:
        Raised when a custom alias can't be stored safely.

    AliasInUseError:
        Raised when a custom alias is already mapped to another URL.

    AliasGenerationError:
        Raised when no free alias could be generated within the retry budget.

    ShortURLNotFoundError:
        Raised when an alias isn't present in the registry.

    ShortURLExpiredError:
        Raised when an alias exists but its expiration date has passed.

    DataStoreError:
        Raised by stores when the durable store can't be read or written.

    ConfigurationError:
        Raised when the application is configured with invalid parameters.

    PersistenceWarning:
        Warning emitted when an in-memory mutation couldn't be flushed.

Example:
    >>> from urlregistry.exceptions import ShortURLNotFoundError
    >>> raise ShortURLNotFoundError("Short URL with alias 'abc123' not found.")
    Traceback (most recent call last):
        ...
    urlregistry.exceptions.ShortURLNotFoundError: Short URL with alias 'abc123' not found.
"""


class RegistryError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:registry_error'


class InvalidURLError(RegistryError):
    """Raised when a long URL doesn't match the http(s) scheme pattern."""

    error_code = 'input:invalid_url'


class InvalidAliasError(RegistryError):
    """Raised when a custom alias contains characters the store can't encode."""

    error_code = 'input:invalid_alias'


class AliasInUseError(RegistryError):
    """Raised when a custom alias is already mapped to another URL."""

    error_code = 'registry:alias_in_use'


class AliasGenerationError(RegistryError):
    """Raised when every generated alias candidate collided."""

    error_code = 'registry:alias_generation_exhausted'


class ShortURLNotFoundError(RegistryError):
    """Raised when an alias is not present in the registry."""

    error_code = 'registry:not_found'


class ShortURLExpiredError(RegistryError):
    """Raised when an alias exists but is past its expiration date."""

    error_code = 'registry:expired'


class DataStoreError(RegistryError):
    """Raised when there is an error in the durable store.

    e.g. permission issues, full disk, missing parent directory, etc.
    """

    error_code = 'store:data_store_error'


class ConfigurationError(RegistryError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:configuration_error'


class PersistenceWarning(UserWarning):
    """Non-fatal: the registry state is correct in memory but wasn't persisted."""

    error_code = 'store:persistence_warning'
