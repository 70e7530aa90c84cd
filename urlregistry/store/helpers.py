import functools
from typing import TypeVar, Any
from collections.abc import Callable

from urlregistry.exceptions import DataStoreError


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])


def handle_os_error(method: F) -> F:
    """Wrap store methods touching the filesystem to handle I/O errors

    Args:
        method (Callable[..., Any]):
            Store method performing file operations which may raise OSError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on filesystem issues.

    Example:
        >>> @handle_os_error
        ... def load(self):
        ...     return self.path.read_text()
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except OSError as e:
            raise DataStoreError(f"Can't access durable store at {self.path}.") from e

    return wrapper
