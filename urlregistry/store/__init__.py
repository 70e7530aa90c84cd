from urlregistry.store.base import RegistryStoreBase
from urlregistry.store.file_store import FileRegistryStore


__all__ = [
    'RegistryStoreBase',
    'FileRegistryStore',
]
