from urlregistry.models import ShortURLModel
from urlregistry.registry import URLRegistry
from urlregistry.store import RegistryStoreBase, FileRegistryStore


__all__ = [
    'ShortURLModel',
    'URLRegistry',
    'RegistryStoreBase',
    'FileRegistryStore',
]
