"""Utility functions for application configuration management.

Configuration is resolved from three layers, later layers winning:

    1. Built-in defaults (`urlregistry.constants.Defaults`).
    2. Environment variables (`URLREGISTRY_BASE_URL`, `URLREGISTRY_STORE_PATH`).
    3. An optional JSON document pointed to by `URLREGISTRY_CONFIG`:

        {
            "base_url": "https://sho.rt/",
            "store_path": "/var/lib/urlregistry/urls.txt",
            "max_alias_attempts": 64
        }

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`) value,
        defaulting to `'local'`.

    project_root() -> Path
        Return the directory relative store paths are resolved against,
        using `PROJECT_ROOT` when available.

    base_url() -> str
        Return the configured base URL prefix for short links.

    store_path() -> Path
        Return the configured durable store location.

    load_config() -> dict
        Merge defaults, environment and the optional JSON document and return
        the result as a Python dictionary.

Example:
    >>> from urlregistry.utils.config import load_config
    >>> config = load_config()
    >>> config['base_url']
    'http://short.url/'
"""

import os
import json
import logging
from pathlib import Path

from urlregistry.types import AppConfig
from urlregistry.constants import ENV, Alias, Defaults
from urlregistry.exceptions import ConfigurationError


logger = logging.getLogger(__name__)

CONFIG_KEYS = frozenset({'base_url', 'store_path', 'max_alias_attempts'})


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Example:
        >>> os.environ['APP_ENV'] = 'dev'
        >>> app_env()
        'dev'
    """
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def project_root() -> Path:
    """Return the directory relative store paths are resolved against.

    Reads PROJECT_ROOT and falls back to the current working directory.
    """
    return Path(os.environ.get(ENV.App.PROJECT_ROOT, os.getcwd()))


def base_url() -> str:
    """Return the base URL prefix for short links by reading 'URLREGISTRY_BASE_URL'

    Example:
        >>> os.environ['URLREGISTRY_BASE_URL'] = 'https://sho.rt/'
        >>> base_url()
        'https://sho.rt/'
    """
    return os.environ.get(ENV.Registry.BASE_URL) or Defaults.BASE_URL


def store_path() -> Path:
    """Return the durable store location by reading 'URLREGISTRY_STORE_PATH'

    Relative paths are resolved against `project_root()`.
    """
    path = Path(os.environ.get(ENV.Registry.STORE_PATH) or Defaults.STORE_FILENAME)
    return path if path.is_absolute() else project_root() / path


def _load_config_document(path: Path) -> AppConfig:
    """Read the optional JSON config document."""
    logger.debug('Trying to load config document.', extra={'configPath': str(path)})
    try:
        with open(path, encoding='utf-8') as f:
            document = json.load(f)
    except OSError as e:
        raise ConfigurationError(f"Can't read config document {path}.") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f'Config document {path} is not valid JSON.') from e

    if not isinstance(document, dict):
        raise ConfigurationError(f'Config document {path} must be a JSON object.')
    unknown = set(document) - CONFIG_KEYS
    if unknown:
        unknown_list = ', '.join(f"'{key}'" for key in sorted(unknown))
        raise ConfigurationError(f'Unknown keys in config document {path}: {unknown_list}')

    logger.debug('Loaded config document.', extra={'configPath': str(path)})
    return document


def load_config() -> AppConfig:
    """Load the application configuration.

    Returns:
        dict: {'base_url': str, 'store_path': Path, 'max_alias_attempts': int}

    Raises:
        ConfigurationError:
            If the JSON config document is unreadable, malformed or holds
            invalid values.

    Example:
        >>> os.environ['URLREGISTRY_STORE_PATH'] = '/tmp/urls.txt'
        >>> load_config()['store_path']
        PosixPath('/tmp/urls.txt')
    """
    config: AppConfig = {
        'base_url': base_url(),
        'store_path': store_path(),
        'max_alias_attempts': Alias.MAX_ATTEMPTS,
    }

    document_path = os.environ.get(ENV.Registry.CONFIG)
    if document_path:
        document = _load_config_document(Path(document_path))
        config.update(document)
        if 'store_path' in document:
            path = Path(document['store_path'])
            config['store_path'] = path if path.is_absolute() else project_root() / path

    attempts = config['max_alias_attempts']
    if not isinstance(attempts, int) or isinstance(attempts, bool) or attempts < 1:
        raise ConfigurationError(f'max_alias_attempts must be a positive integer (given value: {attempts!r}).')
    if not isinstance(config['base_url'], str) or not config['base_url']:
        raise ConfigurationError(f'base_url must be a non-empty string (given value: {config["base_url"]!r}).')

    return config
