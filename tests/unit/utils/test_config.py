"""Unit tests for configuration utilities in config.py

Test coverage includes:

1. Environment variable resolution
   - Ensures app_env(), base_url() and store_path() correctly read environment variables.

2. Project root resolution
   - Ensures project_root() correctly reads PROJECT_ROOT and falls back to the CWD.

3. Configuration loading behavior
   - Ensures load_config() returns defaults when nothing is configured.
   - Ensures the optional JSON config document overrides environment values.
   - Ensures unreadable, malformed or invalid documents raise ConfigurationError.
"""

import os
import json
from pathlib import Path

import pytest

from urlregistry.utils import config
from urlregistry.constants import Alias, Defaults
from urlregistry.exceptions import ConfigurationError


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def project_dir(tmp_path, monkeypatch):
    """Point PROJECT_ROOT at a temporary directory."""
    monkeypatch.setenv('PROJECT_ROOT', str(tmp_path))
    return tmp_path


@pytest.fixture
def config_document(tmp_path, monkeypatch):
    """Write a JSON config document and point URLREGISTRY_CONFIG at it."""

    def _write(document) -> Path:
        path = tmp_path / 'urlregistry.json'
        path.write_text(document if isinstance(document, str) else json.dumps(document), encoding='utf-8')
        monkeypatch.setenv('URLREGISTRY_CONFIG', str(path))
        return path

    return _write


# -------------------------------
# 1. Environment variable resolution
# -------------------------------


def test_app_env(monkeypatch):
    """Ensure app_env() returns the lowercased value of APP_ENV"""
    monkeypatch.setitem(os.environ, 'APP_ENV', 'TEST')
    assert config.app_env() == 'test'


def test_app_env_defaults_to_local():
    assert config.app_env() == 'local'


def test_base_url(monkeypatch):
    monkeypatch.setenv('URLREGISTRY_BASE_URL', 'https://sho.rt/')
    assert config.base_url() == 'https://sho.rt/'


def test_base_url_default():
    assert config.base_url() == Defaults.BASE_URL


def test_store_path_relative_to_project_root(project_dir, monkeypatch):
    monkeypatch.setenv('URLREGISTRY_STORE_PATH', 'data/links.txt')
    assert config.store_path() == project_dir / 'data' / 'links.txt'


def test_store_path_absolute(tmp_path, monkeypatch):
    monkeypatch.setenv('URLREGISTRY_STORE_PATH', str(tmp_path / 'links.txt'))
    assert config.store_path() == tmp_path / 'links.txt'


def test_store_path_default(project_dir):
    assert config.store_path() == project_dir / Defaults.STORE_FILENAME


# -------------------------------
# 2. Project root resolution
# -------------------------------


def test_project_root_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv('PROJECT_ROOT', str(tmp_path))
    assert config.project_root() == tmp_path


def test_project_root_falls_back_to_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert config.project_root() == Path(os.getcwd())


# -------------------------------
# 3. Configuration loading behavior
# -------------------------------


def test_load_config_defaults(project_dir):
    assert config.load_config() == {
        'base_url': Defaults.BASE_URL,
        'store_path': project_dir / Defaults.STORE_FILENAME,
        'max_alias_attempts': Alias.MAX_ATTEMPTS,
    }


def test_load_config_document_overrides_environment(project_dir, config_document, monkeypatch):
    monkeypatch.setenv('URLREGISTRY_BASE_URL', 'https://env.example/')
    config_document({'base_url': 'https://doc.example/', 'store_path': 'links.txt', 'max_alias_attempts': 8})

    app_config = config.load_config()

    assert app_config['base_url'] == 'https://doc.example/'
    assert app_config['store_path'] == project_dir / 'links.txt'
    assert app_config['max_alias_attempts'] == 8


def test_load_config_partial_document(project_dir, config_document, monkeypatch):
    monkeypatch.setenv('URLREGISTRY_BASE_URL', 'https://env.example/')
    config_document({'max_alias_attempts': 3})

    app_config = config.load_config()

    assert app_config['base_url'] == 'https://env.example/'
    assert app_config['max_alias_attempts'] == 3


def test_load_config_missing_document(monkeypatch, tmp_path):
    monkeypatch.setenv('URLREGISTRY_CONFIG', str(tmp_path / 'missing.json'))
    with pytest.raises(ConfigurationError, match="Can't read config document"):
        config.load_config()


@pytest.mark.parametrize(
    'document, message',
    [
        ('{not json', 'not valid JSON'),
        ('[1, 2, 3]', 'must be a JSON object'),
        ({'redis_host': 'localhost'}, "Unknown keys in config document .*'redis_host'"),
        ({'max_alias_attempts': 0}, 'max_alias_attempts must be a positive integer'),
        ({'max_alias_attempts': 'many'}, 'max_alias_attempts must be a positive integer'),
        ({'base_url': ''}, 'base_url must be a non-empty string'),
    ],
)
def test_load_config_invalid_document(config_document, document, message):
    config_document(document)
    with pytest.raises(ConfigurationError, match=message):
        config.load_config()
