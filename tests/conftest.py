import pytest

from urlregistry.constants import ENV


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Isolate tests from configuration set in the developer's shell."""
    for name in (*ENV.App, *ENV.Registry):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def store_file(tmp_path):
    """Provide a path for a store file which doesn't exist yet."""
    return tmp_path / 'urls.txt'
