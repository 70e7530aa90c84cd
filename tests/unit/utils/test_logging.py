"""Unit tests for logging utilities in logging.py

Test coverage includes:

1. JsonFormatter
   - Ensures records are rendered as one JSON object with the standard keys.
   - Ensures `extra` fields are attached and non-JSON values are stringified.
   - Ensures exception and stack information is included.
   - Ensures the env field comes from the argument, then APP_ENV, then 'local'.

2. initialize_logging()
   - Ensures the root logger level honors the argument and LOG_LEVEL.
"""

import io
import sys
import json
import logging
from datetime import datetime

import pytest

from urlregistry.utils.logging import JsonFormatter, initialize_logging


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def restore_root_logger():
    """Undo initialize_logging() side effects on the root logger."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def make_record(msg='Shortened URL.', level=logging.INFO, exc_info=None, **extra) -> logging.LogRecord:
    record = logging.LogRecord('urlregistry.registry', level, __file__, 1, msg, None, exc_info)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


# -------------------------------
# 1. JsonFormatter
# -------------------------------


def test_json_formatter_standard_keys():
    log = json.loads(JsonFormatter().format(make_record()))

    assert log['level'] == 'INFO'
    assert log['logger'] == 'urlregistry.registry'
    assert log['message'] == 'Shortened URL.'
    assert log['timestamp'].endswith('Z')


def test_json_formatter_attaches_extra_fields():
    log = json.loads(JsonFormatter().format(make_record(alias='abc123', expiresAt=datetime(2026, 1, 1))))

    assert log['alias'] == 'abc123'
    assert log['expiresAt'] == '2026-01-01 00:00:00'


def test_json_formatter_includes_exception():
    try:
        raise OSError('disk full')
    except OSError:
        record = make_record(level=logging.WARNING, exc_info=sys.exc_info())

    log = json.loads(JsonFormatter().format(record))
    assert 'OSError: disk full' in log['exception']


def test_json_formatter_env_from_environment(monkeypatch):
    monkeypatch.setenv('APP_ENV', 'Staging')
    log = json.loads(JsonFormatter().format(make_record()))
    assert log['env'] == 'staging'


def test_json_formatter_env_defaults_to_local():
    assert json.loads(JsonFormatter().format(make_record()))['env'] == 'local'


def test_json_formatter_env_argument_wins(monkeypatch):
    monkeypatch.setenv('APP_ENV', 'prod')
    assert json.loads(JsonFormatter(env='test').format(make_record()))['env'] == 'test'


def test_json_formatter_extra_cannot_shadow_fixed_fields():
    log = json.loads(JsonFormatter(env='test').format(make_record(env='other', level_hint='x')))
    assert log['env'] == 'test'
    assert log['level_hint'] == 'x'


def test_json_formatter_includes_stack():
    record = make_record()
    record.stack_info = 'Stack (most recent call last):\n  File "cli.py", line 1'

    log = json.loads(JsonFormatter().format(record))
    assert log['stack'].startswith('Stack (most recent call last):')


# -------------------------------
# 2. initialize_logging()
# -------------------------------


def test_initialize_logging_level_argument(restore_root_logger):
    initialize_logging(level='debug')
    assert restore_root_logger.level == logging.DEBUG


def test_initialize_logging_level_from_environment(restore_root_logger, monkeypatch):
    monkeypatch.setenv('LOG_LEVEL', 'error')
    initialize_logging()
    assert restore_root_logger.level == logging.ERROR


def test_initialize_logging_writes_json(restore_root_logger, monkeypatch):
    stream = io.StringIO()
    monkeypatch.setattr('sys.stderr', stream)

    initialize_logging(level='INFO', stream='ext://sys.stderr')
    logging.getLogger('urlregistry.test').info('hello', extra={'alias': 'abc'})

    log = json.loads(stream.getvalue().strip())
    assert log['message'] == 'hello'
    assert log['alias'] == 'abc'
