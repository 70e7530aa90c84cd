"""Application-wide logging initialization

IMPORTANT: Call `initialize_logging()` from the entry point (e.g. the CLI)
before any other logging is done.

Logging format (one JSON object per line):
{
    "timestamp": "2025-12-26T12:00:00.000Z",
    "level": "INFO",
    "logger": "urlregistry.registry",
    "env": "local",
    "message": "Shortened URL.",
    "alias": "docs"
}

Fields passed via `extra={...}` are appended after the fixed fields.
Values JSON can't represent (datetimes, paths) are rendered with str().
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from urlregistry.constants import ENV, Defaults
from urlregistry.utils.config import app_env


# Attributes every LogRecord carries; anything else on a record came from `extra`
_RESERVED_ATTRS = frozenset(logging.LogRecord('', logging.NOTSET, '', 0, '', None, None).__dict__) | {'message', 'asctime'}


class JsonFormatter(logging.Formatter):
    """Render log records as JSON lines tagged with the application environment"""

    def __init__(self, env: str | None = None):
        super().__init__()
        self.env = env or app_env()

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=UTC)
        log = {
            'timestamp': f'{created:%Y-%m-%dT%H:%M:%S}.{created.microsecond // 1000:03d}Z',
            'level': record.levelname,
            'logger': record.name,
            'env': self.env,
            'message': record.getMessage(),
        }
        log.update((key, value) for key, value in record.__dict__.items() if key not in _RESERVED_ATTRS and key not in log)

        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)
        if record.stack_info:
            log['stack'] = self.formatStack(record.stack_info)

        return json.dumps(log, default=str)


def initialize_logging(level: str | None = None, stream: str = 'ext://sys.stdout') -> None:
    """Configure the root logger to emit JSON lines.

    Args:
        level (str | None):
            Log level name. Defaults to `LOG_LEVEL` or INFO.
        stream (str):
            logging.config stream reference, e.g. 'ext://sys.stderr'.
    """
    log_level = (level or os.getenv(ENV.App.LOG_LEVEL, Defaults.LOG_LEVEL)).upper()
    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'json': {
                    '()': JsonFormatter,
                }
            },
            'handlers': {
                'default': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'json',
                    'stream': stream,
                }
            },
            'root': {
                'level': log_level,
                'handlers': ['default'],
            },
        }
    )
