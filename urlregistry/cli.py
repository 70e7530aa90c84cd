"""Command line caller for the URL registry

Usage:
    urlregistry shorten <url> [--alias ALIAS] [--expires ISO_DATETIME]
    urlregistry expand <short_url_or_alias>
    urlregistry inspect <short_url_or_alias>

Global options:
    --store PATH       durable store file (default: URLREGISTRY_STORE_PATH or ./urls.txt)
    --base-url URL     short link prefix (default: URLREGISTRY_BASE_URL or http://short.url/)
    -v, --verbose      log at DEBUG level to stderr

Exit codes:
    0: success (a PersistenceWarning is reported on stderr but still exits 0)
    1: registry error (message and error code on stderr)
    2: bad command line usage

Example:
    $ urlregistry shorten https://example.com/docs --alias docs --expires 2026-01-01T00:00:00
    http://short.url/docs
    $ urlregistry expand docs
    https://example.com/docs
    $ urlregistry inspect http://short.url/docs
    {"alias": "docs", "target": "https://example.com/docs", "hits": 1, "expires_at": "2026-01-01T00:00:00"}
"""

import os
import sys
import json
import logging
import argparse
import warnings
from datetime import datetime
from collections.abc import Sequence

from urlregistry.types import InspectionReport
from urlregistry.models import ShortURLModel
from urlregistry.registry import URLRegistry
from urlregistry.constants import ENV
from urlregistry.exceptions import RegistryError, PersistenceWarning
from urlregistry.utils import load_config, parse_datetime, initialize_logging


logger = logging.getLogger(__name__)

NO_EXPIRATION = 'none'


def _expiration(value: str) -> datetime:
    try:
        expires_at = parse_datetime(value)
    except ValueError:
        expires_at = None
    if expires_at is None:
        raise argparse.ArgumentTypeError(f"invalid ISO-8601 date-time: '{value}'")
    return expires_at


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='urlregistry', description='Shorten, expand and inspect URLs.')
    parser.add_argument('--store', help='durable store file')
    parser.add_argument('--base-url', help='short link prefix')
    parser.add_argument('-v', '--verbose', action='store_true', help='log at DEBUG level to stderr')

    subparsers = parser.add_subparsers(dest='command', required=True)

    shorten = subparsers.add_parser('shorten', help='map a long URL to a short link')
    shorten.add_argument('url', help='long URL (http:// or https://)')
    shorten.add_argument('--alias', default=None, help='custom alias instead of a generated one')
    shorten.add_argument('--expires', type=_expiration, default=None, help='ISO-8601 expiration date-time')

    expand = subparsers.add_parser('expand', help='resolve a short link and count the hit')
    expand.add_argument('short_url', help='short URL or bare alias')

    inspect = subparsers.add_parser('inspect', help='show a short link record without counting a hit')
    inspect.add_argument('short_url', help='short URL or bare alias')

    return parser


def inspection_report(record: ShortURLModel) -> InspectionReport:
    """Render a record snapshot for display."""
    return {
        'alias': record.shortcode,
        'target': record.target,
        'hits': record.hits,
        'expires_at': NO_EXPIRATION if record.expires_at is None else record.expires_at.isoformat(),
    }


def run_command(registry: URLRegistry, args: argparse.Namespace) -> str:
    """Dispatch one parsed command to the registry and return the text to print."""
    match args.command:
        case 'shorten':
            return registry.shorten(args.url, custom_alias=args.alias, expires_at=args.expires)
        case 'expand':
            return registry.expand(args.short_url)
        case 'inspect':
            return json.dumps(inspection_report(registry.inspect(args.short_url)))
        case _:  # pragma: no cover
            raise ValueError(f'Unknown command {args.command!r}')


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line caller

    This entry point follows this procedure:
    - Step 1: Parse command line arguments
    - Step 2: Load configuration and apply command line overrides
    - Step 3: Hydrate the registry from the durable store
    - Step 4: Run the command, collecting persistence warnings
    - Step 5: Print the result (stdout) and any warnings (stderr)

    Returns:
        int: process exit code.
    """
    # 1- Parse command line arguments
    args = build_parser().parse_args(argv)
    initialize_logging(
        level='DEBUG' if args.verbose else os.getenv(ENV.App.LOG_LEVEL, 'WARNING'),
        stream='ext://sys.stderr',
    )

    try:
        # 2- Load configuration and apply overrides
        config = load_config()
        if args.store:
            config['store_path'] = args.store
        if args.base_url:
            config['base_url'] = args.base_url

        # 3- Hydrate the registry
        registry = URLRegistry.from_config(config)

        # 4- Run the command
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter('always', PersistenceWarning)
            output = run_command(registry, args)

    except RegistryError as e:
        logger.debug('Command failed.', extra={'command': args.command, 'errorCode': e.error_code})
        print(f'error [{e.error_code}]: {e}', file=sys.stderr)
        return 1

    # 5- Print result and warnings
    for warning in caught:
        if issubclass(warning.category, PersistenceWarning):
            print(f'warning [{PersistenceWarning.error_code}]: {warning.message}', file=sys.stderr)
        else:
            warnings.warn_explicit(warning.message, warning.category, warning.filename, warning.lineno)
    print(output)
    return 0
