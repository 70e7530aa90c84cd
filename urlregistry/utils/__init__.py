from urlregistry.utils.config import app_env, project_root, base_url, store_path, load_config
from urlregistry.utils.helpers import get_short_url, strip_base_url, format_datetime, parse_datetime
from urlregistry.utils.shortener import generate_alias
from urlregistry.utils.logging import initialize_logging


__all__ = [
    'generate_alias',
    'app_env',
    'project_root',
    'base_url',
    'store_path',
    'load_config',
    'get_short_url',
    'strip_base_url',
    'format_datetime',
    'parse_datetime',
    'initialize_logging',
]
