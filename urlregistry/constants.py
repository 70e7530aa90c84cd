from enum import StrEnum


class Defaults:
    """Default configuration values."""

    BASE_URL = 'http://short.url/'  # Prepended to every alias handed back to callers
    STORE_FILENAME = 'urls.txt'  # Durable store file name (under project root)
    LOG_LEVEL = 'INFO'


class Alias:
    """Alias generation and validation parameters."""

    # 32-bit xxHash rendered as zero padded lowercase hex
    HEX_LENGTH = 8
    # Upper bound on hash retries before giving up on a generated alias
    MAX_ATTEMPTS = 64
    # Custom aliases can't hold the store separator or control characters
    PATTERN = r'[^,\x00-\x1f\x7f]+'


class Store:
    """Durable store line format."""

    SEPARATOR = ','
    NULL = 'null'  # Sentinel for an absent expiration date
    FIELDS = 4  # alias,longUrl,accessCount,expirationDateOrNull


# Long URLs must use an http or https scheme and hold no control characters
URL_PATTERN = r'(http|https)://[^\x00-\x1f\x7f]*'


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        PROJECT_ROOT = 'PROJECT_ROOT'
        LOG_LEVEL = 'LOG_LEVEL'

    class Registry(StrEnum):
        BASE_URL = 'URLREGISTRY_BASE_URL'
        STORE_PATH = 'URLREGISTRY_STORE_PATH'
        CONFIG = 'URLREGISTRY_CONFIG'  # optional path to a JSON config document
