import os
from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import ArgumentError


class ConfigError(RuntimeError):
    """Raised when required settings are missing or unusable."""


def _require(name: str) -> str:
    value = os.getenv(name)
    if value is None or not value.strip():
        raise ConfigError(f'{name} is not set')
    return value.strip()


def database_url() -> URL:
    """Resolve the store connection URL from the environment.

    DATABASE_URL wins when present. Otherwise the URL is assembled from
    DB_DRIVER, DB_HOST, DB_PORT, DB_NAME, DB_USERNAME and DB_PASSWORD; only
    the password may be left out (it defaults to an empty string).
    """
    raw = os.getenv('DATABASE_URL')
    if raw:
        if raw.startswith('postgresql://'):
            raw = raw.replace('postgresql://', 'postgresql+asyncpg://', 1)
        try:
            return make_url(raw)
        except ArgumentError as e:
            raise ConfigError(f'DATABASE_URL is invalid: {e}') from e

    port = os.getenv('DB_PORT')
    try:
        port = int(port) if port else None
    except ValueError as e:
        raise ConfigError(f'DB_PORT must be an integer, got {port!r}') from e

    return URL.create(
        drivername=_require('DB_DRIVER'),
        username=_require('DB_USERNAME'),
        password=os.getenv('DB_PASSWORD', ''),
        host=_require('DB_HOST'),
        port=port,
        database=_require('DB_NAME'),
    )


def _int_setting(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f'{name} must be an integer, got {raw!r}') from e


def password_hash_rounds() -> int:
    return _int_setting('PASSWORD_HASH_ROUNDS', 12)


def metrics_port() -> int:
    return _int_setting('METRICS_PORT', 8001)


def token_expire_minutes() -> int:
    return _int_setting('ACCESS_TOKEN_EXPIRE_MINUTES', 60 * 24 * 7)


def log_level() -> str:
    return os.getenv('LOG_LEVEL', 'INFO').upper()
