"""
Key-value store holding all campus hub state.

Each piece of state (the status document, the submission list, the calendar
cache) is a single JSON blob under its own key. Callers always read the whole
blob, modify it, and write it back; there is no compare-and-swap, so
concurrent writers to the same key lose updates (last writer wins).

Two backends are available, selected by the ``STORE_BACKEND`` config
parameter:

- ``redis``: a Redis server at ``REDIS_URL``. Redis gives read-after-write
  consistency for a single key, which is all that we rely on.
- ``memory``: a dict in the current process. Only for development and tests.

All keys are prefixed with ``STORE_NAMESPACE``.

Store failures (e.g. :class:`redis.exceptions.ConnectionError`) are not
handled here; they propagate to the caller.
"""

import logging
from typing import Any, Dict, Optional

import redis
from flask import Flask, current_app

from ..exceptions import ConfigurationError
from ..serializer import dumps, loads

logger = logging.getLogger(__name__)

EXTENSION = 'campushub.store'


class BaseStore:
    """Get and set JSON blobs by key."""

    def __init__(self, namespace: str) -> None:
        self.namespace = namespace

    def _key(self, key: str) -> str:
        return f'{self.namespace}:{key}'

    def _read(self, key: str) -> Optional[str]:
        raise NotImplementedError('Must be implemented by a child class')

    def _write(self, key: str, raw: str) -> None:
        raise NotImplementedError('Must be implemented by a child class')

    def is_available(self) -> bool:
        """Check our connection to the store."""
        raise NotImplementedError('Must be implemented by a child class')

    def get_json(self, key: str, default: Any = None) -> Any:
        """
        Load the JSON blob stored at ``key``.

        Parameters
        ----------
        key : str
            Un-prefixed key.
        default : object
            Returned as-is if nothing is stored at ``key``.

        """
        raw = self._read(self._key(key))
        if raw is None:
            logger.debug('Nothing stored at %s', key)
            return default
        return loads(raw)

    def set_json(self, key: str, value: Any) -> None:
        """Replace the JSON blob stored at ``key`` with ``value``."""
        logger.debug('Writing %s', key)
        self._write(self._key(key), dumps(value))


class RedisStore(BaseStore):
    """Keeps blobs in Redis."""

    def __init__(self, client: redis.Redis, namespace: str) -> None:
        super(RedisStore, self).__init__(namespace)
        self.client = client

    @classmethod
    def from_url(cls, url: str, namespace: str) -> 'RedisStore':
        """Connect to the Redis server at ``url``."""
        return cls(redis.Redis.from_url(url), namespace)

    def _read(self, key: str) -> Optional[str]:
        raw = self.client.get(key)
        if raw is None:
            return None
        if isinstance(raw, bytes):
            return raw.decode('utf-8')
        return raw

    def _write(self, key: str, raw: str) -> None:
        self.client.set(key, raw)

    def is_available(self) -> bool:
        """Check our connection to the Redis server."""
        try:
            return bool(self.client.ping())
        except redis.exceptions.RedisError as e:
            logger.error('Error when calling Redis: %s', e)
            return False


class MemoryStore(BaseStore):
    """Keeps blobs in a dict, for the lifetime of the process."""

    def __init__(self, namespace: str) -> None:
        super(MemoryStore, self).__init__(namespace)
        self._data: Dict[str, str] = {}

    def _read(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def _write(self, key: str, raw: str) -> None:
        self._data[key] = raw

    def is_available(self) -> bool:
        """The process is always reachable from itself."""
        return True


def init_app(app: Flask) -> None:
    """Set default configuration params for an application instance."""
    app.config.setdefault('STORE_BACKEND', 'redis')
    app.config.setdefault('REDIS_URL', 'redis://localhost:6379/0')
    app.config.setdefault('STORE_NAMESPACE', 'qc-hub')


def get_store(app: Optional[Flask] = None) -> BaseStore:
    """Create a new store for the application's configuration."""
    config = (app or current_app).config
    backend = config.get('STORE_BACKEND', 'redis')
    namespace = config.get('STORE_NAMESPACE', 'qc-hub')
    if backend == 'redis':
        return RedisStore.from_url(config['REDIS_URL'], namespace)
    elif backend == 'memory':
        return MemoryStore(namespace)
    raise ConfigurationError(f'Unsupported store backend: {backend}')


def current_store() -> BaseStore:
    """Get/create the store for the current application."""
    app = current_app._get_current_object()    # type: ignore
    if EXTENSION not in app.extensions:
        app.extensions[EXTENSION] = get_store(app)
    store: BaseStore = app.extensions[EXTENSION]
    return store
