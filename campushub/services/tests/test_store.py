"""Tests for :mod:`campushub.services.store`."""

from unittest import TestCase, mock

import redis
from flask import Flask

from .. import store
from ...exceptions import ConfigurationError


class TestMemoryStore(TestCase):
    """Tests for :class:`.store.MemoryStore`."""

    def test_get_set(self):
        """Values are stored as JSON under a namespaced key."""
        hub_store = store.MemoryStore('ns')
        self.assertIsNone(hub_store.get_json('foo'))
        self.assertEqual(hub_store.get_json('foo', []), [])
        hub_store.set_json('foo', {'a': [1, 2]})
        self.assertEqual(hub_store.get_json('foo'), {'a': [1, 2]})
        self.assertIn('ns:foo', hub_store._data)
        self.assertTrue(hub_store.is_available())


class TestRedisStore(TestCase):
    """Tests for :class:`.store.RedisStore`."""

    def setUp(self):
        """Use a mock Redis client."""
        self.client = mock.MagicMock(spec=redis.Redis)
        self.hub_store = store.RedisStore(self.client, 'qc-hub')

    def test_get(self):
        """Stored bytes are decoded."""
        self.client.get.return_value = b'{"ok": true}'
        self.assertEqual(self.hub_store.get_json('state'), {'ok': True})
        self.client.get.assert_called_once_with('qc-hub:state')

    def test_get_missing(self):
        """The default is returned for missing keys."""
        self.client.get.return_value = None
        self.assertEqual(self.hub_store.get_json('state', {}), {})

    def test_set(self):
        """Values are written as JSON."""
        self.hub_store.set_json('state', [1])
        self.client.set.assert_called_once_with('qc-hub:state', '[1]')

    def test_available(self):
        """The store is available if the server answers a ping."""
        self.client.ping.return_value = True
        self.assertTrue(self.hub_store.is_available())

    def test_unavailable(self):
        """The store is unavailable if the server cannot be reached."""
        self.client.ping.side_effect = redis.exceptions.ConnectionError()
        self.assertFalse(self.hub_store.is_available())

    def test_errors_propagate(self):
        """Failures on read are not handled by the store."""
        self.client.get.side_effect = redis.exceptions.ConnectionError()
        with self.assertRaises(redis.exceptions.ConnectionError):
            self.hub_store.get_json('state')


class TestCurrentStore(TestCase):
    """Tests for :func:`.store.current_store`."""

    def test_memory_backend(self):
        """The store is created once per application."""
        app = Flask('test')
        app.config['STORE_BACKEND'] = 'memory'
        store.init_app(app)
        with app.app_context():
            hub_store = store.current_store()
            self.assertIsInstance(hub_store, store.MemoryStore)
            self.assertIs(store.current_store(), hub_store)
            self.assertEqual(hub_store.namespace, 'qc-hub')

    @mock.patch(f'{store.__name__}.redis.Redis.from_url')
    def test_redis_backend(self, mock_from_url):
        """The Redis backend connects to the configured URL."""
        app = Flask('test')
        store.init_app(app)
        with app.app_context():
            self.assertIsInstance(store.current_store(), store.RedisStore)
        mock_from_url.assert_called_once_with('redis://localhost:6379/0')

    def test_unknown_backend(self):
        """An unknown backend is a configuration error."""
        app = Flask('test')
        app.config['STORE_BACKEND'] = 'postgres'
        with app.app_context():
            with self.assertRaises(ConfigurationError):
                store.current_store()
