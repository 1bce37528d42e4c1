"""
Tests for server-side session stores
"""
from datetime import timedelta
from unittest.mock import MagicMock, patch

import pytest
import redis

from gameshelf.sessions import (
    MemorySessionStore,
    RedisSessionStore,
    ServerSideSessionInterface,
    SessionStoreError,
    build_session_store,
)


class TestMemorySessionStore:
    """Tests for the in-process store"""

    def test_set_and_get(self):
        store = MemorySessionStore()
        store.set('token', {'user': {'id': 1}}, timedelta(hours=1))

        assert store.get('token') == {'user': {'id': 1}}
        assert len(store) == 1

    def test_unknown_token(self):
        assert MemorySessionStore().get('missing') is None

    def test_expired_record_dropped(self):
        store = MemorySessionStore()
        with patch('gameshelf.sessions.time.monotonic', return_value=1000.0):
            store.set('token', {'a': 1}, timedelta(seconds=10))
        with patch('gameshelf.sessions.time.monotonic', return_value=1011.0):
            assert store.get('token') is None
        assert len(store) == 0

    def test_expired_records_purged_on_write(self):
        store = MemorySessionStore()
        with patch('gameshelf.sessions.time.monotonic', return_value=1000.0):
            for i in range(1000):
                store.set(f'abandoned-{i}', {'n': i}, timedelta(seconds=10))
        assert len(store) == 1000

        with patch('gameshelf.sessions.time.monotonic', return_value=1011.0):
            store.set('live', {'n': -1}, timedelta(seconds=10))

        assert len(store) == 1
        assert store.get('live') == {'n': -1}

    def test_destroy(self):
        store = MemorySessionStore()
        store.set('token', {'a': 1}, timedelta(hours=1))
        store.destroy('token')
        store.destroy('token')

        assert store.get('token') is None

    def test_records_are_copies(self):
        store = MemorySessionStore()
        data = {'a': 1}
        store.set('token', data, timedelta(hours=1))
        data['a'] = 2

        assert store.get('token') == {'a': 1}


class TestRedisSessionStore:
    """Tests for the Redis store against a mocked client"""

    def test_set_uses_ttl_and_prefix(self):
        client = MagicMock()
        store = RedisSessionStore(client)
        store.set('abc', {'a': 1}, timedelta(hours=24))

        client.setex.assert_called_once_with('gameshelf:session:abc', 86400, '{"a": 1}')

    def test_get_decodes_record(self):
        client = MagicMock()
        client.get.return_value = '{"user": {"id": 7}}'

        assert RedisSessionStore(client).get('abc') == {'user': {'id': 7}}
        client.get.assert_called_once_with('gameshelf:session:abc')

    def test_get_missing_record(self):
        client = MagicMock()
        client.get.return_value = None

        assert RedisSessionStore(client).get('abc') is None

    def test_destroy_deletes_key(self):
        client = MagicMock()
        RedisSessionStore(client, prefix='test:').destroy('abc')

        client.delete.assert_called_once_with('test:abc')

    @pytest.mark.parametrize('method,args', [
        ('get', ('abc',)),
        ('set', ('abc', {}, timedelta(hours=1))),
        ('destroy', ('abc',)),
    ])
    def test_redis_errors_wrapped(self, method, args):
        client = MagicMock()
        client.get.side_effect = redis.ConnectionError('refused')
        client.setex.side_effect = redis.ConnectionError('refused')
        client.delete.side_effect = redis.ConnectionError('refused')

        with pytest.raises(SessionStoreError):
            getattr(RedisSessionStore(client), method)(*args)


class TestSessionStoreSelection:
    """Tests for build_session_store"""

    def test_memory_backend_default(self):
        store = build_session_store({'session': {'backend': 'memory'}})
        assert isinstance(store, MemorySessionStore)

    def test_redis_backend(self):
        settings = {'session': {'backend': 'redis', 'redis_url': 'redis://localhost:6379/1'}}
        with patch('redis.from_url') as from_url:
            store = build_session_store(settings)

        assert isinstance(store, RedisSessionStore)
        from_url.assert_called_once_with('redis://localhost:6379/1', decode_responses=True)


class TestSessionCookie:
    """Tests for the session cookie issued by the app"""

    def test_cookie_holds_only_token(self, client, session_store, register, login):
        register(client)
        response = login(client)
        cookie = response.headers['Set-Cookie']
        token = cookie.split(';')[0].split('=', 1)[1]

        record = session_store.get(token)
        assert record['user']['username'] == 'tester'
        assert 'tester' not in cookie

    def test_no_cookie_for_anonymous_requests(self, client):
        response = client.get('/api/games')
        assert 'Set-Cookie' not in response.headers

    def test_token_rotates_on_login(self):
        interface = ServerSideSessionInterface(MemorySessionStore())
        session = interface.session_class({'a': 1}, token='old')
        interface.store.set('old', {'a': 1}, timedelta(hours=1))

        interface.regenerate(session)

        assert session.token != 'old'
        assert interface.store.get('old') is None


class UnavailableStore(MemorySessionStore):
    def get(self, token):
        raise SessionStoreError('store unavailable')


class TestSessionStoreUnavailable:
    """Requests carrying a cookie are served anonymously while the store is down"""

    @pytest.fixture
    def session_store(self):
        return UnavailableStore()

    def test_status_with_cookie(self, client):
        client.set_cookie('gameshelf.sid', 'stale-token')

        response = client.get('/api/auth/status')

        assert response.status_code == 200
        assert response.get_json() == {'isAuthenticated': False, 'user': None}

    def test_public_listing_with_cookie(self, client):
        client.set_cookie('gameshelf.sid', 'stale-token')

        response = client.get('/api/games')

        assert response.status_code == 200
        assert response.get_json()['games'] == []

    def test_protected_route_with_cookie(self, client):
        client.set_cookie('gameshelf.sid', 'stale-token')

        response = client.post('/api/genres', json={'name': 'Action'})

        assert response.status_code == 401
