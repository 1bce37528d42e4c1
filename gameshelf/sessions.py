"""
Server-side sessions.

The session cookie only carries an opaque token; the session record lives in a
``SessionStore``. The store is handed to ``ServerSideSessionInterface`` by the
application factory, so tests run against ``MemorySessionStore`` while a
deployment can point at Redis.
"""

import json
import logging
import secrets
import threading
import time
from datetime import timedelta
from typing import Dict, Optional

from flask.sessions import SessionInterface, SessionMixin
from werkzeug.datastructures import CallbackDict

logger = logging.getLogger("main")


class SessionStoreError(Exception):
    """The session backend failed to read, write or delete a record"""


class SessionStore:
    """get/set/destroy of session records keyed by token"""

    def get(self, token: str) -> Optional[Dict]:
        raise NotImplementedError

    def set(self, token: str, data: Dict, ttl: timedelta) -> None:
        raise NotImplementedError

    def destroy(self, token: str) -> None:
        raise NotImplementedError


class MemorySessionStore(SessionStore):
    """Process-local store with expiry"""

    def __init__(self):
        self._records = {}
        self._lock = threading.Lock()

    def get(self, token):
        with self._lock:
            record = self._records.get(token)
            if record is None:
                return None
            expires_at, data = record
            if expires_at <= time.monotonic():
                del self._records[token]
                return None
            return json.loads(data)

    def set(self, token, data, ttl):
        with self._lock:
            now = time.monotonic()
            self._purge_expired(now)
            self._records[token] = (now + ttl.total_seconds(), json.dumps(data))

    def destroy(self, token):
        with self._lock:
            self._records.pop(token, None)

    def _purge_expired(self, now):
        """Drop records whose expiry has passed, caller holds the lock"""
        expired = [token for token, (expires_at, _) in self._records.items() if expires_at <= now]
        for token in expired:
            del self._records[token]

    def __len__(self):
        return len(self._records)


class RedisSessionStore(SessionStore):
    """Store backed by a redis client, records expire through Redis TTLs"""

    def __init__(self, client, prefix="gameshelf:session:"):
        self.client = client
        self.prefix = prefix

    @classmethod
    def from_url(cls, url, **kwargs):
        import redis

        return cls(redis.from_url(url, decode_responses=True), **kwargs)

    def _key(self, token):
        return f"{self.prefix}{token}"

    def get(self, token):
        import redis

        try:
            data = self.client.get(self._key(token))
        except redis.RedisError as e:
            raise SessionStoreError(f"Failed to read session: {e}") from e
        return json.loads(data) if data else None

    def set(self, token, data, ttl):
        import redis

        try:
            self.client.setex(self._key(token), int(ttl.total_seconds()), json.dumps(data))
        except redis.RedisError as e:
            raise SessionStoreError(f"Failed to write session: {e}") from e

    def destroy(self, token):
        import redis

        try:
            self.client.delete(self._key(token))
        except redis.RedisError as e:
            raise SessionStoreError(f"Failed to delete session: {e}") from e


class ServerSideSession(CallbackDict, SessionMixin):
    def __init__(self, initial=None, token=None, new=False):
        def on_update(self):
            self.modified = True

        super().__init__(initial, on_update)
        self.token = token
        self.new = new
        self.modified = False


class ServerSideSessionInterface(SessionInterface):
    session_class = ServerSideSession

    def __init__(self, store: SessionStore):
        self.store = store

    @staticmethod
    def generate_token():
        return secrets.token_urlsafe(32)

    def open_session(self, app, request):
        token = request.cookies.get(self.get_cookie_name(app))
        if token:
            try:
                data = self.store.get(token)
            except SessionStoreError as e:
                # Serve the request anonymously while the store is down
                logger.error(f"Session store unavailable, opening anonymous session: {e}")
                data = None
            if data is not None:
                return self.session_class(data, token=token)
        return self.session_class(token=self.generate_token(), new=True)

    def regenerate(self, session):
        """Drop the current record and move the session to a fresh token"""
        if not session.new:
            self.store.destroy(session.token)
        session.token = self.generate_token()
        session.modified = True

    def destroy(self, session):
        self.store.destroy(session.token)
        session.clear()

    def save_session(self, app, session, response):
        name = self.get_cookie_name(app)
        domain = self.get_cookie_domain(app)
        path = self.get_cookie_path(app)

        if not session:
            if session.modified:
                self.store.destroy(session.token)
                response.delete_cookie(name, domain=domain, path=path)
            return

        if not self.should_set_cookie(app, session):
            return

        self.store.set(session.token, dict(session), app.permanent_session_lifetime)
        response.set_cookie(
            name,
            session.token,
            expires=self.get_expiration_time(app, session),
            httponly=self.get_cookie_httponly(app),
            domain=domain,
            path=path,
            secure=self.get_cookie_secure(app),
            samesite=self.get_cookie_samesite(app),
        )


def build_session_store(settings):
    """Session store selected by the ``session.backend`` setting"""
    backend = settings["session"].get("backend", "memory")
    if backend == "redis":
        logger.info(f"Using Redis session store at {settings['session']['redis_url']}")
        return RedisSessionStore.from_url(settings["session"]["redis_url"])
    return MemorySessionStore()
