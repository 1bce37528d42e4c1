"""
Authentication Middleware - route decorators gating access on the session
"""
from functools import wraps
from flask import session
from flask_login import current_user

from gameshelf.exceptions import AlreadyAuthenticatedException, AuthenticationException

SESSION_USER_KEY = 'user'


def session_user():
    """User projection stored at login, or None"""
    return session.get(SESSION_USER_KEY)


def login_required(f):
    """Reject the request with 401 unless a logged-in user is attached to the session"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            raise AuthenticationException()
        return f(*args, **kwargs)
    return decorated_function


def session_required(f):
    """Like login_required, but only needs the session record, not a live user row"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if session_user() is None:
            raise AuthenticationException()
        return f(*args, **kwargs)
    return decorated_function


def guest_required(f):
    """Reject the request when the caller is already logged in"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if session_user() is not None:
            raise AlreadyAuthenticatedException()
        return f(*args, **kwargs)
    return decorated_function
