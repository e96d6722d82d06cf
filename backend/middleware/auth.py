# backend/middleware/auth.py

from functools import wraps
from flask import g
from flask_login import current_user, logout_user
import logging

logger = logging.getLogger(__name__)


class AuthContext:
    """
    Authenticated-user state for one request.

    Built once per request from the Flask-Login session and handed to route
    handlers explicitly; handlers never read the session global themselves.
    """

    def __init__(self, user=None):
        self._user = user

    @classmethod
    def from_session(cls):
        user = current_user._get_current_object() if current_user.is_authenticated else None
        return cls(user)

    @property
    def user(self):
        return self._user

    @property
    def is_authenticated(self):
        return self._user is not None

    @property
    def user_id(self):
        return self._user.id if self._user is not None else None

    @property
    def email(self):
        return self._user.email if self._user is not None else None

    def invalidate(self):
        """End the session; the context reads as signed out afterwards"""
        if self._user is not None:
            logger.info(f"Signing out user {self._user.email} (ID: {self._user.id})")
        logout_user()
        self._user = None

    def to_dict(self):
        return {
            'authenticated': self.is_authenticated,
            'user': self._user.to_dict() if self._user is not None else None,
        }


def get_auth_context():
    """The request's AuthContext, created on first use"""
    if 'auth_context' not in g:
        g.auth_context = AuthContext.from_session()
    return g.auth_context


def with_auth_context(f):
    """
    Decorator passing the request's AuthContext as the ``auth`` keyword.
    Does not require a signed-in user; combine with @login_required for that.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        kwargs['auth'] = get_auth_context()
        return f(*args, **kwargs)
    return decorated_function
