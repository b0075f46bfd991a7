"""Shared rate limiter."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from backend.config import settings

limiter = Limiter(key_func=get_remote_address)

_auth_limit = settings.auth_rate_limit


def configure_auth_limit(value: str):
    """Set the register/login limit; create_app passes its own settings here."""
    global _auth_limit
    _auth_limit = value


def auth_rate_limit() -> str:
    """Limit for register/login, read per request."""
    return _auth_limit
