"""
Token codec for caller identities.

Tokens are HS256 JWTs carrying the user id in a ``userId`` claim plus
``iat``/``exp``. The secret and lifetime come from an injected ``Settings``.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import jwt

from backend.config import Settings
from backend.errors import ConfigurationError, InvalidTokenError


@dataclass(frozen=True)
class Identity:
    """The authenticated caller for one request."""

    user_id: str
    is_restricted: bool = False


class TokenCodec:
    """Issues and verifies identity tokens."""

    def __init__(self, settings: Settings):
        if not settings.jwt_secret:
            raise ConfigurationError("JWT_SECRET not configured")
        self._secret = settings.jwt_secret
        self._algorithm = settings.jwt_algorithm
        self._lifetime = settings.jwt_lifetime
        self._test_user_id = settings.test_user_id

    def issue(self, user_id: str, ttl: timedelta | None = None) -> str:
        """Sign a token for ``user_id`` that expires after ``ttl``."""
        now = datetime.now(UTC)
        payload = {
            "userId": user_id,
            "iat": now,
            "exp": now + (ttl if ttl is not None else self._lifetime),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> Identity:
        """Decode ``token`` and return the caller identity.

        Raises InvalidTokenError for a bad signature, malformed token,
        missing subject or expired token.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise InvalidTokenError("Token expired") from e
        except jwt.PyJWTError as e:
            raise InvalidTokenError("Token invalid") from e

        user_id = payload.get("userId")
        if not isinstance(user_id, str) or not user_id:
            raise InvalidTokenError("Token has no subject")

        return Identity(user_id=user_id, is_restricted=self.is_restricted(user_id))

    def is_restricted(self, user_id: str) -> bool:
        return bool(self._test_user_id) and user_id == self._test_user_id
