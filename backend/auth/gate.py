"""Request authentication and capability checks.

``get_current_user`` authenticates the bearer token and attaches the
identity to ``request.state.user``. ``require_writable_user`` composes after
it and rejects the read-only demo identity on mutating routes.
"""

import logging

from fastapi import Depends, Header, Request

from backend.auth.tokens import Identity, TokenCodec
from backend.errors import InvalidTokenError, ReadOnlyIdentityError, UnauthenticatedError

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def get_token_codec(request: Request) -> TokenCodec:
    """FastAPI dependency for the app's token codec."""
    return request.app.state.token_codec


def get_current_user(
    request: Request,
    authorization: str | None = Header(None),
    codec: TokenCodec = Depends(get_token_codec),
) -> Identity:
    """Authenticate the request from its ``Authorization: Bearer`` header."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        logger.warning("Rejected %s %s: missing bearer token", request.method, request.url.path)
        raise UnauthenticatedError()

    token = authorization[len(BEARER_PREFIX):].strip()
    try:
        identity = codec.verify(token)
    except InvalidTokenError as e:
        logger.warning("Rejected %s %s: %s", request.method, request.url.path, e.message)
        # Callers only ever see the generic message
        raise UnauthenticatedError() from None

    request.state.user = identity
    return identity


def require_writable_user(identity: Identity = Depends(get_current_user)) -> Identity:
    """Reject mutations from the read-only demo identity."""
    if identity.is_restricted:
        raise ReadOnlyIdentityError()
    return identity
