"""Account endpoints: register, login, profile update."""

import logging

from fastapi import APIRouter, Depends, Request

from backend.api.limiter import auth_rate_limit, limiter
from backend.api.schemas import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    UpdateUserRequest,
    UserResponse,
)
from backend.auth import Identity, TokenCodec, require_writable_user
from backend.auth.gate import get_token_codec
from backend.auth.passwords import hash_password, verify_password
from backend.auth.users import EMAIL_IN_USE, UserStore, get_user_store
from backend.errors import BadRequestError, NotFoundError, UnauthenticatedError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=201)
@limiter.limit(auth_rate_limit)
def register(
    request: Request,
    data: RegisterRequest,
    users: UserStore = Depends(get_user_store),
    codec: TokenCodec = Depends(get_token_codec),
):
    """Create an account and return a token for it."""
    email = data.email.lower()
    if users.email_taken(email):
        raise BadRequestError(EMAIL_IN_USE)

    user = users.create(data.name, email, hash_password(data.password))
    return AuthResponse(user=UserResponse.model_validate(user), token=codec.issue(user.id))


@router.post("/login", response_model=AuthResponse)
@limiter.limit(auth_rate_limit)
def login(
    request: Request,
    data: LoginRequest,
    users: UserStore = Depends(get_user_store),
    codec: TokenCodec = Depends(get_token_codec),
):
    user = users.get_by_email(data.email.lower())
    # Same error for unknown email and wrong password
    if not user or not verify_password(data.password, user.password_hash):
        raise UnauthenticatedError("Invalid credentials")

    return AuthResponse(user=UserResponse.model_validate(user), token=codec.issue(user.id))


@router.patch("/updateUser", response_model=AuthResponse)
def update_user(
    data: UpdateUserRequest,
    identity: Identity = Depends(require_writable_user),
    users: UserStore = Depends(get_user_store),
    codec: TokenCodec = Depends(get_token_codec),
):
    """Update the caller's profile and return a fresh token."""
    if not data.email or not data.name or not data.last_name or not data.location:
        raise BadRequestError("Please provide all values")

    user = users.get(identity.user_id)
    if not user:
        raise NotFoundError("User not found")

    email = data.email.lower()
    if users.email_taken(email, exclude_user_id=user.id):
        raise BadRequestError(EMAIL_IN_USE)

    user = users.update(
        user,
        email=email,
        name=data.name,
        last_name=data.last_name,
        location=data.location,
    )
    logger.info("Updated profile for user %s", user.id)
    return AuthResponse(user=UserResponse.model_validate(user), token=codec.issue(user.id))
