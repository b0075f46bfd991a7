"""
Authentication.

- tokens: signed, time-bound identity tokens
- gate: FastAPI dependencies that authenticate and authorize requests
- passwords: password hashing
- users: user account storage
"""

from backend.auth.gate import get_current_user, require_writable_user
from backend.auth.tokens import Identity, TokenCodec

__all__ = ["Identity", "TokenCodec", "get_current_user", "require_writable_user"]
