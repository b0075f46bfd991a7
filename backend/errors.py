"""API error types.

Each error carries the HTTP status it is rendered with by the handler
registered in ``backend.api.app.create_app``.
"""


class APIError(Exception):
    """Base class for errors that terminate a request."""

    status_code = 500
    default_message = "Something went wrong, try again later"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class UnauthenticatedError(APIError):
    status_code = 401
    default_message = "Authentication invalid"


class InvalidTokenError(UnauthenticatedError):
    """Token could not be verified (bad signature, malformed or expired)."""


class BadRequestError(APIError):
    status_code = 400
    default_message = "Bad request"


class ReadOnlyIdentityError(APIError):
    status_code = 403
    default_message = "Test user. Read only!"


class NotFoundError(APIError):
    status_code = 404
    default_message = "Not found"


class InvalidIdentityError(APIError):
    """Caller identity cannot be converted to the store's id type."""

    status_code = 500
    default_message = "Invalid caller identity"


class StoreUnavailableError(APIError):
    status_code = 503
    default_message = "Data store is unavailable"


class ConfigurationError(Exception):
    """Raised at startup when required settings are missing."""
