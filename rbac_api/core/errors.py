"""Error taxonomy for login, token verification and post access.

Each error maps to a fixed HTTP status and a stable ``{error, message}`` body.
Services raise these; the exception handler in ``rbac_api.main`` renders them.
"""

from fastapi import status


class ApiError(Exception):
    """Base exception for all expected, user-facing API failures."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "Internal Server Error"
    message: str = "Something went wrong!"

    def __init__(self, message: str | None = None, error: str | None = None):
        if message is not None:
            self.message = message
        if error is not None:
            self.error = error
        super().__init__(self.message)

    def to_dict(self) -> dict[str, str]:
        return {"error": self.error, "message": self.message}


class MissingParameter(ApiError):
    """Raised when a required request parameter is absent or empty."""

    status_code = status.HTTP_400_BAD_REQUEST
    error = "Bad Request"
    message = "userId is required"


class UserNotFound(ApiError):
    """Raised when no user record matches the given id."""

    status_code = status.HTTP_404_NOT_FOUND
    error = "User not found"
    message = "User with the provided ID does not exist"


class AuthError(ApiError):
    """Base for failures of the bearer-token gate."""

    status_code = status.HTTP_401_UNAUTHORIZED


class MissingToken(AuthError):
    error = "Access token required"
    message = "Authorization header must start with Bearer"


class InvalidToken(AuthError):
    error = "Invalid token"
    message = "The provided token is invalid"


class ExpiredToken(AuthError):
    error = "Token expired"
    message = "The provided token has expired"


class Forbidden(AuthError):
    status_code = status.HTTP_403_FORBIDDEN
    error = "Forbidden"
    message = "Insufficient permissions to access this resource"


class InternalError(AuthError):
    """Unexpected failure while verifying a token. Logged with stack trace."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error = "Internal server error"
    message = "Error processing authentication"


class ResourceNotFound(ApiError):
    """Raised when a requested post does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    error = "Post not found"
    message = "Post with the provided ID does not exist"
