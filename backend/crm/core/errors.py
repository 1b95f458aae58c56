"""Domain errors raised by services and the auth gate.

Each error knows the HTTP status it maps to; ``crm.main`` turns them into
``{"detail": ...}`` responses.
"""

from fastapi import status


class CRMError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Internal server error"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class Unauthorized(CRMError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "No token, authorization denied"


class InvalidToken(Unauthorized):
    default_detail = "Token is not valid"


class ValidationError(CRMError, ValueError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid request"


class Conflict(CRMError, ValueError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "User already exists"


class InvalidCredentials(CRMError, ValueError):
    # Same message for unknown email and wrong password.
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid credentials"


class NotFound(CRMError, LookupError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"
