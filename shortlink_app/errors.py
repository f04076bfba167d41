"""
Error taxonomy for the link lifecycle.

Every failure the service can report is a ``LinkError`` subclass carrying the
HTTP status the API layer answers with. "Password required" is deliberately
absent: it is a successful-but-incomplete resolve result, not a failure.
"""

from fastapi import status


class LinkError(Exception):
    """Base class for all link lifecycle failures"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Link operation failed"

    def __init__(self, message: str = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class InvalidUrl(LinkError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid URL provided"


class CodeConflict(LinkError):
    """Custom code is already taken (caller-caused, never retried)"""
    status_code = status.HTTP_409_CONFLICT
    default_message = "Custom code already in use"


class GenerationExhausted(LinkError):
    """Every generated code collided within the retry limit"""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "Could not generate a unique short code"


class NotFound(LinkError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "URL not found"


class Expired(LinkError):
    status_code = status.HTTP_410_GONE
    default_message = "URL has expired"


class PasswordMissing(LinkError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Password required"


class PasswordInvalid(LinkError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid password"


class StoreUnavailable(LinkError):
    """The backing link store failed (I/O, connection, driver error)"""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "Link store unavailable"
