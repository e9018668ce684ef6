"""
Domain errors raised by the posts core.

Each error carries the HTTP status it maps to at the transport boundary, so
the API layer needs a single handler instead of per-route translation.
"""
from fastapi import status


class PostsError(Exception):
    """Base class for every failure surfaced by the posts core"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Server Error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(PostsError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Text is required"


class NotFoundError(PostsError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class UnauthorizedError(PostsError):
    """Caller does not own the resource it tried to change"""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "User is not authorized"


class AlreadyLikedError(PostsError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Post already liked"


class NotLikedError(PostsError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "User has not liked the post previously!"


class StoreUnavailableError(PostsError):
    """Transient persistence failure; the only kind worth retrying"""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "Store unavailable"


class ConcurrentUpdateError(StoreUnavailableError):
    default_message = "Post is being updated concurrently, try again"


class UnauthenticatedError(PostsError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Could not validate credentials"
