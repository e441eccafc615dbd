"""
Custom exceptions for SceneVault API
"""

from fastapi import HTTPException, status


class SceneVaultException(Exception):
    """Base exception for SceneVault"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error = "internal_error"

    def __init__(self, message: str = "An unexpected error occurred"):
        super().__init__(message)
        self.message = message


class UnauthenticatedError(SceneVaultException):
    """No caller identity could be resolved for a mutation"""

    status_code = status.HTTP_401_UNAUTHORIZED
    error = "unauthenticated"

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class AccessDeniedError(SceneVaultException):
    """
    Record is missing or the caller may not touch it

    Both causes share one outcome so callers cannot test for the
    existence of records they do not own.
    """

    status_code = status.HTTP_404_NOT_FOUND
    error = "not_found"

    def __init__(self, resource: str = "Resource"):
        super().__init__(f"{resource} not found or access denied")
        self.resource = resource


class NotFoundError(SceneVaultException):
    """Resource not found"""

    status_code = status.HTTP_404_NOT_FOUND
    error = "not_found"


class DuplicateError(SceneVaultException):
    """Duplicate resource"""

    status_code = status.HTTP_409_CONFLICT
    error = "duplicate"


class UploadRejectedError(SceneVaultException):
    """Upload token invalid, expired, already used, or payload too large"""

    status_code = status.HTTP_400_BAD_REQUEST
    error = "upload_rejected"

    def __init__(self, message: str, status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(message)
        self.status_code = status_code


# HTTP exception helpers
def http_401_unauthorized(detail: str = "Invalid authentication credentials"):
    """Raise 401 Unauthorized"""
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def http_400_bad_request(detail: str = "Bad request"):
    """Raise 400 Bad Request"""
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=detail,
    )


def http_503_unavailable(detail: str = "Service unavailable"):
    """Raise 503 Service Unavailable"""
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=detail,
    )
