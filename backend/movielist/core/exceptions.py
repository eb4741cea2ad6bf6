import logging
from fastapi import HTTPException, status

logger = logging.getLogger(__name__)

class BaseAppException(Exception):
    """Base exception for application"""
    def __init__(self, message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)

class ValidationError(BaseAppException):
    """Raised when required input is missing or malformed"""
    def __init__(self, message: str = "Invalid request"):
        super().__init__(message, status.HTTP_400_BAD_REQUEST)

class ConflictError(BaseAppException):
    """Raised when a unique key is already taken"""
    def __init__(self, message: str = "Resource already exists"):
        super().__init__(message, status.HTTP_409_CONFLICT)

class AuthError(BaseAppException):
    """Raised when credentials or tokens are rejected"""
    def __init__(self, message: str = "Invalid credentials", status_code: int = status.HTTP_401_UNAUTHORIZED):
        super().__init__(message, status_code)

class MissingTokenError(AuthError):
    """Raised when a protected route is called without a bearer token"""
    def __init__(self, message: str = "No token provided"):
        super().__init__(message, status.HTTP_401_UNAUTHORIZED)

class InvalidTokenError(AuthError):
    """Raised when a token has a bad signature, is malformed or has expired"""
    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message, status.HTTP_403_FORBIDDEN)

class NotFoundError(BaseAppException):
    """Raised when a resource is not found"""
    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status.HTTP_404_NOT_FOUND)

class TransientStoreError(BaseAppException):
    """Raised when the database is unreachable or a query times out; safe to retry"""
    def __init__(self, message: str = "Service temporarily unavailable"):
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR)


def handle_exception(e: Exception) -> HTTPException:
    """Handle exceptions and convert to HTTPException"""
    if isinstance(e, HTTPException):
        return e
    if isinstance(e, BaseAppException):
        headers = None
        if e.status_code == status.HTTP_401_UNAUTHORIZED:
            headers = {"WWW-Authenticate": "Bearer"}
        return HTTPException(
            status_code=e.status_code,
            detail=e.message,
            headers=headers
        )
    logger.exception(f"Unhandled error: {str(e)}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="An internal server error occurred"
    )
