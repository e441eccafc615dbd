"""
Centralized Error Handling

Maps domain exceptions and database errors to consistent JSON responses.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, OperationalError, DBAPIError
from typing import Dict, Any
import logging
import traceback

from scenevault.core.exceptions import SceneVaultException
from scenevault.utils.sanitize import sanitize_string

logger = logging.getLogger(__name__)


class ErrorHandler:
    """Centralized error handling"""

    @staticmethod
    def handle_domain_error(error: SceneVaultException) -> Dict[str, Any]:
        """
        Handle SceneVault domain errors

        Args:
            error: Raised domain exception

        Returns:
            Error dictionary with message
        """
        if error.status_code >= 500:
            logger.error(f"{type(error).__name__}: {error.message}")
        else:
            logger.info(f"{type(error).__name__}: {error.message}")

        return {
            "error": error.error,
            "message": error.message,
            "detail": error.message
        }

    @staticmethod
    def handle_database_error(error: DBAPIError) -> Dict[str, Any]:
        """
        Handle database errors

        Args:
            error: Database exception (IntegrityError, OperationalError or other DBAPIError)

        Returns:
            Error dictionary with message and details
        """
        if isinstance(error, IntegrityError):
            logger.warning(f"Database integrity error: {error}")
            return {
                "error": "integrity_error",
                "message": "Data integrity violation. Duplicate entry or constraint failed.",
                "details": str(error.orig) if hasattr(error, 'orig') else str(error)
            }

        elif isinstance(error, OperationalError):
            logger.error(f"Database operational error: {error}")
            return {
                "error": "database_error",
                "message": "Database connection or operational error."
            }

        logger.error(f"Database API error: {error}")
        return {
            "error": "database_error",
            "message": "Database error occurred."
        }

    @staticmethod
    def handle_generic_error(error: Exception) -> Dict[str, Any]:
        """
        Handle generic/unknown errors

        Args:
            error: Exception

        Returns:
            Error dictionary
        """
        logger.error(f"Unexpected error: {sanitize_string(str(error))}\n{traceback.format_exc()}")
        return {
            "error": "internal_error",
            "message": "An unexpected error occurred. Please try again.",
            "type": type(error).__name__
        }


# Global exception handlers for FastAPI

async def domain_error_handler(request: Request, exc: SceneVaultException):
    """FastAPI exception handler for SceneVault exceptions"""
    error_data = ErrorHandler.handle_domain_error(exc)
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(
        status_code=exc.status_code,
        content=error_data,
        headers=headers
    )


async def integrity_error_handler(request: Request, exc: IntegrityError):
    """FastAPI exception handler for constraint violations"""
    error_data = ErrorHandler.handle_database_error(exc)
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content=error_data
    )


async def database_error_handler(request: Request, exc: DBAPIError):
    """FastAPI exception handler for other database errors"""
    error_data = ErrorHandler.handle_database_error(exc)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=error_data
    )


async def generic_error_handler(request: Request, exc: Exception):
    """FastAPI exception handler for generic errors"""
    error_data = ErrorHandler.handle_generic_error(exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_data
    )


# Setup function for FastAPI app
def setup_error_handlers(app):
    """
    Setup global error handlers for FastAPI app

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(SceneVaultException, domain_error_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(DBAPIError, database_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    logger.info("Error handlers registered")
