"""
Utility Functions and Classes

Provides error handling and log sanitizing helpers.
"""

from scenevault.utils.error_handlers import (
    ErrorHandler,
    setup_error_handlers
)
from scenevault.utils.sanitize import sanitize_string, get_safe_api_key_display

__all__ = [
    "ErrorHandler",
    "setup_error_handlers",
    "sanitize_string",
    "get_safe_api_key_display"
]
