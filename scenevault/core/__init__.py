"""
Core Utilities

Modules:
    - security: API key generation, password hashing, upload tokens
    - exceptions: Custom exceptions and HTTP helpers
    - access: Ownership and read-grant predicates
"""

from scenevault.core import security, exceptions, access

__all__ = ["security", "exceptions", "access"]
