"""
Security utilities for authentication
API key generation and hashing, password hashing, signed upload tokens
"""

import base64
import hashlib
import hmac
import secrets
import time
from typing import Optional
from passlib.context import CryptContext
from scenevault.config import settings

# Password hashing context (bcrypt)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def generate_api_key() -> tuple[str, str]:
    """
    Generate a new API key and its hash

    Returns:
        tuple: (api_key, key_hash)
            - api_key: Full key to show user (only once)
            - key_hash: SHA-256 hash to store in database

    Example:
        >>> key, key_hash = generate_api_key()
        >>> key
        'sv_abc123def456...'
    """
    random_token = secrets.token_urlsafe(32)
    api_key = f"{settings.API_KEY_PREFIX}{random_token}"
    return api_key, hash_api_key(api_key)


def hash_api_key(api_key: str) -> str:
    """
    Hash an API key using SHA-256

    Args:
        api_key: The API key to hash

    Returns:
        str: SHA-256 hash of the key
    """
    return hashlib.sha256(api_key.encode()).hexdigest()


def hash_password(password: str) -> str:
    """Hash a password using bcrypt"""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its bcrypt hash"""
    return pwd_context.verify(plain_password, hashed_password)


def _sign(payload: str) -> str:
    digest = hmac.new(settings.SECRET_KEY.encode(), payload.encode(), hashlib.sha256).digest()
    return base64.urlsafe_b64encode(digest).decode().rstrip("=")


def create_upload_token(storage_id: str, expires_in: int, now: Optional[float] = None) -> str:
    """
    Create a signed, expiring upload token for one storage id

    Format: "<storage_id>.<expires_at>.<signature>"

    Args:
        storage_id: Asset identifier the upload will be stored under
        expires_in: Token lifetime in seconds
        now: Current unix time (defaults to time.time())

    Returns:
        str: URL-safe token
    """
    expires_at = int((now if now is not None else time.time()) + expires_in)
    payload = f"{storage_id}.{expires_at}"
    return f"{payload}.{_sign(payload)}"


def verify_upload_token(token: str, now: Optional[float] = None) -> Optional[str]:
    """
    Verify an upload token

    Args:
        token: Token produced by create_upload_token
        now: Current unix time (defaults to time.time())

    Returns:
        Optional[str]: The storage id, or None if the token is malformed,
        tampered with, or expired
    """
    parts = token.split(".")
    if len(parts) != 3:
        return None

    storage_id, expires_at, signature = parts
    if not hmac.compare_digest(_sign(f"{storage_id}.{expires_at}"), signature):
        return None

    try:
        expiry = int(expires_at)
    except ValueError:
        return None

    if expiry < (now if now is not None else time.time()):
        return None

    return storage_id
