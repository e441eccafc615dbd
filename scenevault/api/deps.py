"""
FastAPI dependencies
Identity resolution, storage backend and change feed
"""

from fastapi import Depends, Header
from sqlalchemy.orm import Session
from datetime import timezone
from functools import lru_cache
from typing import Optional
from uuid import UUID
import logging

from scenevault.database import get_db, utcnow
from scenevault.models.user import User
from scenevault.models.api_key import APIKey
from scenevault.core.security import hash_api_key
from scenevault.services.change_feed import ChangeFeed

logger = logging.getLogger(__name__)


def resolve_user(authorization: Optional[str], db: Session) -> Optional[User]:
    """
    Resolve the caller from an Authorization header

    Args:
        authorization: Header value (format: "Bearer sv_...") or None
        db: Database session

    Returns:
        Optional[User]: The active user owning the key, or None when the
        header is missing, malformed, unknown, expired, or the user is
        inactive. Callers decide whether None is an error.
    """
    if not authorization or not authorization.startswith("Bearer "):
        return None

    api_key = authorization[7:]  # Remove "Bearer " prefix
    if not api_key:
        return None

    api_key_obj = db.query(APIKey).filter(APIKey.key_hash == hash_api_key(api_key)).first()
    if not api_key_obj:
        logger.debug("Rejected unknown API key")
        return None

    now = utcnow()
    if api_key_obj.expires_at:
        expires_at = api_key_obj.expires_at
        # SQLite hands back naive datetimes
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        if expires_at < now:
            logger.debug(f"Rejected expired API key {api_key_obj.key_prefix}")
            return None

    user = db.query(User).filter(User.id == api_key_obj.user_id).first()
    if not user or not user.is_active:
        return None

    # Update last used timestamp
    api_key_obj.last_used_at = now
    db.commit()

    return user


async def get_current_user(
    authorization: Optional[str] = Header(None, description="Bearer token"),
    db: Session = Depends(get_db)
) -> Optional[User]:
    """Authenticated user for this request, or None"""
    return resolve_user(authorization, db)


async def get_caller_id(
    current_user: Optional[User] = Depends(get_current_user)
) -> Optional[UUID]:
    """
    Caller identity passed to every service operation

    Returns:
        Optional[UUID]: User id, or None for anonymous requests
    """
    return current_user.id if current_user else None


# ==============================================================================
# Service Singletons
# ==============================================================================


@lru_cache(maxsize=1)
def get_change_feed() -> ChangeFeed:
    """
    Get singleton ChangeFeed instance

    Prevents Redis reconnection on every request

    Returns:
        ChangeFeed: Singleton change feed
    """
    return ChangeFeed()
