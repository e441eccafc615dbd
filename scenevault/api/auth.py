"""
Authentication API endpoints
User registration and API key issuance
"""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session
from pydantic import BaseModel, EmailStr, Field
from datetime import timedelta
from typing import Optional
import logging

from scenevault.database import get_db, utcnow
from scenevault.models.user import User
from scenevault.models.api_key import APIKey
from scenevault.core.security import generate_api_key, hash_password, verify_password
from scenevault.core.exceptions import http_400_bad_request, http_401_unauthorized
from scenevault.middleware.rate_limiter import auth_rate_limit

router = APIRouter(prefix="/auth", tags=["authentication"])
logger = logging.getLogger(__name__)


class RegisterRequest(BaseModel):
    """Request schema for user registration"""
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=8, description="Password (min 8 characters)")


class RegisterResponse(BaseModel):
    """Response schema for user registration"""
    user_id: str
    email: str
    api_key: str = Field(..., description="API key (save this - only shown once!)")


class APIKeyRequest(BaseModel):
    """Request schema for issuing an additional API key"""
    email: EmailStr
    password: str
    name: Optional[str] = Field(None, max_length=255, description="Label for the key")
    expires_in_days: Optional[int] = Field(None, ge=1, le=365, description="Omit for a non-expiring key")


class APIKeyResponse(BaseModel):
    """Response schema for a newly issued API key"""
    api_key: str = Field(..., description="API key (save this - only shown once!)")
    key_prefix: str
    name: Optional[str] = None
    expires_at: Optional[str] = None


def _issue_key(db: Session, user: User, name: str, expires_in_days: Optional[int] = None) -> tuple[str, APIKey]:
    api_key, key_hash = generate_api_key()
    expires_at = utcnow() + timedelta(days=expires_in_days) if expires_in_days else None

    api_key_obj = APIKey(
        user_id=user.id,
        key_hash=key_hash,
        key_prefix=api_key[:15],  # Store prefix for identification
        name=name,
        expires_at=expires_at
    )

    db.add(api_key_obj)
    db.commit()
    return api_key, api_key_obj


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
@auth_rate_limit()
async def register(
    request: Request,
    payload: RegisterRequest,
    db: Session = Depends(get_db)
):
    """
    Register a new user and generate API key

    **Important**: The API key is only returned once. Save it securely!

    Raises:
        HTTPException: 400 if email already registered
    """
    existing_user = db.query(User).filter(User.email == payload.email).first()

    if existing_user:
        raise http_400_bad_request(f"Email '{payload.email}' is already registered")

    user = User(
        email=payload.email,
        hashed_password=hash_password(payload.password),
        is_active=True
    )

    db.add(user)
    db.commit()
    db.refresh(user)

    api_key, _ = _issue_key(db, user, "Default API Key")
    logger.info(f"Registered user {user.id}")

    return RegisterResponse(
        user_id=str(user.id),
        email=user.email,
        api_key=api_key  # Only returned once!
    )


@router.post("/keys", response_model=APIKeyResponse, status_code=status.HTTP_201_CREATED)
@auth_rate_limit()
async def create_api_key(
    request: Request,
    payload: APIKeyRequest,
    db: Session = Depends(get_db)
):
    """
    Issue an additional API key for an existing account

    Raises:
        HTTPException: 401 if the credentials are wrong or the account is inactive
    """
    user = db.query(User).filter(User.email == payload.email).first()

    if not user or not verify_password(payload.password, user.hashed_password):
        raise http_401_unauthorized("Invalid email or password")

    if not user.is_active:
        raise http_401_unauthorized("User account is inactive")

    api_key, api_key_obj = _issue_key(db, user, payload.name or "API Key", payload.expires_in_days)
    logger.info(f"Issued API key {api_key_obj.key_prefix} for user {user.id}")

    return APIKeyResponse(
        api_key=api_key,
        key_prefix=api_key_obj.key_prefix,
        name=api_key_obj.name,
        expires_at=api_key_obj.expires_at.isoformat() if api_key_obj.expires_at else None
    )
