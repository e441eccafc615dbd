"""
User Model - Authentication and user management
"""

from sqlalchemy import Column, String, Boolean, DateTime
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import uuid

from scenevault.database import Base, utcnow


class User(Base):
    """
    User model for authentication and API key ownership

    Attributes:
        id: Unique user identifier (UUID), the caller id seen by every store
        email: User email (unique, indexed for fast lookup)
        hashed_password: Bcrypt hashed password
        is_active: Whether user can authenticate
        created_at: Account creation timestamp

    Relationships:
        api_keys: User's API keys (one-to-many)
    """

    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    # Relationships
    api_keys = relationship("APIKey", back_populates="user", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email})>"
