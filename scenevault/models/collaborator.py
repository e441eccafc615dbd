"""
Collaborator Model - Read grants on shared projects
"""

from sqlalchemy import Column, String, ForeignKey, DateTime, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
import uuid

from scenevault.database import Base, utcnow


class Collaborator(Base):
    """
    Collaborator model - a non-owner user invited to a project

    Attributes:
        id: Unique row identifier (UUID)
        project_id: Shared project
        user_id: Invited user
        role: owner, editor or viewer (recorded only)
        invited_by: User who created the grant
        joined_at: Grant timestamp

    Uniqueness:
        - (project_id, user_id) is unique
    """

    __tablename__ = "collaborators"
    __table_args__ = (
        UniqueConstraint('project_id', 'user_id', name='uq_project_collaborator'),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    project_id = Column(UUID(as_uuid=True), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    role = Column(String(20), nullable=False)
    invited_by = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False)
    joined_at = Column(DateTime(timezone=True), default=utcnow)

    def __repr__(self):
        return f"<Collaborator(project_id={self.project_id}, user_id={self.user_id}, role={self.role})>"
