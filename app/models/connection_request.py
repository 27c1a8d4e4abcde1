from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import uuid
import enum
from app.core.database import Base


class ConnectionStatus(str, enum.Enum):
    INTERESTED = "interested"
    IGNORED = "ignored"
    ACCEPTED = "accepted"


class ConnectionRequest(Base):
    """
    One directional interest signal between two users.

    A match is stored as two rows (A->B and B->A) that are both ACCEPTED.
    Rows are never deleted.
    """

    __tablename__ = "connection_requests"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    from_user_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    to_user_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    status = Column(String(20), nullable=False)  # interested, ignored or accepted

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    from_user = relationship("User", foreign_keys=[from_user_id])
    to_user = relationship("User", foreign_keys=[to_user_id])

    __table_args__ = (
        # One row per ordered pair; concurrent duplicate inserts fail here
        UniqueConstraint("from_user_id", "to_user_id", name="unique_connection_pair"),
        CheckConstraint("from_user_id <> to_user_id", name="ck_connection_not_self"),
        CheckConstraint("status IN ('interested', 'ignored', 'accepted')", name="ck_connection_status"),
        Index("ix_connection_requests_to_status", "to_user_id", "status"),
        Index("ix_connection_requests_from_status", "from_user_id", "status"),
    )

    def __repr__(self):
        return f"<ConnectionRequest(from={self.from_user_id}, to={self.to_user_id}, status={self.status})>"
