from sqlalchemy import Boolean, Column, DateTime, JSON, String, Text
from sqlalchemy.sql import func
from sqlalchemy.dialects.postgresql import UUID
import uuid
from app.core.database import Base


class User(Base):
    """Profile reference data. Owned by the profile service; the ledger only reads it."""

    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)

    # Public profile information
    full_name = Column(String(255))
    photo_url = Column(String(500))
    bio = Column(Text)
    about = Column(Text)
    skills = Column(JSON)  # List of skills
    role = Column(String(100), index=True)  # e.g. "frontend", "backend", "designer"
    experience = Column(String(50), index=True)  # e.g. "junior", "mid", "senior"
    location = Column(String(255))
    availability = Column(String(50), index=True)  # e.g. "full-time", "freelance"
    github = Column(String(500))
    linkedin = Column(String(500))
    portfolio = Column(String(500))

    is_premium = Column(Boolean, nullable=False, default=False)
    is_profile_complete = Column(Boolean, nullable=False, default=False, index=True)

    # Timestamps; created_at doubles as the stable feed ordering key
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, complete={self.is_profile_complete})>"
