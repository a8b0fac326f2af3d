"""
User Profile Model — One registered identity per caller principal.
"""
from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime

from paydesk.database import Base


def _utcnow():
    return datetime.now(timezone.utc)


class UserProfile(Base):
    __tablename__ = "user_profiles"

    user_id = Column(String(36), primary_key=True, index=True)
    principal = Column(String(128), unique=True, nullable=False, index=True)

    name = Column(String(128), nullable=False)
    email = Column(String(254), nullable=False)
    aadhaar_masked = Column(String(12), nullable=False)  # Raw Aadhaar is never stored

    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)
