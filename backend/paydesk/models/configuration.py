"""
Stripe Configuration Model — Single-slot store of provider credentials.
"""
from datetime import datetime, timezone
from sqlalchemy import Column, String, Integer, DateTime, JSON

from paydesk.database import Base

# The only primary key value the table ever holds
SINGLETON_ID = 1


class StripeConfiguration(Base):
    __tablename__ = "stripe_configuration"

    id = Column(Integer, primary_key=True, default=SINGLETON_ID)

    secret_key = Column(String(255), nullable=False)
    allowed_countries = Column(JSON, nullable=False, default=list)  # ["US", "CA", ...]

    configured_by = Column(String(128), nullable=False)
    configured_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
