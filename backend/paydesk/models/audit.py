"""
Audit Log Model — Immutable, tamper-evident audit trail.
Every action is SHA-256 hashed and timestamped.
"""
from datetime import datetime, timezone
from sqlalchemy import Column, String, Integer, DateTime, JSON

from paydesk.database import Base


class AuditLog(Base):
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    principal = Column(String(128), nullable=False, index=True)

    action = Column(String(50), nullable=False)
    # Actions: PROFILE_REGISTERED, PROFILE_UPDATED, STRIPE_CONFIGURED,
    #          CHECKOUT_CREATED, PAYMENT_RECORDED

    payload_hash = Column(String(64))       # SHA-256 hash of the action payload
    previous_hash = Column(String(64))      # Hash chain for tamper detection

    ip_address = Column(String(45))
    user_agent = Column(String(256))

    log_metadata = Column(JSON, default=dict)
    timestamp = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
