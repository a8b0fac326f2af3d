"""
Payment Record Model — Append-only ledger of reported payments.
"""
from sqlalchemy import Column, String, Integer, BigInteger

from paydesk.database import Base


class PaymentRecord(Base):
    __tablename__ = "payments"

    transaction_id = Column(String(128), primary_key=True)
    user_id = Column(String(36), nullable=False, index=True)

    amount = Column(BigInteger, nullable=False)   # Minor currency units (cents, paisa)
    currency = Column(String(3), nullable=False)

    status = Column(String(32), nullable=False)          # completed | pending | failed | ...
    payment_method = Column(String(32), default="card")  # card | upi | netbanking | ...
    description = Column(String(512), default="")

    timestamp = Column(BigInteger, nullable=False, index=True)  # Nanoseconds since epoch
