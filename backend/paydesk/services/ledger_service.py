"""
Ledger Service — Append-only payment records, readable only by their owner.
There is no update or delete path.
"""
import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from paydesk.errors import AuthorizationError, ConflictError, ValidationError
from paydesk.models.payment import PaymentRecord
from paydesk.services.identity_service import IdentityService
from paydesk.utils.clock import ledger_clock
from paydesk.utils.locks import KeyedLock
from paydesk.utils.validators import validate_currency

logger = logging.getLogger(__name__)

_transaction_locks = KeyedLock()
_clock_seeded = False


def _seed_clock(db: Session) -> None:
    """Make sure new timestamps sort after anything already persisted."""
    global _clock_seeded
    if not _clock_seeded:
        latest = db.query(func.max(PaymentRecord.timestamp)).scalar()
        if latest:
            ledger_clock.observe(latest)
        _clock_seeded = True


class LedgerService:

    @staticmethod
    def record_payment(
        db: Session,
        user_id: str,
        transaction_id: str,
        amount: int,
        currency: str,
        status: str,
        payment_method: str = "card",
        description: str = "",
    ) -> PaymentRecord:
        """Append one immutable record stamped with the ledger clock.

        Raises:
            ValidationError: non-positive amount, blank ids/status, bad currency.
            ConflictError: transaction_id already recorded.
        """
        if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
            raise ValidationError("Amount must be a positive integer in minor units")
        transaction_id = (transaction_id or "").strip()
        if not transaction_id:
            raise ValidationError("Transaction id is required")
        if not (user_id or "").strip():
            raise ValidationError("User id is required")
        if not validate_currency(currency):
            raise ValidationError(f"Invalid currency: {currency!r}")
        if not (status or "").strip():
            raise ValidationError("Payment status is required")

        with _transaction_locks.hold(transaction_id):
            if db.get(PaymentRecord, transaction_id) is not None:
                raise ConflictError(f"Transaction {transaction_id} is already recorded")

            _seed_clock(db)
            record = PaymentRecord(
                transaction_id=transaction_id,
                user_id=user_id.strip(),
                amount=amount,
                currency=currency.strip().upper(),
                status=status.strip(),
                payment_method=(payment_method or "").strip() or "card",
                description=(description or "").strip(),
                timestamp=ledger_clock.now(),
            )
            db.add(record)
            try:
                db.commit()
            except IntegrityError:
                db.rollback()
                raise ConflictError(f"Transaction {transaction_id} is already recorded")
            db.refresh(record)

        logger.info(
            "Recorded payment %s for user %s: %d %s (%s)",
            record.transaction_id, record.user_id, record.amount, record.currency, record.status,
        )
        return record

    @staticmethod
    def get_history(db: Session, principal: str, user_id: str) -> list[PaymentRecord]:
        """Return the caller's own records, oldest first.

        Raises:
            AuthorizationError: the caller's profile is missing or not ``user_id``.
        """
        profile = IdentityService.get_caller_profile(db, principal)
        if profile is None or profile.user_id != user_id:
            raise AuthorizationError(f"Principal {principal!r} may not read history of {user_id!r}")

        return (
            db.query(PaymentRecord)
            .filter(PaymentRecord.user_id == user_id)
            .order_by(PaymentRecord.timestamp.asc())
            .all()
        )
