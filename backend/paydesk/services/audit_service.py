"""
Audit Service — Manages the immutable, hash-chained audit trail.
Payloads must never carry secrets or raw national identifiers.
"""
import logging
from datetime import datetime, timezone
from typing import Optional, Dict

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from paydesk.models.audit import AuditLog
from paydesk.utils.hashing import generate_chain_hash
from paydesk.utils.locks import KeyedLock

logger = logging.getLogger(__name__)

_audit_locks = KeyedLock()


class AuditService:
    """Creates tamper-evident audit log entries with hash chaining."""

    @staticmethod
    def log(
        db: Session,
        principal: str,
        action: str,
        payload: Optional[Dict] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
        metadata: Optional[Dict] = None,
    ) -> Optional[AuditLog]:
        """Create an audit log entry with hash chaining.

        Entries for one principal are appended one at a time so each links to
        its predecessor. Called after the audited change has committed, so a
        failed write is logged and rolled back instead of raised.

        Args:
            db: Database session.
            principal: Caller this action belongs to.
            action: Action identifier (e.g. PROFILE_REGISTERED, PAYMENT_RECORDED).
            payload: Data payload to hash.
            ip_address: Client IP.
            user_agent: Client user agent.
            metadata: Additional metadata to store.

        Returns:
            The created AuditLog entry, or None if it could not be written.
        """
        payload_data = payload or {}

        with _audit_locks.hold(principal):
            try:
                # Get the hash of the last entry for this principal (chain linking)
                last_entry = (
                    db.query(AuditLog)
                    .filter(AuditLog.principal == principal)
                    .order_by(AuditLog.id.desc())
                    .first()
                )
                previous_hash = last_entry.payload_hash if last_entry else ""
                chain_hash = generate_chain_hash(payload_data, previous_hash)

                entry = AuditLog(
                    principal=principal,
                    action=action,
                    payload_hash=chain_hash,
                    previous_hash=previous_hash,
                    ip_address=ip_address,
                    user_agent=user_agent,
                    log_metadata=metadata or {},
                    timestamp=datetime.now(timezone.utc),
                )

                db.add(entry)
                db.commit()
                db.refresh(entry)
            except SQLAlchemyError:
                db.rollback()
                logger.exception("Audit write failed: %s principal=%s", action, principal)
                return None

        logger.info("audit %s principal=%s hash=%s", action, principal, chain_hash[:12])
        return entry

    @staticmethod
    def get_trail(db: Session, principal: str) -> list[AuditLog]:
        """Get the full audit trail for a principal, ordered chronologically."""
        return (
            db.query(AuditLog)
            .filter(AuditLog.principal == principal)
            .order_by(AuditLog.id.asc())
            .all()
        )

    @staticmethod
    def verify_chain(db: Session, principal: str) -> dict:
        """Verify the integrity of the audit chain for a principal.

        Returns:
            dict with 'valid' (bool), 'total_entries', and 'broken_at' (if invalid).
        """
        entries = AuditService.get_trail(db, principal)

        if not entries:
            return {"valid": True, "total_entries": 0, "broken_at": None}

        for i, entry in enumerate(entries):
            expected_prev = entries[i - 1].payload_hash if i > 0 else ""
            if entry.previous_hash != expected_prev:
                return {
                    "valid": False,
                    "total_entries": len(entries),
                    "broken_at": entry.id,
                    "message": f"Chain broken at entry {entry.id} ({entry.action})",
                }

        return {"valid": True, "total_entries": len(entries), "broken_at": None}
