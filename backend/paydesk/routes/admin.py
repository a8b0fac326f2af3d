"""
Admin Routes — Operator dashboard, configuration summary and audit trail access.
Every endpoint requires the administrator capability.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import func

from paydesk.database import get_db
from paydesk.models.profile import UserProfile
from paydesk.models.payment import PaymentRecord
from paydesk.schemas.schemas import (
    AuditLogEntry, AuditChainStatus, AdminDashboardResponse, StripeConfigurationSummary,
)
from paydesk.services.access_control import AccessControl
from paydesk.services.audit_service import AuditService
from paydesk.services.configuration_service import ConfigurationService
from paydesk.utils.masking import key_hint
from paydesk.routes.deps import get_principal


def require_admin(principal: str = Depends(get_principal)) -> str:
    AccessControl.require_admin(principal)
    return principal


router = APIRouter(prefix="/api/admin", tags=["Admin"], dependencies=[Depends(require_admin)])


@router.get("/dashboard", response_model=AdminDashboardResponse)
def get_dashboard(db: Session = Depends(get_db)):
    """Get aggregated ledger and registration metrics."""

    total_users = db.query(func.count(UserProfile.user_id)).scalar() or 0
    total_payments = db.query(func.count(PaymentRecord.transaction_id)).scalar() or 0

    # Volume per currency (minor units, never mixed across currencies)
    volumes = db.query(
        PaymentRecord.currency, func.sum(PaymentRecord.amount)
    ).group_by(PaymentRecord.currency).all()
    volume_by_currency = {c: int(total or 0) for c, total in volumes}

    # Status distribution
    statuses = db.query(
        PaymentRecord.status, func.count(PaymentRecord.transaction_id)
    ).group_by(PaymentRecord.status).all()
    status_dist = {s: c for s, c in statuses}

    return AdminDashboardResponse(
        total_users=total_users,
        total_payments=total_payments,
        stripe_configured=ConfigurationService.is_configured(db),
        volume_by_currency=volume_by_currency,
        status_distribution=status_dist,
    )


@router.get("/stripe", response_model=StripeConfigurationSummary)
def get_stripe_summary(db: Session = Depends(get_db)):
    """Redacted view of the current Stripe configuration."""
    config = ConfigurationService.get(db)
    if config is None:
        return StripeConfigurationSummary(configured=False)

    return StripeConfigurationSummary(
        configured=True,
        allowed_countries=config.allowed_countries,
        configured_by=config.configured_by,
        configured_at=config.configured_at,
        key_hint=key_hint(config.secret_key),
    )


@router.get("/audit/{principal}", response_model=list[AuditLogEntry])
def get_audit_trail(principal: str, db: Session = Depends(get_db)):
    """Get the full audit trail for a principal (empty if none)."""
    return AuditService.get_trail(db, principal)


@router.get("/audit/{principal}/verify", response_model=AuditChainStatus)
def verify_audit_chain(principal: str, db: Session = Depends(get_db)):
    """Verify the integrity of the audit hash chain for a principal."""
    return AuditService.verify_chain(db, principal)
