"""
Configuration Routes — Admin capability check and Stripe setup.
"""
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from paydesk.database import get_db
from paydesk.schemas.schemas import (
    AdminStatusResponse, StripeStatusResponse, StripeConfigurationRequest,
    StripeConfigurationSummary,
)
from paydesk.services.access_control import AccessControl
from paydesk.services.configuration_service import ConfigurationService
from paydesk.services.audit_service import AuditService
from paydesk.utils.hashing import fingerprint
from paydesk.utils.masking import key_hint
from paydesk.routes.deps import get_principal

router = APIRouter(prefix="/api/config", tags=["Configuration"])


@router.get("/admin", response_model=AdminStatusResponse)
def is_caller_admin(principal: str = Depends(get_principal)):
    """Whether the caller holds the administrator capability."""
    return AdminStatusResponse(is_admin=AccessControl.is_admin(principal))


@router.get("/stripe/status", response_model=StripeStatusResponse)
def is_stripe_configured(db: Session = Depends(get_db)):
    """Whether an administrator has configured Stripe yet."""
    return StripeStatusResponse(configured=ConfigurationService.is_configured(db))


@router.put("/stripe", response_model=StripeConfigurationSummary)
def set_stripe_configuration(
    payload: StripeConfigurationRequest,
    request: Request,
    principal: str = Depends(get_principal),
    db: Session = Depends(get_db),
):
    """Replace the Stripe configuration (admin only). Returns a redacted summary."""
    config = ConfigurationService.set_configuration(
        db, principal, payload.secret_key, payload.allowed_countries,
    )

    # Audit
    AuditService.log(
        db, principal, "STRIPE_CONFIGURED",
        payload={"allowed_countries": config.allowed_countries, "key_fingerprint": fingerprint(config.secret_key)},
        ip_address=request.client.host if request.client else None,
    )

    return StripeConfigurationSummary(
        configured=True,
        allowed_countries=config.allowed_countries,
        configured_by=config.configured_by,
        configured_at=config.configured_at,
        key_hint=key_hint(config.secret_key),
    )
