"""
Checkout Routes — Hosted checkout session creation.
Sessions are ephemeral; completed payments are reported via /api/payments.
"""
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from paydesk.config import get_settings
from paydesk.database import get_db
from paydesk.schemas.schemas import CheckoutSessionRequest, CheckoutSessionResponse
from paydesk.services.checkout_service import CheckoutOrchestrator
from paydesk.services.payment_provider import PaymentProvider, ShoppingItem, get_payment_provider
from paydesk.services.audit_service import AuditService
from paydesk.utils.rate_limiter import rate_limit
from paydesk.routes.deps import get_principal

settings = get_settings()
router = APIRouter(prefix="/api/checkout", tags=["Checkout"])


def get_checkout_orchestrator(provider: PaymentProvider = Depends(get_payment_provider)) -> CheckoutOrchestrator:
    return CheckoutOrchestrator(provider)


@router.post("/session", response_model=CheckoutSessionResponse)
def create_checkout_session(
    payload: CheckoutSessionRequest,
    request: Request,
    principal: str = Depends(get_principal),
    db: Session = Depends(get_db),
    orchestrator: CheckoutOrchestrator = Depends(get_checkout_orchestrator),
    _throttle: bool = Depends(rate_limit(
        requests=settings.CHECKOUT_RATE_LIMIT, window=settings.CHECKOUT_RATE_WINDOW, scope="checkout",
    )),
):
    """Create a Stripe checkout session. Not idempotent: every call issues a new one."""
    items = [ShoppingItem(**item.model_dump()) for item in payload.items]
    session = orchestrator.create_session(db, items, payload.success_url, payload.cancel_url)

    # Audit
    AuditService.log(
        db, principal, "CHECKOUT_CREATED",
        payload={
            "session_id": session.id,
            "item_count": len(items),
            "total_in_cents": sum(i.price_in_cents * i.quantity for i in items),
        },
        ip_address=request.client.host if request.client else None,
    )

    return CheckoutSessionResponse(id=session.id, url=session.url)
