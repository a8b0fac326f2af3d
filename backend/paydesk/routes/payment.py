"""
Payment Routes — Ledger appends and per-user payment history.
"""
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from paydesk.database import get_db
from paydesk.schemas.schemas import PaymentRecordSchema, RecordPaymentRequest, RecordPaymentResponse
from paydesk.services.ledger_service import LedgerService
from paydesk.services.audit_service import AuditService
from paydesk.routes.deps import get_principal

router = APIRouter(prefix="/api/payments", tags=["Payment"])


@router.post("", response_model=RecordPaymentResponse)
def record_payment(
    payload: RecordPaymentRequest,
    request: Request,
    principal: str = Depends(get_principal),
    db: Session = Depends(get_db),
):
    """Append a reported payment outcome to the ledger."""
    record = LedgerService.record_payment(
        db,
        user_id=payload.user_id,
        transaction_id=payload.transaction_id,
        amount=payload.amount,
        currency=payload.currency,
        status=payload.status,
        payment_method=payload.payment_method,
        description=payload.description,
    )

    # Audit
    AuditService.log(
        db, principal, "PAYMENT_RECORDED",
        payload={
            "transaction_id": record.transaction_id,
            "user_id": record.user_id,
            "amount": record.amount,
            "currency": record.currency,
            "status": record.status,
        },
        ip_address=request.client.host if request.client else None,
    )

    return RecordPaymentResponse(transaction_id=record.transaction_id, timestamp=record.timestamp)


@router.get("/history/{user_id}", response_model=list[PaymentRecordSchema])
def get_my_payment_history(
    user_id: str,
    principal: str = Depends(get_principal),
    db: Session = Depends(get_db),
):
    """Get the caller's own payment history, oldest first."""
    return LedgerService.get_history(db, principal, user_id)
