"""
Profile Routes — Caller identity resolution and one-time registration.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from paydesk.database import get_db
from paydesk.errors import AuthorizationError
from paydesk.schemas.schemas import RegisterUserRequest, UserProfileResponse, UserProfileSchema
from paydesk.services.access_control import AccessControl
from paydesk.services.identity_service import IdentityService
from paydesk.services.audit_service import AuditService
from paydesk.routes.deps import get_principal

router = APIRouter(prefix="/api/profile", tags=["Profile"])


@router.get("/me", response_model=Optional[UserProfileResponse])
def get_caller_user_profile(
    principal: str = Depends(get_principal),
    db: Session = Depends(get_db),
):
    """Get the caller's profile, or null if they have not registered."""
    if not AccessControl.is_authenticated(principal):
        return None
    return IdentityService.get_caller_profile(db, principal)


@router.post("/register", response_model=UserProfileResponse)
def register_user(
    payload: RegisterUserRequest,
    request: Request,
    principal: str = Depends(get_principal),
    db: Session = Depends(get_db),
):
    """Register the caller with their Aadhaar number (stored masked only)."""
    if not AccessControl.is_authenticated(principal):
        raise AuthorizationError("Anonymous callers cannot register")

    profile = IdentityService.register(db, principal, payload.national_id, payload.email, payload.name)

    # Audit
    AuditService.log(
        db, principal, "PROFILE_REGISTERED",
        payload={"user_id": profile.user_id, "aadhaar_masked": profile.aadhaar_masked},
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent", "")[:256],
    )

    return profile


@router.put("/me", response_model=UserProfileResponse)
def save_caller_user_profile(
    payload: UserProfileSchema,
    request: Request,
    principal: str = Depends(get_principal),
    db: Session = Depends(get_db),
):
    """Update the caller's own name and email."""
    profile = IdentityService.save_caller_profile(
        db, principal, payload.user_id, email=payload.email, name=payload.name,
    )

    # Audit
    AuditService.log(
        db, principal, "PROFILE_UPDATED",
        payload={"user_id": profile.user_id, "name": profile.name, "email": profile.email},
        ip_address=request.client.host if request.client else None,
    )

    return profile
