"""
Identity Service — Resolves callers to profiles and handles one-time registration.
"""
import logging
import uuid

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from paydesk.errors import AuthorizationError, ConflictError, ValidationError
from paydesk.models.profile import UserProfile
from paydesk.utils.locks import KeyedLock
from paydesk.utils.masking import mask_aadhaar
from paydesk.utils.validators import (
    normalize_aadhaar, sanitize_name, validate_aadhaar, validate_email,
)

logger = logging.getLogger(__name__)

# Namespace for deriving stable user ids from principals
USER_ID_NAMESPACE = uuid.UUID("5d3f4a0e-8c1b-4f7e-9a26-0b7c4e1d2f90")

_profile_locks = KeyedLock()


def derive_user_id(principal: str) -> str:
    """Stable user id for a principal (UUIDv5, so re-derivable)."""
    return str(uuid.uuid5(USER_ID_NAMESPACE, principal))


def _clean_contact(email: str, name: str) -> tuple[str, str]:
    name = sanitize_name(name)
    if not name:
        raise ValidationError("Name is required")
    if not validate_email(email):
        raise ValidationError("Please enter a valid email address")
    return email.strip(), name


class IdentityService:
    """Profile lookup, registration and owner updates."""

    @staticmethod
    def get_caller_profile(db: Session, principal: str) -> UserProfile | None:
        return db.query(UserProfile).filter(UserProfile.principal == principal).first()

    @staticmethod
    def register(db: Session, principal: str, national_id: str, email: str, name: str) -> UserProfile:
        """Create the caller's profile.

        The raw Aadhaar only lives for the duration of this call; the stored
        profile keeps the masked form.

        Raises:
            ValidationError: malformed Aadhaar, email or name.
            ConflictError: the caller already registered.
        """
        if not validate_aadhaar(national_id):
            raise ValidationError("Aadhaar number must be exactly 12 digits")
        email, name = _clean_contact(email, name)
        masked = mask_aadhaar(normalize_aadhaar(national_id))

        with _profile_locks.hold(principal):
            if IdentityService.get_caller_profile(db, principal) is not None:
                raise ConflictError("User is already registered")

            profile = UserProfile(
                user_id=derive_user_id(principal),
                principal=principal,
                name=name,
                email=email,
                aadhaar_masked=masked,
            )
            db.add(profile)
            try:
                db.commit()
            except IntegrityError:
                db.rollback()
                raise ConflictError("User is already registered")
            db.refresh(profile)

        logger.info("Registered user %s", profile.user_id)
        return profile

    @staticmethod
    def save_caller_profile(db: Session, principal: str, user_id: str, email: str, name: str) -> UserProfile:
        """Apply the owner's edits to name and email.

        Raises:
            AuthorizationError: the caller has no profile or targets another one.
            ValidationError: malformed email or name.
        """
        with _profile_locks.hold(principal):
            profile = IdentityService.get_caller_profile(db, principal)
            if profile is None or profile.user_id != user_id:
                raise AuthorizationError(f"Principal {principal!r} does not own profile {user_id!r}")

            profile.email, profile.name = _clean_contact(email, name)
            try:
                db.commit()
            except Exception:
                db.rollback()
                raise
            db.refresh(profile)

        logger.info("Updated profile %s", profile.user_id)
        return profile
