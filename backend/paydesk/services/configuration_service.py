"""
Configuration Service — Admin-only, single-slot Stripe configuration.
"""
import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable

from sqlalchemy.orm import Session

from paydesk.errors import ValidationError
from paydesk.models.configuration import SINGLETON_ID, StripeConfiguration
from paydesk.services.access_control import AccessControl
from paydesk.utils.hashing import fingerprint
from paydesk.utils.validators import validate_country_code

logger = logging.getLogger(__name__)

_config_lock = threading.Lock()


@dataclass(frozen=True)
class ConfigurationSnapshot:
    """Detached copy of the configuration, safe to use with no lock held."""

    secret_key: str
    allowed_countries: tuple[str, ...]


def normalize_countries(countries: Iterable[str]) -> list[str]:
    """Trim, upper-case and de-duplicate country codes, keeping order.

    Raises:
        ValidationError: empty list or any malformed code.
    """
    normalized: list[str] = []
    for raw in countries:
        code = (raw or "").strip().upper()
        if not validate_country_code(code):
            raise ValidationError(f"Invalid country code: {raw!r}")
        if code not in normalized:
            normalized.append(code)
    if not normalized:
        raise ValidationError("Please enter at least one valid country code (e.g., US, CA, GB)")
    return normalized


class ConfigurationService:
    """Reads and overwrites the singleton StripeConfiguration."""

    @staticmethod
    def get(db: Session) -> StripeConfiguration | None:
        return db.get(StripeConfiguration, SINGLETON_ID)

    @staticmethod
    def is_configured(db: Session) -> bool:
        return ConfigurationService.get(db) is not None

    @staticmethod
    def snapshot(db: Session) -> ConfigurationSnapshot | None:
        with _config_lock:
            config = ConfigurationService.get(db)
            if config is None:
                return None
            return ConfigurationSnapshot(
                secret_key=config.secret_key,
                allowed_countries=tuple(config.allowed_countries or ()),
            )

    @staticmethod
    def set_configuration(db: Session, principal: str, secret_key: str, allowed_countries: Iterable[str]) -> StripeConfiguration:
        """Replace the configuration wholesale.

        Raises:
            AuthorizationError: caller is not an admin (checked before anything else).
            ValidationError: blank key, empty or malformed country list.
        """
        AccessControl.require_admin(principal)

        secret_key = (secret_key or "").strip()
        if not secret_key:
            raise ValidationError("Stripe secret key is required")
        countries = normalize_countries(allowed_countries)

        with _config_lock:
            config = ConfigurationService.get(db)
            if config is None:
                config = StripeConfiguration(id=SINGLETON_ID)
                db.add(config)
            config.secret_key = secret_key
            config.allowed_countries = countries
            config.configured_by = principal
            config.configured_at = datetime.now(timezone.utc)
            try:
                db.commit()
            except Exception:
                db.rollback()
                raise
            db.refresh(config)

        logger.info(
            "Stripe configuration replaced by %s (key %s, countries=%s)",
            principal, fingerprint(secret_key), ",".join(countries),
        )
        return config
