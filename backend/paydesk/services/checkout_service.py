"""
Checkout Orchestrator — Validates a cart and requests a provider checkout session.

The provider call runs on a dedicated worker pool with no profile,
configuration or ledger lock held; only a configuration snapshot is passed.
"""
import logging
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeout
from typing import Sequence

from sqlalchemy.orm import Session

from paydesk.config import get_settings
from paydesk.errors import ConfigurationError, PayDeskError, ProviderError, ValidationError
from paydesk.services.configuration_service import ConfigurationService
from paydesk.services.payment_provider import CheckoutSession, PaymentProvider, ShoppingItem
from paydesk.utils.validators import validate_currency, validate_redirect_url

logger = logging.getLogger(__name__)

settings = get_settings()

_provider_pool = ThreadPoolExecutor(
    max_workers=settings.PROVIDER_WORKERS,
    thread_name_prefix="payment-provider",
)


def validate_items(items: Sequence[ShoppingItem]) -> list[ShoppingItem]:
    """Check a cart and return it with normalized (upper-case) currencies.

    Raises:
        ValidationError: empty cart, non-positive price or quantity, blank
            product name, malformed or mixed currencies.
    """
    if not items:
        raise ValidationError("Cart is empty")

    cleaned: list[ShoppingItem] = []
    for index, item in enumerate(items):
        if item.price_in_cents <= 0:
            raise ValidationError(f"Item {index + 1}: price must be greater than zero")
        if item.quantity <= 0:
            raise ValidationError(f"Item {index + 1}: quantity must be greater than zero")
        if not (item.product_name or "").strip():
            raise ValidationError(f"Item {index + 1}: product name is required")
        if not validate_currency(item.currency):
            raise ValidationError(f"Item {index + 1}: invalid currency {item.currency!r}")
        cleaned.append(ShoppingItem(
            currency=item.currency.strip().upper(),
            product_name=item.product_name.strip(),
            product_description=(item.product_description or "").strip(),
            price_in_cents=item.price_in_cents,
            quantity=item.quantity,
        ))

    if len({item.currency for item in cleaned}) > 1:
        raise ValidationError("All items in one checkout must use the same currency")
    return cleaned


class CheckoutOrchestrator:
    """Issues checkout sessions. Never persists them and never retries."""

    def __init__(self, provider: PaymentProvider, executor: ThreadPoolExecutor = None, timeout: float = None):
        self.provider = provider
        self.executor = executor or _provider_pool
        self.timeout = settings.PROVIDER_TIMEOUT_SECONDS if timeout is None else timeout

    def create_session(self, db: Session, items: Sequence[ShoppingItem], success_url: str, cancel_url: str) -> CheckoutSession:
        snapshot = ConfigurationService.snapshot(db)
        if snapshot is None:
            raise ConfigurationError("Stripe payments have not been configured by an administrator yet")

        items = validate_items(items)
        if not validate_redirect_url(success_url) or not validate_redirect_url(cancel_url):
            raise ValidationError("Success and cancel URLs must be absolute http(s) URLs")

        future = self.executor.submit(
            self.provider.create_checkout_session,
            snapshot.secret_key,
            items,
            success_url.strip(),
            cancel_url.strip(),
            snapshot.allowed_countries,
        )
        try:
            session = future.result(timeout=self.timeout)
        except FutureTimeout:
            # The worker may still finish; its session is simply never handed out
            raise ProviderError(diagnostic=f"{self.provider.name} did not answer within {self.timeout}s")
        except PayDeskError:
            raise
        except Exception as e:
            raise ProviderError(diagnostic=f"{type(e).__name__}: {e}")

        logger.info(
            "Checkout session %s issued by %s for %d item(s)",
            session.id, self.provider.name, len(items),
        )
        return session
