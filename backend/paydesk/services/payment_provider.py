"""
Payment Provider — Narrow interface to the external checkout gateway.
Production implementation talks to Stripe through the official SDK.
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import lru_cache
from typing import Sequence

import stripe

from paydesk.errors import ProviderError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShoppingItem:
    currency: str
    product_name: str
    product_description: str
    price_in_cents: int
    quantity: int


@dataclass(frozen=True)
class CheckoutSession:
    id: str
    url: str


class PaymentProvider(ABC):
    """Issues hosted checkout sessions. Implementations may block on I/O."""

    name = "provider"

    @abstractmethod
    def create_checkout_session(
        self,
        secret_key: str,
        items: Sequence[ShoppingItem],
        success_url: str,
        cancel_url: str,
        allowed_countries: Sequence[str],
    ) -> CheckoutSession:
        """Return a provider-issued session or raise ProviderError."""


class StripeProvider(PaymentProvider):
    """Stripe Checkout in one-off payment mode."""

    name = "stripe"

    @staticmethod
    def build_line_items(items: Sequence[ShoppingItem]) -> list[dict]:
        return [
            {
                "price_data": {
                    "currency": item.currency.lower(),
                    "product_data": {
                        "name": item.product_name,
                        "description": item.product_description or item.product_name,
                    },
                    "unit_amount": item.price_in_cents,
                },
                "quantity": item.quantity,
            }
            for item in items
        ]

    def create_checkout_session(self, secret_key, items, success_url, cancel_url, allowed_countries):
        try:
            # Per-request key, never the global stripe.api_key
            session = stripe.checkout.Session.create(
                api_key=secret_key,
                mode="payment",
                payment_method_types=["card"],
                line_items=self.build_line_items(items),
                success_url=success_url,
                cancel_url=cancel_url,
                shipping_address_collection={"allowed_countries": list(allowed_countries)},
            )
        except stripe.StripeError as e:
            logger.error("Stripe checkout creation failed: %s", e)
            raise ProviderError(diagnostic=f"{type(e).__name__}: {e.user_message or e}")

        if not session.id or not session.url:
            raise ProviderError(diagnostic="Stripe returned a session without id or url")
        return CheckoutSession(id=session.id, url=session.url)


@lru_cache()
def get_payment_provider() -> PaymentProvider:
    """FastAPI dependency: the configured provider (overridable in tests)."""
    return StripeProvider()
