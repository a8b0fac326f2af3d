"""Shared test fixtures."""
import itertools
import os
import tempfile

# Settings are read at import time, so the environment goes first
_TMP_DIR = tempfile.mkdtemp(prefix="paydesk-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'default.db')}"
os.environ["ADMIN_PRINCIPALS"] = '["admin-principal"]'
os.environ["LOG_DIR"] = os.path.join(_TMP_DIR, "logs")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from paydesk.database import get_db, init_db
from paydesk.main import app
from paydesk.services.payment_provider import CheckoutSession, PaymentProvider, get_payment_provider
from paydesk.utils.rate_limiter import reset_rate_limits

ADMIN = "admin-principal"
ALICE = "alice-principal"
BOB = "bob-principal"


def caller(principal):
    """Request headers identifying the caller."""
    return {"x-principal": principal}


class FakeProvider(PaymentProvider):
    """In-memory stand-in for Stripe Checkout."""

    name = "fake"

    def __init__(self):
        self.calls = []
        self.error = None
        self._ids = itertools.count(1)

    def create_checkout_session(self, secret_key, items, success_url, cancel_url, allowed_countries):
        self.calls.append({
            "secret_key": secret_key,
            "items": list(items),
            "success_url": success_url,
            "cancel_url": cancel_url,
            "allowed_countries": list(allowed_countries),
        })
        if self.error is not None:
            raise self.error
        n = next(self._ids)
        return CheckoutSession(id=f"cs_test_{n}", url=f"https://checkout.stripe.test/c/pay/cs_test_{n}")


@pytest.fixture
def session_factory(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'paydesk.db'}",
        connect_args={"check_same_thread": False},
    )
    init_db(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def fake_provider():
    return FakeProvider()


@pytest.fixture
def client(session_factory, fake_provider):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_payment_provider] = lambda: fake_provider
    reset_rate_limits()
    yield TestClient(app)
    app.dependency_overrides.clear()
    reset_rate_limits()


@pytest.fixture
def register(client):
    """Register a caller over the API and return the profile JSON."""
    def _register(principal, national_id="123456789012", email="a@b.com", name="Alice"):
        response = client.post(
            "/api/profile/register",
            json={"national_id": national_id, "email": email, "name": name},
            headers=caller(principal),
        )
        assert response.status_code == 200, response.text
        return response.json()
    return _register


@pytest.fixture
def configure_stripe(client):
    def _configure(countries=("US", "CA"), secret_key="sk_test_51Hq2xKeyValue4242"):
        response = client.put(
            "/api/config/stripe",
            json={"secret_key": secret_key, "allowed_countries": list(countries)},
            headers=caller(ADMIN),
        )
        assert response.status_code == 200, response.text
        return response.json()
    return _configure
