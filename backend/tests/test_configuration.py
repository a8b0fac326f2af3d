"""Tests for the admin capability check and the singleton Stripe configuration."""
import pytest

from conftest import ADMIN, ALICE, caller
from paydesk.errors import AuthorizationError, ValidationError
from paydesk.models.configuration import StripeConfiguration
from paydesk.services.configuration_service import ConfigurationService, normalize_countries


def test_is_caller_admin(client):
    assert client.get("/api/config/admin", headers=caller(ADMIN)).json() == {"is_admin": True}
    assert client.get("/api/config/admin", headers=caller(ALICE)).json() == {"is_admin": False}
    assert client.get("/api/config/admin").json() == {"is_admin": False}


def test_not_configured_initially(client):
    assert client.get("/api/config/stripe/status").json() == {"configured": False}


def test_admin_configures_stripe(client, configure_stripe):
    summary = configure_stripe(countries=["US", "CA"])
    assert summary["configured"] is True
    assert summary["allowed_countries"] == ["US", "CA"]
    assert summary["configured_by"] == ADMIN
    assert summary["key_hint"] == "sk_test_...4242"
    assert "sk_test_51Hq2xKeyValue4242" not in str(summary)
    assert client.get("/api/config/stripe/status").json() == {"configured": True}


def test_non_admin_is_denied_and_prior_config_untouched(client, configure_stripe, db):
    configure_stripe(countries=["US"], secret_key="sk_test_original0001")

    response = client.put(
        "/api/config/stripe",
        json={"secret_key": "sk_test_attacker9999", "allowed_countries": ["GB"]},
        headers=caller(ALICE),
    )
    assert response.status_code == 403
    assert response.json()["error_code"] == "AUTHORIZATION_ERROR"

    config = ConfigurationService.get(db)
    assert config.secret_key == "sk_test_original0001"
    assert config.allowed_countries == ["US"]


def test_non_admin_denied_before_input_is_validated(db):
    with pytest.raises(AuthorizationError):
        ConfigurationService.set_configuration(db, ALICE, "", [])


@pytest.mark.parametrize("countries", [[], ["USA"], ["US", "1A"], [""]])
def test_malformed_countries_rejected(client, countries):
    response = client.put(
        "/api/config/stripe",
        json={"secret_key": "sk_test_abc12345", "allowed_countries": countries},
        headers=caller(ADMIN),
    )
    assert response.status_code == 422
    assert client.get("/api/config/stripe/status").json() == {"configured": False}


def test_blank_secret_key_rejected(db):
    with pytest.raises(ValidationError):
        ConfigurationService.set_configuration(db, ADMIN, "   ", ["US"])


def test_countries_are_normalized():
    assert normalize_countries([" us", "ca", "US", "In "]) == ["US", "CA", "IN"]


def test_reconfiguration_overwrites_instead_of_merging(client, configure_stripe, db):
    configure_stripe(countries=["US", "CA"], secret_key="sk_test_first00001")
    configure_stripe(countries=["GB"], secret_key="sk_test_second0002")

    assert db.query(StripeConfiguration).count() == 1
    config = ConfigurationService.get(db)
    assert config.allowed_countries == ["GB"]
    assert config.secret_key == "sk_test_second0002"


def test_repeated_identical_configuration_converges(configure_stripe, db):
    configure_stripe(countries=["US", "CA"])
    configure_stripe(countries=["US", "CA"])

    assert db.query(StripeConfiguration).count() == 1
    assert ConfigurationService.get(db).allowed_countries == ["US", "CA"]
