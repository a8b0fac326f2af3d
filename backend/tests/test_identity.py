"""Tests for profile registration, lookup and owner updates."""
import threading

import pytest

from conftest import ALICE, BOB, caller
from paydesk.errors import AuthorizationError, ConflictError, ValidationError
from paydesk.services.identity_service import IdentityService, derive_user_id


class TestRegistration:

    def test_register_masks_aadhaar(self, client):
        response = client.post(
            "/api/profile/register",
            json={"national_id": "123456789012", "email": "a@b.com", "name": "Alice"},
            headers=caller(ALICE),
        )
        assert response.status_code == 200
        profile = response.json()
        assert profile["aadhaar_masked"] == "1234****9012"
        assert profile["name"] == "Alice"
        assert profile["email"] == "a@b.com"
        assert profile["user_id"] == derive_user_id(ALICE)
        assert "123456789012" not in response.text

    def test_second_registration_conflicts_and_keeps_first_profile(self, client, register):
        first = register(ALICE)

        response = client.post(
            "/api/profile/register",
            json={"national_id": "999988887777", "email": "other@b.com", "name": "Mallory"},
            headers=caller(ALICE),
        )
        assert response.status_code == 409
        assert response.json()["error_code"] == "CONFLICT"

        current = client.get("/api/profile/me", headers=caller(ALICE)).json()
        assert current["user_id"] == first["user_id"]
        assert current["name"] == "Alice"
        assert current["aadhaar_masked"] == "1234****9012"

    @pytest.mark.parametrize("national_id", ["12345", "12345678901a", "1234567890123", "١٢٣٤٥٦٧٨٩٠١٢"])
    def test_malformed_aadhaar_is_rejected(self, client, national_id):
        response = client.post(
            "/api/profile/register",
            json={"national_id": national_id, "email": "a@b.com", "name": "Alice"},
            headers=caller(ALICE),
        )
        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"
        assert client.get("/api/profile/me", headers=caller(ALICE)).json() is None

    def test_blank_name_and_bad_email_are_rejected(self, db):
        with pytest.raises(ValidationError):
            IdentityService.register(db, ALICE, "123456789012", "a@b.com", "   ")
        with pytest.raises(ValidationError):
            IdentityService.register(db, ALICE, "123456789012", "nope", "Alice")

    def test_anonymous_caller_cannot_register(self, client):
        response = client.post(
            "/api/profile/register",
            json={"national_id": "123456789012", "email": "a@b.com", "name": "Alice"},
        )
        assert response.status_code == 403
        assert response.json()["detail"] == "Not authorized to perform this action"

    def test_concurrent_registrations_have_one_winner(self, session_factory):
        outcomes = []
        barrier = threading.Barrier(6)

        def attempt(n):
            session = session_factory()
            try:
                barrier.wait()
                IdentityService.register(session, ALICE, f"12345678{n:04d}", "a@b.com", f"Alice {n}")
                outcomes.append("ok")
            except ConflictError:
                outcomes.append("conflict")
            finally:
                session.close()

        threads = [threading.Thread(target=attempt, args=(n,)) for n in range(6)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert outcomes.count("ok") == 1
        assert outcomes.count("conflict") == 5


class TestLookup:

    def test_unregistered_caller_gets_null(self, client):
        response = client.get("/api/profile/me", headers=caller(BOB))
        assert response.status_code == 200
        assert response.json() is None

    def test_anonymous_caller_gets_null(self, client, register):
        register(ALICE)
        assert client.get("/api/profile/me").json() is None

    def test_lookup_is_per_caller(self, client, register):
        register(ALICE)
        register(BOB, national_id="555566667777", email="bob@b.com", name="Bob")
        bob = client.get("/api/profile/me", headers=caller(BOB)).json()
        assert bob["name"] == "Bob"
        assert bob["aadhaar_masked"] == "5555****7777"


class TestSaveProfile:

    def test_owner_can_update_name_and_email(self, client, register):
        profile = register(ALICE)
        profile.update(name="Alice Smith", email="alice@example.org")

        response = client.put("/api/profile/me", json=profile, headers=caller(ALICE))
        assert response.status_code == 200
        assert response.json()["name"] == "Alice Smith"
        assert response.json()["email"] == "alice@example.org"

    def test_masked_aadhaar_cannot_be_overwritten(self, client, register):
        profile = register(ALICE)
        profile["aadhaar_masked"] = "123456789012"

        response = client.put("/api/profile/me", json=profile, headers=caller(ALICE))
        assert response.status_code == 200
        assert response.json()["aadhaar_masked"] == "1234****9012"

    def test_cannot_save_someone_elses_profile(self, client, register):
        alice = register(ALICE)
        register(BOB, national_id="555566667777", email="bob@b.com", name="Bob")

        alice["name"] = "Hijacked"
        response = client.put("/api/profile/me", json=alice, headers=caller(BOB))
        assert response.status_code == 403
        assert client.get("/api/profile/me", headers=caller(ALICE)).json()["name"] == "Alice"

    def test_caller_without_profile_is_denied(self, db):
        with pytest.raises(AuthorizationError):
            IdentityService.save_caller_profile(db, BOB, derive_user_id(BOB), "bob@b.com", "Bob")
