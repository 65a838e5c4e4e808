"""
API tests for sign-in, profiles, role checks and navigation
"""

import pytest
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from solar_inventory import seed
from solar_inventory.domain.models import StaffMember, UserProfile
from solar_inventory.infrastructure.security import create_access_token
from solar_inventory.seed import ensure_admin

from .conftest import ADMIN_EMAIL, PASSWORD


class TestLogin:
    def test_login_returns_token_and_profile(self, client, admin_user):
        response = client.post("/auth/login", json={"email": ADMIN_EMAIL, "password": PASSWORD})
        assert response.status_code == 200
        data = response.json()
        assert data["tokenType"] == "bearer"
        assert data["profile"]["email"] == ADMIN_EMAIL
        assert data["profile"]["role"] == "Admin"

        me = client.get("/auth/me", headers={"Authorization": f"Bearer {data['accessToken']}"})
        assert me.status_code == 200
        assert me.json()["id"] == admin_user.id

    def test_email_is_case_insensitive(self, client, admin_user):
        response = client.post("/auth/login", json={"email": ADMIN_EMAIL.upper(), "password": PASSWORD})
        assert response.status_code == 200

    def test_wrong_password(self, client, admin_user):
        response = client.post("/auth/login", json={"email": ADMIN_EMAIL, "password": "nope"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid login credentials"

    def test_unknown_email(self, client):
        response = client.post("/auth/login", json={"email": "ghost@solar.test", "password": PASSWORD})
        assert response.status_code == 401


class TestAuthContext:
    def test_missing_token(self, client):
        response = client.get("/auth/me")
        assert response.status_code == 401
        assert response.json()["detail"] == "Missing token"

    def test_garbage_token(self, client):
        response = client.get("/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid token"

    def test_expired_token(self, client, admin_user):
        token = create_access_token(str(admin_user.id), "Admin", expires_minutes=-1)
        response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_token_for_missing_profile(self, client):
        token = create_access_token("999", "Admin")
        response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 403
        assert response.json()["detail"] == "User profile not found"

    def test_logout(self, client, staff_headers):
        response = client.post("/auth/logout", headers=staff_headers)
        assert response.status_code == 204


class TestUserProfiles:
    def test_admin_creates_profile(self, client, admin_headers):
        payload = {"email": "New.User@Solar.test", "password": "longenough", "role": "Manager"}
        response = client.post("/auth/users", json=payload, headers=admin_headers)
        assert response.status_code == 201
        assert response.json()["email"] == "new.user@solar.test"

        login = client.post("/auth/login", json={"email": "new.user@solar.test", "password": "longenough"})
        assert login.status_code == 200
        assert login.json()["profile"]["role"] == "Manager"

    def test_duplicate_email(self, client, admin_headers):
        payload = {"email": ADMIN_EMAIL, "password": "longenough", "role": "Staff"}
        response = client.post("/auth/users", json=payload, headers=admin_headers)
        assert response.status_code == 409

    def test_short_password_rejected(self, client, admin_headers):
        payload = {"email": "short@solar.test", "password": "123", "role": "Staff"}
        response = client.post("/auth/users", json=payload, headers=admin_headers)
        assert response.status_code == 422

    def test_staff_cannot_create_profiles(self, client, staff_headers):
        payload = {"email": "x@solar.test", "password": "longenough", "role": "Admin"}
        response = client.post("/auth/users", json=payload, headers=staff_headers)
        assert response.status_code == 403
        assert response.json()["detail"] == "Admin role required"


class TestNavigation:
    def test_admin_sees_everything(self, client, admin_headers):
        response = client.get("/navigation/", headers=admin_headers)
        assert response.status_code == 200
        assert [entry["id"] for entry in response.json()] == [
            "dashboard", "inventory", "input", "output", "staff", "history", "clients",
        ]

    def test_staff_menu_hides_admin_views(self, client, staff_headers):
        response = client.get("/navigation/", headers=staff_headers)
        ids = [entry["id"] for entry in response.json()]
        assert "inventory" not in ids
        assert "staff" not in ids
        assert "dashboard" in ids


class TestSeed:
    def test_ensure_admin_is_idempotent(self, db):
        profile, created = ensure_admin(db, "Root@Solar.test", "bootstrap-pass")
        assert created
        assert profile.role == "Admin"
        assert profile.staff_id is not None

        again, created_again = ensure_admin(db, "root@solar.test", "other-pass")
        assert not created_again
        assert again.id == profile.id

    def test_invalid_password_writes_nothing(self, db):
        for _ in range(2):
            with pytest.raises(ValidationError):
                ensure_admin(db, "boss@solar.test", "abc")

        assert db.query(StaffMember).count() == 0
        assert db.query(UserProfile).count() == 0

    def test_failed_profile_insert_rolls_back_staff_row(self, db, monkeypatch):
        def broken_hash(password):
            raise SQLAlchemyError("insert failed")
        monkeypatch.setattr(seed, "hash_password", broken_hash)

        with pytest.raises(SQLAlchemyError):
            ensure_admin(db, "boss@solar.test", "long-enough")

        assert db.query(StaffMember).count() == 0
        assert db.query(UserProfile).count() == 0
