"""
Shared fixtures: an in-memory SQLite database rebuilt for every test and a
TestClient wired to it.
"""

import os

# Must be set before any solar_inventory module reads the cached settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RUN_MIGRATIONS"] = "false"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient

from solar_inventory.application.rfq import RFQSessionStore, get_rfq_sessions
from solar_inventory.domain.models import Base, StaffMember, UserProfile
from solar_inventory.infrastructure.db import SessionLocal, engine
from solar_inventory.infrastructure.security import create_access_token, hash_password
from solar_inventory.main import app

ADMIN_EMAIL = "admin@solar.test"
STAFF_EMAIL = "worker@solar.test"
PASSWORD = "secret123"


@pytest.fixture(autouse=True)
def database():
    """Fresh schema per test"""
    Base.metadata.create_all(engine)
    yield
    Base.metadata.drop_all(engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def rfq_store():
    store = RFQSessionStore(maxsize=16, ttl=60)
    app.dependency_overrides[get_rfq_sessions] = lambda: store
    yield store
    app.dependency_overrides.pop(get_rfq_sessions, None)


@pytest.fixture
def client(rfq_store):
    return TestClient(app)


def _make_user(db, name: str, email: str, role: str) -> UserProfile:
    member = StaffMember(name=name, email=email, role=role, department="Field")
    db.add(member)
    db.flush()
    profile = UserProfile(
        email=email,
        password_hash=hash_password(PASSWORD),
        role=role,
        staff_id=member.id,
    )
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile


@pytest.fixture
def admin_user(db):
    return _make_user(db, "Ana Admin", ADMIN_EMAIL, "Admin")


@pytest.fixture
def staff_user(db):
    return _make_user(db, "Marko Worker", STAFF_EMAIL, "Staff")


def _headers(profile: UserProfile) -> dict:
    return {"Authorization": f"Bearer {create_access_token(str(profile.id), profile.role)}"}


@pytest.fixture
def admin_headers(admin_user):
    return _headers(admin_user)


@pytest.fixture
def staff_headers(staff_user):
    return _headers(staff_user)


@pytest.fixture
def make_item(client, admin_headers):
    """Create an inventory item through the API and return its JSON"""
    def _make(**overrides):
        payload = {
            "name": "Solar panel 450W",
            "category": "Panels",
            "currentStock": 10,
            "minStock": 2,
            "maxStock": 100,
            "unitPrice": 100.0,
            "unit": "pcs",
            "supplier": "SunParts",
        }
        payload.update(overrides)
        response = client.post("/inventory/", json=payload, headers=admin_headers)
        assert response.status_code == 201, response.text
        return response.json()
    return _make
