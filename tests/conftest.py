"""Pytest bootstrap for project imports and shared fixtures."""

import os
from pathlib import Path
import sys

# Ensure project root is on sys.path so `import educonnect` works
PROJECT_ROOT = Path(__file__).resolve().parents[1]
project_root_str = str(PROJECT_ROOT)
if project_root_str not in sys.path:
    sys.path.insert(0, project_root_str)

# Must be set before educonnect.config is imported
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient

from educonnect.main import create_app
from educonnect.models import BookingStatus, UserRole
from educonnect.storage import MemStorage

PASSWORD = "Password123"


@pytest.fixture
def storage():
    return MemStorage()


@pytest.fixture
def client(storage):
    with TestClient(create_app(storage)) as test_client:
        yield test_client


# ======================
# STORAGE SEEDING HELPERS
# ======================

@pytest.fixture
def make_user(storage):
    counter = iter(range(1, 1000))

    def _make(role=UserRole.STUDENT, name=None, approved=True):
        n = next(counter)
        user = storage.create_user(
            name=name or f"{role.value} {n}",
            email=f"{role.value.lower()}{n}@test.edu",
            password_hash="hash",
            role=role,
        )
        if role == UserRole.TUTOR and approved:
            user = storage.update_user_approval(user.id, True)
        return user

    return _make


@pytest.fixture
def make_course(storage):
    def _make(tutor, title="Algebra I", subject="Mathematics", **extra):
        fields = {
            "title": title,
            "description": f"{title} from the ground up",
            "subject": subject,
            "category": "Beginner",
            "price": 25.0,
            "tutor_id": tutor.id,
        }
        fields.update(extra)
        return storage.create_course(**fields)

    return _make


@pytest.fixture
def confirmed_booking(storage):
    def _make(student, course):
        booking = storage.create_booking_if_absent(student.id, course.id)
        return storage.update_booking_status(booking.id, BookingStatus.CONFIRMED)

    return _make


# ======================
# HTTP HELPERS
# ======================

def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register_and_login(client):
    def _register(email, role="Student", name=None):
        resp = client.post("/auth/register", json={
            "name": name or email.split("@")[0],
            "email": email,
            "password": PASSWORD,
            "confirm_password": PASSWORD,
            "role": role,
        })
        assert resp.status_code == 201, resp.text
        login = client.post("/auth/login", json={"email": email, "password": PASSWORD})
        assert login.status_code == 200, login.text
        return resp.json()["user"], login.json()["access_token"]

    return _register


@pytest.fixture
def admin_token(client, storage):
    from educonnect.utils.security import create_user_token, get_password_hash

    admin = storage.create_user(
        name="Admin User",
        email="admin@test.edu",
        password_hash=get_password_hash(PASSWORD),
        role=UserRole.ADMIN,
    )
    return create_user_token(admin)
