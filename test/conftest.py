import os
import tempfile
from datetime import datetime

import pytest

# Settings and the engine are built at import time, so configure them first
TEST_DIR = tempfile.mkdtemp(prefix="hrportal-test-")
DB_PATH = os.path.join(TEST_DIR, "test.db")

os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{DB_PATH}"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["LOG_FILE"] = ""
os.environ["STORAGE_ROOT"] = os.path.join(TEST_DIR, "storage")
os.environ["SECRET_KEY"] = "test-secret-key"

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine, update  # noqa: E402

from hrportal.core import utils  # noqa: E402
from hrportal.core.storage import LocalStorage, get_storage  # noqa: E402
from hrportal.main import app  # noqa: E402
from hrportal.models.model import Base, User  # noqa: E402

sync_engine = create_engine(f"sqlite:///{DB_PATH}")


@pytest.fixture(autouse=True)
def reset_database():
    """Fresh schema for every test"""
    Base.metadata.drop_all(sync_engine)
    Base.metadata.create_all(sync_engine)
    yield


@pytest.fixture
def storage(tmp_path):
    """Bucket rooted in the test's temporary directory"""
    return LocalStorage(str(tmp_path), "project-files")


@pytest.fixture
def client(storage):
    """FastAPI test client"""
    app.dependency_overrides[get_storage] = lambda: storage
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(client):
    """Sign up an account and return its bearer headers"""
    def _make_user(email, password="secret123", full_name="Hannah Reyes"):
        response = client.post("/auth/signup", json={
            "email": email,
            "password": password,
            "confirm_password": password,
            "full_name": full_name,
        })
        assert response.status_code == 201, response.text

        response = client.post("/auth/signin", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _make_user


@pytest.fixture
def deactivate_user():
    """Flag an account inactive directly in the database"""
    def _deactivate(email):
        with sync_engine.begin() as conn:
            conn.execute(update(User).where(User.email == email).values(is_active=False))

    return _deactivate


@pytest.fixture
def auth_headers(make_user):
    return make_user("hr@example.com")


@pytest.fixture
def other_headers(make_user):
    """Headers of a second, unrelated account"""
    return make_user("other@example.com", full_name="Omar Diaz")


@pytest.fixture
def employee_data():
    """Sample employee data"""
    return {
        "first_name": "John",
        "last_name": "Doe",
        "email": "john.doe@example.com",
        "phone": "+1 555 0100",
        "position": "Software Engineer",
        "department": "Engineering",
        "hire_date": "2023-01-15",
        "salary": 75000,
        "address": "1 Main Street",
        "skills": "python, sql",
        "emergency_contact": {
            "name": "Jane Doe",
            "phone": "+1 555 0101",
            "relationship": "Spouse",
        },
    }


@pytest.fixture
def employee(client, auth_headers, employee_data):
    response = client.post("/api/employees/", json=employee_data, headers=auth_headers)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def freeze_time(monkeypatch):
    """Pin the clock used for check-ins, today's summaries and upcoming holidays"""
    def _freeze(value: datetime):
        monkeypatch.setattr(utils, "now_local", lambda: value)
        return value

    return _freeze
