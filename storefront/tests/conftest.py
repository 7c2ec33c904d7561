import os
import uuid

# Settings are read at import time
TEST_DB_PATH = "./test_storefront.db"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{TEST_DB_PATH}"
os.environ["ENVIRONMENT"] = "testing"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["ADMIN_EMAIL"] = "admin@example.com"
os.environ["ADMIN_PASSWORD"] = "Admin12345"
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["SEED_SAMPLE_DATA"] = "false"

if os.path.exists(TEST_DB_PATH):
    os.remove(TEST_DB_PATH)

import pytest
from fastapi.testclient import TestClient

from storefront.main import app

API = "/api/v1"


def unique(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8]}"


@pytest.fixture(scope="session")
def client():
    with TestClient(app) as test_client:
        yield test_client
    if os.path.exists(TEST_DB_PATH):
        os.remove(TEST_DB_PATH)


@pytest.fixture(scope="session")
def admin_headers(client):
    response = client.post(
        f"{API}/auth/login",
        json={"email": os.environ["ADMIN_EMAIL"], "password": os.environ["ADMIN_PASSWORD"]},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture()
def registered_user(client):
    name = unique("user").replace("-", "_")
    payload = {
        "email": f"{name}@example.com",
        "username": name,
        "full_name": "Test User",
        "password": "secret123",
    }
    response = client.post(f"{API}/auth/register", json=payload)
    assert response.status_code == 201
    data = response.json()
    data["password"] = payload["password"]
    return data


@pytest.fixture()
def user_headers(registered_user):
    return {"Authorization": f"Bearer {registered_user['access_token']}"}


@pytest.fixture()
def create_product(client, admin_headers):
    def _create(**fields):
        payload = {"name": unique("Product"), "price": "19.99", **fields}
        response = client.post(f"{API}/products/", json=payload, headers=admin_headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _create
