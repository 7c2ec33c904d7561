import asyncio
from datetime import timedelta

from sqlalchemy import update

from conftest import API, unique
from storefront.adapters.outbound.persistence.database import get_db_context
from storefront.adapters.outbound.persistence.models import RefreshToken
from storefront.shared.utils.time import utcnow


def expire_refresh_token(token: str) -> None:
    async def _expire():
        async with get_db_context() as db:
            await db.execute(
                update(RefreshToken)
                .where(RefreshToken.token == token)
                .values(expires_at=utcnow() - timedelta(minutes=1))
            )

    asyncio.run(_expire())


def test_register_returns_tokens(client):
    name = unique("reg").replace("-", "_")
    response = client.post(
        f"{API}/auth/register",
        json={
            "email": f"{name.upper()}@Example.com",
            "username": name,
            "full_name": "Jane Doe",
            "password": "secret123",
        },
    )
    assert response.status_code == 201
    data = response.json()
    assert data["user"]["email"] == f"{name}@example.com"
    assert data["user"]["role"] == "customer"
    assert data["token_type"] == "bearer"
    assert data["expires_in"] == 900
    assert len(data["refresh_token"]) == 128
    assert "password" not in data["user"]


def test_register_duplicate_email(client, registered_user):
    response = client.post(
        f"{API}/auth/register",
        json={
            "email": registered_user["user"]["email"],
            "username": unique("dup").replace("-", "_"),
            "full_name": "Someone Else",
            "password": "secret123",
        },
    )
    assert response.status_code == 409
    assert response.json()["code"] == "RESOURCE_ALREADY_EXISTS"


def test_register_weak_password(client):
    name = unique("weak").replace("-", "_")
    response = client.post(
        f"{API}/auth/register",
        json={"email": f"{name}@example.com", "username": name, "full_name": "Weak", "password": "abcdefgh"},
    )
    assert response.status_code == 422


def test_login_success(client, registered_user):
    response = client.post(
        f"{API}/auth/login",
        json={"email": registered_user["user"]["email"], "password": registered_user["password"]},
    )
    assert response.status_code == 200
    data = response.json()
    assert "access_token" in data
    assert data["refresh_token"] != registered_user["refresh_token"]


def test_login_failure(client, registered_user):
    response = client.post(
        f"{API}/auth/login",
        json={"email": registered_user["user"]["email"], "password": "wrong123"},
    )
    assert response.status_code == 401
    assert response.json()["code"] == "INVALID_CREDENTIALS"


def test_me_requires_auth(client):
    assert client.get(f"{API}/users/me").status_code == 401

    response = client.get(f"{API}/users/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


def test_me(client, registered_user, user_headers):
    response = client.get(f"{API}/users/me", headers=user_headers)
    assert response.status_code == 200
    assert response.json()["id"] == registered_user["user"]["id"]


def test_refresh_rotates_and_rejects_reuse(client, registered_user):
    old_token = registered_user["refresh_token"]

    response = client.post(f"{API}/auth/refresh-token", json={"refresh_token": old_token})
    assert response.status_code == 200
    new_token = response.json()["refresh_token"]
    assert new_token != old_token
    assert response.json()["user"]["id"] == registered_user["user"]["id"]

    reuse = client.post(f"{API}/auth/refresh-token", json={"refresh_token": old_token})
    assert reuse.status_code == 401
    assert reuse.json()["code"] == "REFRESH_TOKEN_INVALID"

    # The rotated token is still usable
    response = client.post(f"{API}/auth/refresh-token", json={"refresh_token": new_token})
    assert response.status_code == 200


def test_refresh_unknown_token(client):
    response = client.post(f"{API}/auth/refresh-token", json={"refresh_token": "f" * 128})
    assert response.status_code == 401
    assert response.json()["code"] == "REFRESH_TOKEN_NOT_FOUND"


def test_logout_revokes_refresh_token(client, registered_user, user_headers):
    token = registered_user["refresh_token"]

    response = client.post(f"{API}/auth/logout", json={"refresh_token": token}, headers=user_headers)
    assert response.status_code == 200
    assert response.json() == {"revoked": True}

    # Revoking again is not an error
    response = client.post(f"{API}/auth/logout", json={"refresh_token": token}, headers=user_headers)
    assert response.json() == {"revoked": True}

    response = client.post(f"{API}/auth/refresh-token", json={"refresh_token": token})
    assert response.status_code == 401


def test_logout_requires_auth(client, registered_user):
    response = client.post(
        f"{API}/auth/logout", json={"refresh_token": registered_user["refresh_token"]}
    )
    assert response.status_code == 401


def test_logout_all(client, registered_user, user_headers):
    credentials = {"email": registered_user["user"]["email"], "password": registered_user["password"]}
    second = client.post(f"{API}/auth/login", json=credentials).json()["refresh_token"]

    response = client.post(f"{API}/auth/logout-all", headers=user_headers)
    assert response.status_code == 200
    assert response.json() == {"revoked": 2}

    for token in (registered_user["refresh_token"], second):
        response = client.post(f"{API}/auth/refresh-token", json={"refresh_token": token})
        assert response.status_code == 401

    response = client.post(f"{API}/auth/logout-all", headers=user_headers)
    assert response.json() == {"revoked": 0}


def test_customer_cannot_use_admin_routes(client, user_headers):
    response = client.post(f"{API}/brands/", json={"name": unique("Brand")}, headers=user_headers)
    assert response.status_code == 403
    assert response.json()["code"] == "PERMISSION_DENIED"


def test_refresh_expired_token(client, registered_user):
    token = registered_user["refresh_token"]
    expire_refresh_token(token)

    response = client.post(f"{API}/auth/refresh-token", json={"refresh_token": token})
    assert response.status_code == 410
    assert response.json()["code"] == "REFRESH_TOKEN_EXPIRED"

    # Expired tokens are not consumed; they keep failing the same way
    response = client.post(f"{API}/auth/refresh-token", json={"refresh_token": token})
    assert response.status_code == 410
