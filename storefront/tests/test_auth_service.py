from datetime import timedelta
from uuid import uuid4

import pytest

from storefront.domain.models.user_domain_model import UserIdentity
from storefront.domain.services.auth_service import (
    AuthService,
    PasswordService,
    duration_to_seconds,
    parse_duration,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("15m", timedelta(minutes=15)),
        ("12h", timedelta(hours=12)),
        ("7d", timedelta(days=7)),
        (" 30m ", timedelta(minutes=30)),
    ],
)
def test_parse_duration(value, expected):
    assert parse_duration(value) == expected


@pytest.mark.parametrize("value", [None, "", "15", "m15", "15s", "1.5h", "abc"])
def test_parse_duration_rejects_invalid(value):
    assert parse_duration(value) is None


def test_duration_to_seconds_default():
    assert duration_to_seconds("2h") == 7200
    assert duration_to_seconds(None) == 900
    assert duration_to_seconds("bogus", default=60) == 60


def test_token_payload_claims():
    user = UserIdentity(id=uuid4(), email="jdoe@example.com", role="admin")

    payload = AuthService.create_token_payload(user, additional_claims={"scope": "store"})

    assert payload["sub"] == str(user.id)
    assert payload["email"] == "jdoe@example.com"
    assert payload["role"] == "admin"
    assert payload["type"] == "access"
    assert payload["scope"] == "store"
    assert "exp" not in payload
    assert payload["jti"] != AuthService.create_token_payload(user)["jti"]


@pytest.mark.parametrize(
    "password, strong",
    [
        ("secret123", True),
        ("a1b2c3", True),
        ("short1", True),
        ("abc12", False),
        ("onlyletters", False),
        ("12345678", False),
    ],
)
def test_password_strength(password, strong):
    assert PasswordService.verify_password_strength(password) is strong
