# storefront/domain/services/auth_service.py

import re
import uuid
from datetime import timedelta
from typing import Optional, Dict, Any

from storefront.domain.models.user_domain_model import UserIdentity

DEFAULT_ACCESS_TOKEN_SECONDS = 900
DEFAULT_REFRESH_TOKEN_LIFETIME = timedelta(days=7)

_DURATION_PATTERN = re.compile(r"^\s*(\d+)\s*([mhd])\s*$")
_DURATION_UNITS = {
    "m": "minutes",
    "h": "hours",
    "d": "days",
}


def parse_duration(value: Optional[str]) -> Optional[timedelta]:
    """
    Parse a duration string with a unit suffix.

    Supported suffixes are ``m`` (minutes), ``h`` (hours) and ``d`` (days),
    e.g. ``"15m"``, ``"12h"``, ``"7d"``.

    Args:
        value: Duration string from configuration

    Returns:
        The parsed timedelta, or None if the value is absent or unparseable
    """
    if not value:
        return None

    match = _DURATION_PATTERN.match(str(value))
    if not match:
        return None

    amount, unit = match.groups()
    return timedelta(**{_DURATION_UNITS[unit]: int(amount)})


def duration_to_seconds(value: Optional[str], default: int = DEFAULT_ACCESS_TOKEN_SECONDS) -> int:
    """Convert a duration string to seconds, falling back to ``default``."""
    delta = parse_duration(value)
    if delta is None:
        return default
    return int(delta.total_seconds())


class AuthService:
    """
    Domain service for authentication-related business logic.
    """

    @staticmethod
    def create_token_payload(
            user: UserIdentity,
            token_type: str = "access",
            additional_claims: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Create an access token payload with standard claims.

        Expiration is added by the token issuer when signing.

        Args:
            user: Identity of the token owner
            token_type: Type of token
            additional_claims: Additional claims to include in token

        Returns:
            Dict with all token claims
        """
        payload = {
            "sub": str(user.id),
            "email": user.email,
            "role": user.role,
            "type": token_type,
            "jti": str(uuid.uuid4()),
        }

        if additional_claims:
            payload.update(additional_claims)

        return payload


class PasswordService:
    """
    Domain service for password-related operations.

    Hashing itself lives in the security adapter.
    """

    MIN_LENGTH = 6

    @classmethod
    def verify_password_strength(cls, password: str) -> bool:
        """
        Verify the strength of a password.

        Args:
            password: The password to verify

        Returns:
            True if password meets strength requirements
        """
        return (
                len(password) >= cls.MIN_LENGTH
                and any(c.isalpha() for c in password)
                and any(c.isdigit() for c in password)
        )
