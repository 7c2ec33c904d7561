# storefront/domain/models/refresh_token_domain_model.py

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID

from storefront.shared.utils.time import utcnow


@dataclass
class RefreshToken:
    """
    Domain model for a stored refresh token.

    A token is valid iff it is not expired, not revoked and not used.
    """
    token: str
    user_id: UUID
    expires_at: datetime
    is_revoked: bool = False
    is_used: bool = False
    id: Optional[UUID] = None
    created_at: Optional[datetime] = None

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return (now or utcnow()) >= self.expires_at

    def is_valid(self, now: Optional[datetime] = None) -> bool:
        return not self.is_expired(now) and not self.is_revoked and not self.is_used


@dataclass
class TokenPair:
    """Access + refresh credentials handed back to the caller."""
    access_token: str
    refresh_token: str
    expires_in: int
    user_id: UUID
    token_type: str = "bearer"
