# storefront/application/ports/outbound.py

from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import List, Optional, Dict, Any
from uuid import UUID

from storefront.domain.models.category_domain_model import CategoryNode
from storefront.domain.models.refresh_token_domain_model import RefreshToken
from storefront.domain.models.user_domain_model import UserIdentity


class IRefreshTokenRepository(ABC):
    """Refresh token persistence interface."""

    @abstractmethod
    async def create(self, token: RefreshToken) -> RefreshToken:
        """Persist a new refresh token record."""
        pass

    @abstractmethod
    async def get_by_token(self, token: str) -> Optional[RefreshToken]:
        """Find a record by exact token match."""
        pass

    @abstractmethod
    async def list_by_user(self, user_id: UUID, revoked: Optional[bool] = None) -> List[RefreshToken]:
        """List records of a user, optionally filtered by revoked flag."""
        pass

    @abstractmethod
    async def mark_used(self, token: str) -> bool:
        """
        Mark a token used only if it is currently unused and unrevoked.

        Returns True when this call performed the transition.
        """
        pass

    @abstractmethod
    async def revoke(self, token: str) -> bool:
        """Revoke a single token. Returns whether a record matched."""
        pass

    @abstractmethod
    async def revoke_all_for_user(self, user_id: UUID) -> int:
        """Revoke every non-revoked token of a user in one update."""
        pass

    @abstractmethod
    async def delete_expired(self, before: datetime) -> int:
        """Delete records that expired before the given timestamp."""
        pass


class ICategoryHierarchyRepository(ABC):
    """Read access to the category parent-pointer tree."""

    @abstractmethod
    async def get_node(self, category_id: UUID) -> Optional[CategoryNode]:
        """Get the (id, parent_id) projection of a category."""
        pass


class IUserLookup(ABC):
    """User identity lookup."""

    @abstractmethod
    async def get_identity(self, user_id: UUID) -> Optional[UserIdentity]:
        """Get identity fields of a user, or None if it does not exist."""
        pass


class IAccessTokenIssuer(ABC):
    """Signed token handling interface."""

    @abstractmethod
    def sign(self, payload: Dict[str, Any], expires_delta: timedelta) -> str:
        """Sign a payload into a time-limited token."""
        pass

    @abstractmethod
    def verify(self, token: str) -> Dict[str, Any]:
        """Verify and decode a signed token."""
        pass
