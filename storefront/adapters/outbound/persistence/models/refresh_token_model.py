# storefront/adapters/outbound/persistence/models/refresh_token_model.py

"""
Refresh token model.

Stores the opaque refresh tokens handed to clients so they can be
rotated, revoked and eventually cleaned up.
"""

import uuid
from sqlalchemy import Column, String, DateTime, Boolean, ForeignKey, Uuid
from sqlalchemy.orm import relationship

from storefront.adapters.outbound.persistence.models.base_model import Base
from storefront.shared.utils.time import utcnow


class RefreshToken(Base):
    """
    Model for stored refresh tokens.

    Attributes:
        token: Opaque random token (hex)
        user_id: Owner of the token
        expires_at: When the token stops being accepted
        is_revoked: Set on logout or mass revocation
        is_used: Set when the token is rotated
    """
    __tablename__ = "refresh_tokens"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    token = Column(String(255), unique=True, nullable=False, index=True)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    expires_at = Column(DateTime, nullable=False, index=True)
    is_revoked = Column(Boolean, default=False, nullable=False)
    is_used = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    user = relationship("User", back_populates="refresh_tokens")

    def __repr__(self) -> str:
        return f"<RefreshToken(user_id={self.user_id}, used={self.is_used}, revoked={self.is_revoked})>"
