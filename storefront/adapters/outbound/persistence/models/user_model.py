# storefront/adapters/outbound/persistence/models/user_model.py

"""
User model.

Users authenticate with email and password; their role drives the
admin-only catalog endpoints.
"""

import uuid
from sqlalchemy import (
    Column,
    Boolean,
    String,
    DateTime,
    Enum,
    Uuid,
)
from sqlalchemy.orm import relationship

from storefront.adapters.outbound.persistence.models.base_model import Base
from storefront.shared.utils.time import utcnow
from storefront.domain.models.user_domain_model import UserRole


class User(Base):
    """
    System user model.

    Attributes:
        id: Unique identifier (UUID)
        username: Unique handle
        email: Email used to log in
        password: Password hash
        full_name: Display name
        role: admin, customer or staff
        is_active: Whether the user may authenticate
        created_at: Creation timestamp
        updated_at: Last update timestamp
        refresh_tokens: Refresh tokens issued to the user
    """
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    username = Column(String(50), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)
    full_name = Column(String(255), nullable=False)
    role = Column(
        Enum(UserRole, name="user_role", values_callable=lambda e: [m.value for m in e]),
        default=UserRole.CUSTOMER,
        nullable=False,
    )
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    refresh_tokens = relationship(
        "RefreshToken",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<User(email={self.email}, role={self.role})>"

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
