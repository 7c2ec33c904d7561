# storefront/adapters/outbound/persistence/models/brand_model.py

import uuid
from sqlalchemy import Column, Boolean, String, Text, DateTime, Uuid
from sqlalchemy.orm import relationship

from storefront.adapters.outbound.persistence.models.base_model import Base
from storefront.shared.utils.time import utcnow


class Brand(Base):
    """Product brand."""
    __tablename__ = "brands"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), unique=True, nullable=False, index=True)
    description = Column(Text, nullable=True)
    logo = Column(String(500), nullable=True)
    website = Column(String(500), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    products = relationship("Product", back_populates="brand")

    def __repr__(self) -> str:
        return f"<Brand(name={self.name}, active={self.is_active})>"
