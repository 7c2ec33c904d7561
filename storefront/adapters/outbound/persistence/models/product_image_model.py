# storefront/adapters/outbound/persistence/models/product_image_model.py

import uuid
from sqlalchemy import (
    Column,
    Boolean,
    Integer,
    String,
    DateTime,
    ForeignKey,
    Uuid,
)
from sqlalchemy.orm import relationship

from storefront.adapters.outbound.persistence.models.base_model import Base
from storefront.shared.utils.time import utcnow


class ProductImage(Base):
    """
    Image of a product or of one of its variants.

    Exactly one of ``product_id`` and ``variant_id`` is set. At most one
    image per owner is flagged ``is_default``.
    """
    __tablename__ = "product_images"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    url = Column(String(500), nullable=False)
    alt = Column(String(255), nullable=True)
    display_order = Column(Integer, default=0, nullable=False)
    is_default = Column(Boolean, default=False, nullable=False)
    product_id = Column(Uuid, ForeignKey("products.id", ondelete="CASCADE"), nullable=True, index=True)
    variant_id = Column(Uuid, ForeignKey("product_variants.id", ondelete="CASCADE"), nullable=True, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    product = relationship("Product", back_populates="images")
    variant = relationship("ProductVariant", back_populates="images")

    def __repr__(self) -> str:
        return f"<ProductImage(url={self.url}, default={self.is_default})>"
