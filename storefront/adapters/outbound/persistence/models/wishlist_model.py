# storefront/adapters/outbound/persistence/models/wishlist_model.py

"""
Named wishlists owned by a user.
"""

import uuid
from decimal import Decimal
from sqlalchemy import (
    Column,
    String,
    DateTime,
    ForeignKey,
    Uuid,
)
from sqlalchemy.orm import relationship

from storefront.adapters.outbound.persistence.models.base_model import Base
from storefront.domain.services.pricing_service import available_stock, line_unit_price
from storefront.shared.utils.time import utcnow

DEFAULT_WISHLIST_NAME = "My Wishlist"


class Wishlist(Base):
    __tablename__ = "wishlists"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), default=DEFAULT_WISHLIST_NAME, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    items = relationship(
        "WishlistItem",
        back_populates="wishlist",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="WishlistItem.added_at",
    )

    def __repr__(self) -> str:
        return f"<Wishlist(name={self.name}, user_id={self.user_id})>"

    @property
    def total_items(self) -> int:
        return len(self.items)


class WishlistItem(Base):
    __tablename__ = "wishlist_items"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    wishlist_id = Column(Uuid, ForeignKey("wishlists.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Uuid, ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    variant_id = Column(Uuid, ForeignKey("product_variants.id", ondelete="CASCADE"), nullable=True)
    added_at = Column(DateTime, default=utcnow, nullable=False)

    wishlist = relationship("Wishlist", back_populates="items")
    product = relationship("Product")
    variant = relationship("ProductVariant")

    def __repr__(self) -> str:
        return f"<WishlistItem(product_id={self.product_id})>"

    @property
    def price(self) -> Decimal:
        return line_unit_price(self.product, self.variant)

    @property
    def in_stock(self) -> bool:
        return available_stock(self.product, self.variant) > 0
