# storefront/adapters/outbound/persistence/models/cart_model.py

"""
Shopping carts and their lines.

A cart without ``user_id`` is a guest cart, addressed by its id alone.
"""

import uuid
from decimal import Decimal
from sqlalchemy import (
    Column,
    Integer,
    DateTime,
    ForeignKey,
    Uuid,
)
from sqlalchemy.orm import relationship

from storefront.adapters.outbound.persistence.models.base_model import Base
from storefront.domain.services.pricing_service import line_unit_price, totals
from storefront.shared.utils.time import utcnow


class Cart(Base):
    """
    Attributes:
        user_id: Owner; None for guest carts. A user has at most one cart.
        items: Cart lines, oldest first
    """
    __tablename__ = "carts"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    items = relationship(
        "CartItem",
        back_populates="cart",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="CartItem.created_at",
    )

    def __repr__(self) -> str:
        return f"<Cart(id={self.id}, user_id={self.user_id})>"

    @property
    def is_guest(self) -> bool:
        return self.user_id is None

    @property
    def total_items(self) -> int:
        return totals((item.unit_price, item.quantity) for item in self.items)[0]

    @property
    def total_price(self) -> Decimal:
        return totals((item.unit_price, item.quantity) for item in self.items)[1]


class CartItem(Base):
    """
    One product (or product variant) line of a cart.
    """
    __tablename__ = "cart_items"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    cart_id = Column(Uuid, ForeignKey("carts.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Uuid, ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    variant_id = Column(Uuid, ForeignKey("product_variants.id", ondelete="CASCADE"), nullable=True)
    quantity = Column(Integer, default=1, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    cart = relationship("Cart", back_populates="items")
    product = relationship("Product")
    variant = relationship("ProductVariant")

    def __repr__(self) -> str:
        return f"<CartItem(product_id={self.product_id}, quantity={self.quantity})>"

    @property
    def unit_price(self) -> Decimal:
        return line_unit_price(self.product, self.variant)

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity
