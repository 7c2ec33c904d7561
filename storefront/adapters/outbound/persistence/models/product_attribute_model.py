# storefront/adapters/outbound/persistence/models/product_attribute_model.py

"""
Product attributes (Color, Size, ...) and their allowed values.
"""

import uuid
from sqlalchemy import (
    Column,
    Boolean,
    Integer,
    String,
    DateTime,
    ForeignKey,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import relationship

from storefront.adapters.outbound.persistence.models.base_model import Base
from storefront.adapters.outbound.persistence.models.product_variant_model import (
    product_variant_attribute_values,
)
from storefront.shared.utils.time import utcnow


class ProductAttribute(Base):
    __tablename__ = "product_attributes"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(100), unique=True, nullable=False, index=True)
    description = Column(String(255), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    display_order = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    values = relationship(
        "ProductAttributeValue",
        back_populates="attribute",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ProductAttributeValue.display_order",
    )

    def __repr__(self) -> str:
        return f"<ProductAttribute(name={self.name})>"


class ProductAttributeValue(Base):
    """
    One allowed value of an attribute, optionally with a color swatch.
    """
    __tablename__ = "product_attribute_values"
    __table_args__ = (UniqueConstraint("attribute_id", "value", name="uq_attribute_value"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    attribute_id = Column(
        Uuid, ForeignKey("product_attributes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    value = Column(String(100), nullable=False)
    description = Column(String(255), nullable=True)
    color_code = Column(String(20), nullable=True)
    display_order = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    attribute = relationship("ProductAttribute", back_populates="values")
    variants = relationship(
        "ProductVariant",
        secondary=product_variant_attribute_values,
        back_populates="attribute_values",
    )

    def __repr__(self) -> str:
        return f"<ProductAttributeValue(value={self.value})>"
