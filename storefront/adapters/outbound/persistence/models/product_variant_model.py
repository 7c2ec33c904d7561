# storefront/adapters/outbound/persistence/models/product_variant_model.py

"""
Product variants (a sellable SKU of a product) and their attribute values.
"""

import uuid
from sqlalchemy import (
    Column,
    Boolean,
    Integer,
    Numeric,
    String,
    DateTime,
    ForeignKey,
    Table,
    Uuid,
)
from sqlalchemy.orm import relationship

from storefront.adapters.outbound.persistence.models.base_model import Base
from storefront.shared.utils.time import utcnow


product_variant_attribute_values = Table(
    "product_variant_attribute_values",
    Base.metadata,
    Column("variant_id", Uuid, ForeignKey("product_variants.id", ondelete="CASCADE"), primary_key=True),
    Column(
        "attribute_value_id",
        Uuid,
        ForeignKey("product_attribute_values.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class ProductVariant(Base):
    """
    A concrete SKU of a product, e.g. "T-shirt, Red, M".

    Attributes:
        sku: Unique stock keeping unit
        price: Variant price; the product price applies when empty
        discount_price: Optional discounted price
        quantity: Units in stock
        attribute_values: Values describing the variant (Color: Red, ...)
        images: Images specific to the variant
    """
    __tablename__ = "product_variants"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    product_id = Column(Uuid, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    sku = Column(String(100), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=True)
    price = Column(Numeric(10, 2), nullable=True)
    discount_price = Column(Numeric(10, 2), nullable=True)
    quantity = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    weight = Column(Numeric(10, 3), nullable=True)
    dimensions = Column(String(100), nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    product = relationship("Product", back_populates="variants")
    attribute_values = relationship(
        "ProductAttributeValue",
        secondary=product_variant_attribute_values,
        back_populates="variants",
    )
    images = relationship(
        "ProductImage",
        back_populates="variant",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ProductImage.display_order",
    )

    def __repr__(self) -> str:
        return f"<ProductVariant(sku={self.sku})>"

    @property
    def attribute_display(self) -> str:
        """Readable summary such as ``Color: Red, Size: M``."""
        return ", ".join(f"{av.attribute.name}: {av.value}" for av in self.attribute_values)
