# storefront/adapters/outbound/persistence/models/product_model.py

"""
Product model and its association with categories.
"""

import uuid
from sqlalchemy import (
    Column,
    Integer,
    Numeric,
    String,
    Text,
    DateTime,
    Enum,
    ForeignKey,
    Table,
    Uuid,
)
from sqlalchemy.orm import relationship

from storefront.adapters.outbound.persistence.models.base_model import Base
from storefront.domain.models.catalog_domain_model import ProductStatus
from storefront.shared.utils.time import utcnow


# Many-to-many association between products and categories
product_categories = Table(
    "product_categories",
    Base.metadata,
    Column("product_id", Uuid, ForeignKey("products.id", ondelete="CASCADE"), primary_key=True),
    Column("category_id", Uuid, ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True),
)


class Product(Base):
    """
    Catalog product.

    Attributes:
        name: Unique product name
        price: Regular price
        discount_price: Optional discounted price
        sku: Optional unique stock keeping unit
        quantity: Units in stock
        status: Publication status
        brand_id: Optional brand
        categories: Categories the product belongs to
        variants: Sellable SKUs of the product
        images: Product level images (variant images hang off the variant)
    """
    __tablename__ = "products"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), unique=True, nullable=False, index=True)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    discount_price = Column(Numeric(10, 2), nullable=True)
    sku = Column(String(100), unique=True, nullable=True)
    quantity = Column(Integer, default=0, nullable=False)
    status = Column(
        Enum(ProductStatus, name="product_status", values_callable=lambda e: [m.value for m in e]),
        default=ProductStatus.DRAFT,
        nullable=False,
    )
    brand_id = Column(Uuid, ForeignKey("brands.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    brand = relationship("Brand", back_populates="products")
    categories = relationship("Category", secondary=product_categories, back_populates="products")
    variants = relationship(
        "ProductVariant",
        back_populates="product",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ProductVariant.created_at",
    )
    images = relationship(
        "ProductImage",
        back_populates="product",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ProductImage.display_order",
    )

    def __repr__(self) -> str:
        return f"<Product(name={self.name}, status={self.status})>"
