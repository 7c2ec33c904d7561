# storefront/adapters/outbound/persistence/models/category_model.py

"""
Hierarchical category model.

Categories form a tree through the self-referencing ``parent_id``;
the parent-link graph must stay acyclic (see CategoryHierarchyValidator).
"""

import uuid
from sqlalchemy import (
    Column,
    Boolean,
    Integer,
    String,
    Text,
    DateTime,
    ForeignKey,
    Uuid,
)
from sqlalchemy.orm import relationship

from storefront.adapters.outbound.persistence.models.base_model import Base
from storefront.shared.utils.time import utcnow
from storefront.adapters.outbound.persistence.models.product_model import product_categories


class Category(Base):
    """
    Product category.

    Attributes:
        id: Unique identifier (UUID)
        name: Unique category name
        description: Optional description
        image: Optional image URL
        display_order: Sort key among siblings
        is_active: Inactive categories are hidden from public listings
        parent_id: Parent category, None for roots
        parent: Parent category
        children: Direct child categories
        products: Products in this category
    """
    __tablename__ = "categories"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), unique=True, nullable=False, index=True)
    description = Column(Text, nullable=True)
    image = Column(String(500), nullable=True)
    display_order = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    parent_id = Column(Uuid, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    parent = relationship("Category", remote_side=[id], back_populates="children")
    children = relationship("Category", back_populates="parent")
    products = relationship("Product", secondary=product_categories, back_populates="categories")

    def __repr__(self) -> str:
        return f"<Category(name={self.name}, parent_id={self.parent_id})>"
