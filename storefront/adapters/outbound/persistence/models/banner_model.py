# storefront/adapters/outbound/persistence/models/banner_model.py

"""
Promotional banner model and its associations with categories and products.
"""

import uuid
from datetime import datetime
from typing import Optional
from sqlalchemy import (
    Column,
    Boolean,
    Integer,
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
from storefront.domain.models.catalog_domain_model import BannerPosition, BannerType
from storefront.shared.utils.time import utcnow


banner_categories = Table(
    "banner_categories",
    Base.metadata,
    Column("banner_id", Uuid, ForeignKey("banners.id", ondelete="CASCADE"), primary_key=True),
    Column("category_id", Uuid, ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True),
)

banner_products = Table(
    "banner_products",
    Base.metadata,
    Column("banner_id", Uuid, ForeignKey("banners.id", ondelete="CASCADE"), primary_key=True),
    Column("product_id", Uuid, ForeignKey("products.id", ondelete="CASCADE"), primary_key=True),
)


class Banner(Base):
    """
    Promotional banner shown on storefront pages.

    A banner is shown only while active and inside its optional
    start/end window.
    """
    __tablename__ = "banners"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(255), nullable=False)
    subtitle = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    image_url = Column(String(500), nullable=False)
    mobile_image_url = Column(String(500), nullable=True)
    button_text = Column(String(100), nullable=True)
    button_link = Column(String(500), nullable=True)
    type = Column(
        Enum(BannerType, name="banner_type", values_callable=lambda e: [m.value for m in e]),
        default=BannerType.PROMOTION,
        nullable=False,
    )
    position = Column(
        Enum(BannerPosition, name="banner_position", values_callable=lambda e: [m.value for m in e]),
        default=BannerPosition.HOME_TOP,
        nullable=False,
    )
    display_order = Column(Integer, default=0, nullable=False)
    start_date = Column(DateTime, nullable=True)
    end_date = Column(DateTime, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    is_default = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    categories = relationship("Category", secondary=banner_categories, lazy="selectin")
    products = relationship("Product", secondary=banner_products, lazy="selectin")

    def __repr__(self) -> str:
        return f"<Banner(title={self.title}, type={self.type}, position={self.position})>"

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        if self.end_date is None:
            return False
        return (now or utcnow()) > self.end_date

    def is_active_now(self, now: Optional[datetime] = None) -> bool:
        """Active flag set and ``now`` inside the optional start/end window."""
        now = now or utcnow()
        if not self.is_active or self.is_expired(now):
            return False
        return self.start_date is None or self.start_date <= now
