# storefront/application/dtos/banner_dto.py

"""
DTOs for promotional banners.
"""

from uuid import UUID
from datetime import datetime
from typing import List, Optional
from pydantic import Field, field_validator, model_validator

from storefront.domain.models.catalog_domain_model import BannerPosition, BannerType
from storefront.application.dtos.base_dto import CustomBaseModel
from storefront.shared.utils.time import to_naive_utc


class _BannerWindowMixin(CustomBaseModel):

    @field_validator("start_date", "end_date", check_fields=False)
    def normalize_dates(cls, v):
        return to_naive_utc(v)

    @model_validator(mode="after")
    def check_window(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class BannerCreate(_BannerWindowMixin):
    """
    DTO for creating a banner.

    ``category_ids`` and ``product_ids`` link the banner to catalog items.
    """
    title: str = Field(..., min_length=1, max_length=255)
    subtitle: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    image_url: str = Field(..., max_length=500, description="Desktop image URL.")
    mobile_image_url: Optional[str] = Field(None, max_length=500)
    button_text: Optional[str] = Field(None, max_length=100)
    button_link: Optional[str] = Field(None, max_length=500)
    type: BannerType = BannerType.PROMOTION
    position: BannerPosition = BannerPosition.HOME_TOP
    display_order: int = Field(0, ge=0)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    is_active: bool = True
    is_default: bool = False
    category_ids: List[UUID] = Field(default_factory=list)
    product_ids: List[UUID] = Field(default_factory=list)


class BannerUpdate(_BannerWindowMixin):
    """DTO for partially updating a banner."""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    subtitle: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    image_url: Optional[str] = Field(None, max_length=500)
    mobile_image_url: Optional[str] = Field(None, max_length=500)
    button_text: Optional[str] = Field(None, max_length=100)
    button_link: Optional[str] = Field(None, max_length=500)
    type: Optional[BannerType] = None
    position: Optional[BannerPosition] = None
    display_order: Optional[int] = Field(None, ge=0)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    is_active: Optional[bool] = None
    is_default: Optional[bool] = None
    category_ids: Optional[List[UUID]] = None
    product_ids: Optional[List[UUID]] = None


class BannerItemRef(CustomBaseModel):
    id: UUID
    name: str


class BannerOutput(CustomBaseModel):
    """
    Banner data returned by the API.
    """
    id: UUID
    title: str
    subtitle: Optional[str] = None
    description: Optional[str] = None
    image_url: str
    mobile_image_url: Optional[str] = None
    button_text: Optional[str] = None
    button_link: Optional[str] = None
    type: BannerType
    position: BannerPosition
    display_order: int
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    is_active: bool
    is_default: bool
    categories: List[BannerItemRef] = Field(default_factory=list)
    products: List[BannerItemRef] = Field(default_factory=list)
    created_at: datetime
    updated_at: Optional[datetime] = None
