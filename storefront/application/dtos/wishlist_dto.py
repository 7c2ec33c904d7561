# storefront/application/dtos/wishlist_dto.py

from uuid import UUID
from decimal import Decimal
from datetime import datetime
from typing import List, Optional
from pydantic import Field, field_validator

from storefront.application.dtos.base_dto import CustomBaseModel
from storefront.application.dtos.cart_dto import LineProductSummary, LineVariantSummary


def _check_name(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("Wishlist name cannot be empty")
    return v


class WishlistCreate(CustomBaseModel):
    name: Optional[str] = Field(None, max_length=100, description="Defaults to 'My Wishlist'.")

    @field_validator("name")
    def validate_name(cls, v):
        return _check_name(v)


class WishlistUpdate(CustomBaseModel):
    name: str = Field(..., max_length=100)

    @field_validator("name")
    def validate_name(cls, v):
        return _check_name(v)


class WishlistItemAdd(CustomBaseModel):
    product_id: UUID
    variant_id: Optional[UUID] = None


class WishlistItemOutput(CustomBaseModel):
    id: UUID
    product_id: UUID
    variant_id: Optional[UUID] = None
    product: LineProductSummary
    variant: Optional[LineVariantSummary] = None
    price: Decimal
    in_stock: bool
    added_at: datetime


class WishlistOutput(CustomBaseModel):
    id: UUID
    user_id: UUID
    name: str
    items: List[WishlistItemOutput] = Field(default_factory=list)
    total_items: int
    created_at: datetime
    updated_at: Optional[datetime] = None
