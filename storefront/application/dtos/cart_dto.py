# storefront/application/dtos/cart_dto.py

from uuid import UUID
from decimal import Decimal
from datetime import datetime
from typing import List, Optional
from pydantic import Field

from storefront.application.dtos.base_dto import CustomBaseModel


class CartItemAdd(CustomBaseModel):
    """
    DTO for putting a product (or one of its variants) in the cart.

    Adding a line that is already in the cart raises its quantity.
    """
    product_id: UUID
    variant_id: Optional[UUID] = None
    quantity: int = Field(1, ge=1)


class CartItemUpdate(CustomBaseModel):
    quantity: int = Field(..., ge=1)


class CartMerge(CustomBaseModel):
    guest_cart_id: UUID = Field(..., description="Id of the guest cart to fold into the user's cart.")


class LineProductSummary(CustomBaseModel):
    id: UUID
    name: str
    price: Decimal
    discount_price: Optional[Decimal] = None
    quantity: int


class LineVariantSummary(CustomBaseModel):
    id: UUID
    sku: str
    name: Optional[str] = None
    price: Optional[Decimal] = None
    discount_price: Optional[Decimal] = None
    quantity: int


class CartItemOutput(CustomBaseModel):
    id: UUID
    product_id: UUID
    variant_id: Optional[UUID] = None
    quantity: int
    product: LineProductSummary
    variant: Optional[LineVariantSummary] = None
    unit_price: Decimal
    subtotal: Decimal
    created_at: datetime


class CartOutput(CustomBaseModel):
    """
    Cart with its lines and totals.

    ``total_items`` counts units, not lines.
    """
    id: UUID
    user_id: Optional[UUID] = None
    items: List[CartItemOutput] = Field(default_factory=list)
    total_items: int
    total_price: Decimal
    created_at: datetime
    updated_at: Optional[datetime] = None
