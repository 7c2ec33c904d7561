# storefront/application/dtos/product_variant_dto.py

"""
DTOs for product variants and product images.
"""

from uuid import UUID
from decimal import Decimal
from datetime import datetime
from typing import List, Optional
from pydantic import Field, field_validator, model_validator

from storefront.application.dtos.base_dto import CustomBaseModel
from storefront.shared.utils.input_validation import InputValidator


class ProductImageCreate(CustomBaseModel):
    """
    DTO for attaching an image to a product or a variant.

    The first image of an owner becomes its default when
    ``is_default`` is not sent.
    """
    url: str = Field(..., max_length=500)
    alt: Optional[str] = Field(None, max_length=255)
    display_order: Optional[int] = Field(None, ge=0)
    is_default: Optional[bool] = None

    @field_validator("url")
    def validate_url(cls, v):
        is_valid, error_msg = InputValidator.validate_url(v)
        if not is_valid:
            raise ValueError(error_msg)
        return v


class ProductImageUpdate(CustomBaseModel):
    alt: Optional[str] = Field(None, max_length=255)
    display_order: Optional[int] = Field(None, ge=0)
    is_default: Optional[bool] = None


class ProductImageOutput(CustomBaseModel):
    id: UUID
    url: str
    alt: Optional[str] = None
    display_order: int
    is_default: bool
    product_id: Optional[UUID] = None
    variant_id: Optional[UUID] = None


class VariantAttributeValueInput(CustomBaseModel):
    """
    An attribute value for a variant; created under the attribute when
    it does not exist yet.
    """
    attribute_id: UUID
    value: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=255)
    color_code: Optional[str] = Field(None, max_length=20)


def _check_discount(price: Optional[Decimal], discount_price: Optional[Decimal]) -> None:
    if price is not None and discount_price is not None and discount_price > price:
        raise ValueError("discount_price cannot exceed price")


class ProductVariantCreate(CustomBaseModel):
    """
    DTO for adding a variant to a product.

    Without ``price`` the variant takes the product's price.
    """
    sku: str = Field(..., min_length=1, max_length=100)
    name: Optional[str] = Field(None, max_length=255)
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    discount_price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    quantity: int = Field(0, ge=0)
    is_active: bool = True
    weight: Optional[Decimal] = Field(None, ge=0)
    dimensions: Optional[str] = Field(None, max_length=100)
    attribute_values: List[VariantAttributeValueInput] = Field(default_factory=list)
    images: List[ProductImageCreate] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_discount(self):
        _check_discount(self.price, self.discount_price)
        return self


class ProductVariantUpdate(CustomBaseModel):
    """
    DTO for partially updating a variant.

    ``attribute_values`` replaces the whole set when sent.
    """
    sku: Optional[str] = Field(None, min_length=1, max_length=100)
    name: Optional[str] = Field(None, max_length=255)
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    discount_price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    quantity: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None
    weight: Optional[Decimal] = Field(None, ge=0)
    dimensions: Optional[str] = Field(None, max_length=100)
    attribute_values: Optional[List[VariantAttributeValueInput]] = None


class VariantAttributeValueOutput(CustomBaseModel):
    id: UUID
    attribute_id: UUID
    value: str
    color_code: Optional[str] = None


class ProductVariantOutput(CustomBaseModel):
    id: UUID
    product_id: UUID
    sku: str
    name: Optional[str] = None
    price: Optional[Decimal] = None
    discount_price: Optional[Decimal] = None
    quantity: int
    is_active: bool
    weight: Optional[Decimal] = None
    dimensions: Optional[str] = None
    attribute_values: List[VariantAttributeValueOutput] = Field(default_factory=list)
    attribute_display: str = ""
    images: List[ProductImageOutput] = Field(default_factory=list)
    created_at: datetime
    updated_at: Optional[datetime] = None
