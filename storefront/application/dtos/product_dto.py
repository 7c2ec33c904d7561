# storefront/application/dtos/product_dto.py

"""
DTOs for catalog products.
"""

from uuid import UUID
from decimal import Decimal
from datetime import datetime
from typing import List, Optional
from pydantic import Field, field_validator, model_validator

from storefront.domain.models.catalog_domain_model import ProductStatus
from storefront.application.dtos.base_dto import CustomBaseModel
from storefront.application.dtos.brand_dto import BrandOutput
from storefront.application.dtos.category_dto import CategoryOutput
from storefront.shared.utils.input_validation import InputValidator


class ProductCreate(CustomBaseModel):
    """
    DTO for creating a product.
    """
    name: str = Field(..., description="Unique product name.")
    description: Optional[str] = None
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    discount_price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    sku: Optional[str] = Field(None, max_length=100)
    quantity: int = Field(0, ge=0)
    status: ProductStatus = ProductStatus.DRAFT
    brand_id: Optional[UUID] = None
    category_ids: List[UUID] = Field(default_factory=list)

    @field_validator("name")
    def validate_name(cls, v):
        is_valid, error_msg = InputValidator.validate_name(v)
        if not is_valid:
            raise ValueError(error_msg)
        return InputValidator.sanitize_name(v)

    @model_validator(mode="after")
    def check_discount(self):
        if self.discount_price is not None and self.discount_price > self.price:
            raise ValueError("discount_price cannot exceed price")
        return self


class ProductUpdate(CustomBaseModel):
    """
    DTO for partially updating a product.

    ``category_ids`` replaces the whole category set when sent.
    """
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    discount_price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    sku: Optional[str] = Field(None, max_length=100)
    quantity: Optional[int] = Field(None, ge=0)
    status: Optional[ProductStatus] = None
    brand_id: Optional[UUID] = None
    category_ids: Optional[List[UUID]] = None

    @field_validator("name")
    def validate_name(cls, v):
        if v is None:
            return v
        is_valid, error_msg = InputValidator.validate_name(v)
        if not is_valid:
            raise ValueError(error_msg)
        return InputValidator.sanitize_name(v)


class ProductOutput(CustomBaseModel):
    """
    Product data returned by the API.
    """
    id: UUID
    name: str
    description: Optional[str] = None
    price: Decimal
    discount_price: Optional[Decimal] = None
    sku: Optional[str] = None
    quantity: int
    status: ProductStatus
    brand_id: Optional[UUID] = None
    brand: Optional[BrandOutput] = None
    categories: List[CategoryOutput] = Field(default_factory=list)
    created_at: datetime
    updated_at: Optional[datetime] = None
