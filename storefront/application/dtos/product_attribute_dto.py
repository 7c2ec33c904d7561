# storefront/application/dtos/product_attribute_dto.py

from uuid import UUID
from datetime import datetime
from typing import List, Optional
from pydantic import Field, field_validator

from storefront.application.dtos.base_dto import CustomBaseModel
from storefront.shared.utils.input_validation import InputValidator


def _check_name(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    is_valid, error_msg = InputValidator.validate_name(v)
    if not is_valid:
        raise ValueError(error_msg)
    return InputValidator.sanitize_name(v)


class ProductAttributeCreate(CustomBaseModel):
    """
    DTO for creating an attribute such as Color or Size.
    """
    name: str = Field(..., description="Unique attribute name.")
    description: Optional[str] = Field(None, max_length=255)
    is_active: bool = True
    display_order: int = Field(0, ge=0)

    @field_validator("name")
    def validate_name(cls, v):
        return _check_name(v)


class ProductAttributeUpdate(CustomBaseModel):
    name: Optional[str] = None
    description: Optional[str] = Field(None, max_length=255)
    is_active: Optional[bool] = None
    display_order: Optional[int] = Field(None, ge=0)

    @field_validator("name")
    def validate_name(cls, v):
        return _check_name(v)


class AttributeValueCreate(CustomBaseModel):
    value: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=255)
    color_code: Optional[str] = Field(None, max_length=20, description="Swatch color, e.g. #FF0000.")
    display_order: int = Field(0, ge=0)


class AttributeValueOutput(CustomBaseModel):
    id: UUID
    attribute_id: UUID
    value: str
    description: Optional[str] = None
    color_code: Optional[str] = None
    display_order: int


class ProductAttributeOutput(CustomBaseModel):
    """
    Attribute with its allowed values.
    """
    id: UUID
    name: str
    description: Optional[str] = None
    is_active: bool
    display_order: int
    values: List[AttributeValueOutput] = Field(default_factory=list)
    created_at: datetime
    updated_at: Optional[datetime] = None
