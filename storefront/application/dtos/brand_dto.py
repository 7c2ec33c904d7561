# storefront/application/dtos/brand_dto.py

from uuid import UUID
from datetime import datetime
from typing import Optional
from pydantic import Field, field_validator

from storefront.application.dtos.base_dto import CustomBaseModel
from storefront.shared.utils.input_validation import InputValidator


def _check_url(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    is_valid, error_msg = InputValidator.validate_url(v)
    if not is_valid:
        raise ValueError(error_msg)
    return v


class BrandCreate(CustomBaseModel):
    """
    DTO for creating a brand.
    """
    name: str = Field(..., description="Unique brand name.")
    description: Optional[str] = Field(None, description="Brand description.")
    logo: Optional[str] = Field(None, description="Logo URL.")
    website: Optional[str] = Field(None, description="Brand website.")
    is_active: bool = Field(True, description="Whether the brand is publicly listed.")

    @field_validator("name")
    def validate_name(cls, v):
        is_valid, error_msg = InputValidator.validate_name(v)
        if not is_valid:
            raise ValueError(error_msg)
        return InputValidator.sanitize_name(v)

    @field_validator("logo", "website")
    def validate_urls(cls, v):
        return _check_url(v)


class BrandUpdate(CustomBaseModel):
    """
    DTO for partially updating a brand.
    """
    name: Optional[str] = None
    description: Optional[str] = None
    logo: Optional[str] = None
    website: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("name")
    def validate_name(cls, v):
        if v is None:
            return v
        is_valid, error_msg = InputValidator.validate_name(v)
        if not is_valid:
            raise ValueError(error_msg)
        return InputValidator.sanitize_name(v)

    @field_validator("logo", "website")
    def validate_urls(cls, v):
        return _check_url(v)


class BrandOutput(CustomBaseModel):
    """
    Brand data returned by the API.
    """
    id: UUID
    name: str
    description: Optional[str] = None
    logo: Optional[str] = None
    website: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None
