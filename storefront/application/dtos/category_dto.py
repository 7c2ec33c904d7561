# storefront/application/dtos/category_dto.py

"""
DTOs for category data.
"""

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


class CategoryCreate(CustomBaseModel):
    """
    DTO for creating a category.
    """
    name: str = Field(..., description="Unique category name.")
    description: Optional[str] = Field(None, description="Category description.")
    image: Optional[str] = Field(None, max_length=500, description="Image URL.")
    display_order: int = Field(0, ge=0, description="Sort key among siblings.")
    is_active: bool = Field(True, description="Whether the category is publicly listed.")
    parent_id: Optional[UUID] = Field(None, description="Parent category, omitted for a root.")

    @field_validator("name")
    def validate_name(cls, v):
        return _check_name(v)


class CategoryUpdate(CustomBaseModel):
    """
    DTO for partially updating a category.

    Only fields sent by the client are applied; an explicit
    ``"parent_id": null`` moves the category to the root.
    """
    name: Optional[str] = Field(None, description="Unique category name.")
    description: Optional[str] = Field(None, description="Category description.")
    image: Optional[str] = Field(None, max_length=500, description="Image URL.")
    display_order: Optional[int] = Field(None, ge=0, description="Sort key among siblings.")
    is_active: Optional[bool] = Field(None, description="Whether the category is publicly listed.")
    parent_id: Optional[UUID] = Field(None, description="New parent category, null for root.")

    @field_validator("name")
    def validate_name(cls, v):
        return _check_name(v)


class CategoryOutput(CustomBaseModel):
    """
    Category data returned by the API.
    """
    id: UUID = Field(..., description="Unique identifier of the category.")
    name: str
    description: Optional[str] = None
    image: Optional[str] = None
    display_order: int
    is_active: bool
    parent_id: Optional[UUID] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class CategoryWithChildrenOutput(CategoryOutput):
    """Category with its direct children."""
    children: List[CategoryOutput] = Field(default_factory=list)


class CategoryWithParentOutput(CategoryOutput):
    """Category with its parent."""
    parent: Optional[CategoryOutput] = None


class CategoryTreeNode(CategoryOutput):
    """Node of the nested category tree."""
    children: List["CategoryTreeNode"] = Field(default_factory=list)


CategoryTreeNode.model_rebuild()
