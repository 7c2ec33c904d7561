# storefront/domain/models/category_domain_model.py

from dataclasses import dataclass
from typing import Optional
from uuid import UUID


@dataclass(frozen=True)
class CategoryNode:
    """Projection of a category sufficient to walk the parent chain."""
    id: UUID
    parent_id: Optional[UUID] = None
