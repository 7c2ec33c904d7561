# storefront/application/use_cases/brand_use_cases.py

import logging
from typing import List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.adapters.outbound.persistence.models import Brand
from storefront.adapters.outbound.persistence.repositories.brand_repository import brand_repository
from storefront.application.dtos.brand_dto import BrandCreate, BrandOutput, BrandUpdate
from storefront.domain.exceptions import (
    ResourceAlreadyExistsException,
    ResourceInUseException,
    ResourceNotFoundException,
)

logger = logging.getLogger(__name__)


class AsyncBrandService:
    """
    Service for brand operations.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session

    async def _get_or_404(self, brand_id: UUID) -> Brand:
        brand = await brand_repository.get(self.db, brand_id)
        if brand is None:
            raise ResourceNotFoundException(detail="Brand not found", resource_id=brand_id)
        return brand

    async def _ensure_name_available(self, name: str, exclude_id: Optional[UUID] = None) -> None:
        existing = await brand_repository.get_by_name(self.db, name)
        if existing is not None and existing.id != exclude_id:
            raise ResourceAlreadyExistsException(detail=f"Brand with name '{name}' already exists")

    async def create_brand(self, data: BrandCreate) -> BrandOutput:
        await self._ensure_name_available(data.name)
        brand = await brand_repository.create(self.db, obj_in=data)
        return BrandOutput.model_validate(brand)

    async def list_brands(
            self,
            *,
            name: Optional[str] = None,
            is_active: Optional[bool] = None,
            include_inactive: bool = False,
    ) -> List[BrandOutput]:
        brands = await brand_repository.list_filtered(
            self.db, name=name, is_active=is_active, include_inactive=include_inactive
        )
        return [BrandOutput.model_validate(b) for b in brands]

    async def get_brands_with_products(self) -> List[BrandOutput]:
        return [BrandOutput.model_validate(b) for b in await brand_repository.get_with_products(self.db)]

    async def get_brand(self, brand_id: UUID) -> BrandOutput:
        return BrandOutput.model_validate(await self._get_or_404(brand_id))

    async def update_brand(self, brand_id: UUID, data: BrandUpdate) -> BrandOutput:
        """
        Partially update a brand.

        Raises:
            ResourceNotFoundException: Unknown brand
            ResourceAlreadyExistsException: Name taken by another brand
        """
        brand = await self._get_or_404(brand_id)
        update_data = data.model_dump(exclude_unset=True)

        if update_data.get("name") and update_data["name"] != brand.name:
            await self._ensure_name_available(update_data["name"], exclude_id=brand_id)

        brand = await brand_repository.update(self.db, db_obj=brand, obj_in=update_data)
        return BrandOutput.model_validate(brand)

    async def delete_brand(self, brand_id: UUID) -> None:
        """
        Delete a brand that has no products.

        Raises:
            ResourceNotFoundException: Unknown brand
            ResourceInUseException: Products still reference the brand
        """
        await self._get_or_404(brand_id)
        if await brand_repository.count_products(self.db, brand_id):
            raise ResourceInUseException(
                detail="Cannot delete brand with products. Remove or reassign them first."
            )
        await brand_repository.remove(self.db, id=brand_id)
        logger.info(f"Brand {brand_id} deleted")
