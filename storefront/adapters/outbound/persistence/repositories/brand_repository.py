# storefront/adapters/outbound/persistence/repositories/brand_repository.py

from typing import List, Optional
from uuid import UUID
from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from storefront.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from storefront.adapters.outbound.persistence.models import Brand, Product
from storefront.application.dtos.brand_dto import BrandCreate, BrandUpdate


class AsyncBrandCRUD(AsyncCRUDBase[Brand, BrandCreate, BrandUpdate]):
    """
    Async CRUD repository for the Brand entity.
    """

    async def get_by_name(self, db: AsyncSession, name: str) -> Optional[Brand]:
        return await self.get_by_field(db, "name", name)

    async def list_filtered(
            self,
            db: AsyncSession,
            *,
            name: Optional[str] = None,
            is_active: Optional[bool] = None,
            include_inactive: bool = False,
    ) -> List[Brand]:
        """
        List brands ordered by name.

        Inactive brands are hidden unless ``include_inactive`` is set
        or ``is_active`` is explicitly False.
        """
        query = select(Brand)
        if name:
            query = query.where(Brand.name == name)
        if not include_inactive and is_active is not False:
            query = query.where(Brand.is_active.is_(True))
        elif is_active is not None:
            query = query.where(Brand.is_active == is_active)

        async with self._guard(db, "listing brands"):
            result = await db.execute(query.order_by(Brand.name))
            return list(result.scalars().all())

    async def get_with_products(self, db: AsyncSession) -> List[Brand]:
        """Active brands with at least one product."""
        has_products = select(Product.id).where(Product.brand_id == Brand.id).exists()
        query = select(Brand).where(Brand.is_active.is_(True), has_products).order_by(Brand.name)
        async with self._guard(db, "listing brands with products"):
            result = await db.execute(query)
            return list(result.scalars().all())

    async def count_products(self, db: AsyncSession, id: UUID) -> int:
        async with self._guard(db, f"counting products of brand {id}"):
            result = await db.execute(
                select(func.count()).select_from(Product).where(Product.brand_id == id)
            )
            return result.scalar_one()


# Public instance to be used by use cases
brand_repository = AsyncBrandCRUD(Brand)
