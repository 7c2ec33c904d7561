# storefront/adapters/outbound/persistence/repositories/banner_repository.py

from datetime import datetime
from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from storefront.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from storefront.adapters.outbound.persistence.models import Banner
from storefront.application.dtos.banner_dto import BannerCreate, BannerUpdate
from storefront.domain.models.catalog_domain_model import BannerPosition, BannerType


class AsyncBannerCRUD(AsyncCRUDBase[Banner, BannerCreate, BannerUpdate]):
    """
    Async CRUD repository for the Banner entity.

    Public listings return active banners ordered by display order.
    """

    async def _list_active(self, db: AsyncSession, *criteria) -> List[Banner]:
        query = (
            select(Banner)
            .where(Banner.is_active.is_(True), *criteria)
            .order_by(Banner.display_order, Banner.created_at)
        )
        async with self._guard(db, "listing banners"):
            result = await db.execute(query)
            return list(result.scalars().all())

    async def get_active(self, db: AsyncSession) -> List[Banner]:
        return await self._list_active(db)

    async def get_by_position(self, db: AsyncSession, position: BannerPosition) -> List[Banner]:
        return await self._list_active(db, Banner.position == position)

    async def get_by_type(self, db: AsyncSession, banner_type: BannerType) -> List[Banner]:
        return await self._list_active(db, Banner.type == banner_type)

    async def get_active_promotions(self, db: AsyncSession, now: datetime) -> List[Banner]:
        """Active promotion banners whose start/end window contains ``now``."""
        return await self._list_active(
            db,
            Banner.type == BannerType.PROMOTION,
            Banner.start_date <= now,
            Banner.end_date >= now,
        )


# Public instance to be used by use cases
banner_repository = AsyncBannerCRUD(Banner)
