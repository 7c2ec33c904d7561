# storefront/application/use_cases/banner_use_cases.py

import logging
from typing import List
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.adapters.outbound.persistence.models import Banner
from storefront.adapters.outbound.persistence.repositories.banner_repository import banner_repository
from storefront.adapters.outbound.persistence.repositories.category_repository import category_repository
from storefront.adapters.outbound.persistence.repositories.product_repository import product_repository
from storefront.application.dtos.banner_dto import BannerCreate, BannerOutput, BannerUpdate
from storefront.domain.exceptions import InvalidInputException, ResourceNotFoundException
from storefront.domain.models.catalog_domain_model import BannerPosition, BannerType
from storefront.shared.utils.time import utcnow

logger = logging.getLogger(__name__)


class AsyncBannerService:
    """
    Service for promotional banners.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session

    async def _get_or_404(self, banner_id: UUID) -> Banner:
        banner = await banner_repository.get(self.db, banner_id)
        if banner is None:
            raise ResourceNotFoundException(detail="Banner not found", resource_id=banner_id)
        return banner

    async def _resolve_links(self, data: dict) -> dict:
        """Replace ``category_ids`` / ``product_ids`` with the linked entities."""
        if "category_ids" in data:
            ids = data.pop("category_ids") or []
            categories = await category_repository.get_many(self.db, ids)
            if len(categories) != len(set(ids)):
                raise InvalidInputException(fields={"category_ids": "one or more categories not found"})
            data["categories"] = categories

        if "product_ids" in data:
            ids = data.pop("product_ids") or []
            products = await product_repository.get_many(self.db, ids)
            if len(products) != len(set(ids)):
                raise InvalidInputException(fields={"product_ids": "one or more products not found"})
            data["products"] = products

        return data

    async def list_active(self) -> List[BannerOutput]:
        return [BannerOutput.model_validate(b) for b in await banner_repository.get_active(self.db)]

    async def list_by_position(self, position: BannerPosition) -> List[BannerOutput]:
        banners = await banner_repository.get_by_position(self.db, position)
        return [BannerOutput.model_validate(b) for b in banners]

    async def list_by_type(self, banner_type: BannerType) -> List[BannerOutput]:
        banners = await banner_repository.get_by_type(self.db, banner_type)
        return [BannerOutput.model_validate(b) for b in banners]

    async def list_active_promotions(self) -> List[BannerOutput]:
        banners = await banner_repository.get_active_promotions(self.db, utcnow())
        return [BannerOutput.model_validate(b) for b in banners]

    async def get_banner(self, banner_id: UUID) -> BannerOutput:
        return BannerOutput.model_validate(await self._get_or_404(banner_id))

    async def create_banner(self, data: BannerCreate) -> BannerOutput:
        banner_data = await self._resolve_links(data.model_dump())
        banner = await banner_repository.create(self.db, obj_in=banner_data)
        logger.info(f"Banner '{banner.title}' created")
        return BannerOutput.model_validate(banner)

    async def update_banner(self, banner_id: UUID, data: BannerUpdate) -> BannerOutput:
        banner = await self._get_or_404(banner_id)
        update_data = await self._resolve_links(data.model_dump(exclude_unset=True))

        start = update_data.get("start_date", banner.start_date)
        end = update_data.get("end_date", banner.end_date)
        if start and end and end < start:
            raise InvalidInputException(fields={"end_date": "must not be before start_date"})

        banner = await banner_repository.update(self.db, db_obj=banner, obj_in=update_data)
        return BannerOutput.model_validate(banner)

    async def delete_banner(self, banner_id: UUID) -> None:
        await banner_repository.remove(self.db, id=banner_id)
