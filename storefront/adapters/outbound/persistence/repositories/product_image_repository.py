# storefront/adapters/outbound/persistence/repositories/product_image_repository.py

from typing import List, Optional
from uuid import UUID
from sqlalchemy import func, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from storefront.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from storefront.adapters.outbound.persistence.models import ProductImage
from storefront.application.dtos.product_variant_dto import ProductImageCreate, ProductImageUpdate


def _owned_by(product_id: Optional[UUID], variant_id: Optional[UUID]):
    if variant_id is not None:
        return ProductImage.variant_id == variant_id
    return ProductImage.product_id == product_id


class AsyncProductImageCRUD(AsyncCRUDBase[ProductImage, ProductImageCreate, ProductImageUpdate]):
    """
    Async CRUD repository for product and variant images.

    An image belongs either to a product or to a variant; the owner
    helpers take one of ``product_id`` and ``variant_id``.
    """

    async def list_for_owner(
            self, db: AsyncSession, *, product_id: Optional[UUID] = None, variant_id: Optional[UUID] = None
    ) -> List[ProductImage]:
        query = (
            select(ProductImage)
            .where(_owned_by(product_id, variant_id))
            .order_by(ProductImage.display_order, ProductImage.created_at)
        )
        async with self._guard(db, "listing images"):
            result = await db.execute(query)
            return list(result.scalars().all())

    async def count_for_owner(
            self, db: AsyncSession, *, product_id: Optional[UUID] = None, variant_id: Optional[UUID] = None
    ) -> int:
        query = select(func.count()).select_from(ProductImage).where(_owned_by(product_id, variant_id))
        async with self._guard(db, "counting images"):
            result = await db.execute(query)
            return result.scalar_one()

    async def clear_default(
            self,
            db: AsyncSession,
            *,
            product_id: Optional[UUID] = None,
            variant_id: Optional[UUID] = None,
            keep_id: Optional[UUID] = None,
    ) -> None:
        """Unflag every default image of the owner except ``keep_id``."""
        statement = (
            update(ProductImage)
            .where(_owned_by(product_id, variant_id), ProductImage.is_default.is_(True))
            .values(is_default=False)
        )
        if keep_id is not None:
            statement = statement.where(ProductImage.id != keep_id)
        async with self._guard(db, "clearing default image", write=True):
            await db.execute(statement.execution_options(synchronize_session="fetch"))
            await db.commit()


# Public instance to be used by use cases
product_image_repository = AsyncProductImageCRUD(ProductImage)
