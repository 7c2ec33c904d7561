# storefront/adapters/outbound/persistence/repositories/product_variant_repository.py

"""
Repository for product variants.
"""

from typing import Any, Dict, List, Optional
from uuid import UUID
from sqlalchemy import Select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from storefront.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from storefront.adapters.outbound.persistence.models import (
    ProductAttributeValue,
    ProductImage,
    ProductVariant,
)
from storefront.application.dtos.product_variant_dto import ProductVariantCreate, ProductVariantUpdate


class AsyncProductVariantCRUD(AsyncCRUDBase[ProductVariant, ProductVariantCreate, ProductVariantUpdate]):
    """
    Async CRUD repository for the ProductVariant entity.

    Variants are returned with attribute values (and their attribute)
    and images loaded.
    """

    @staticmethod
    def _with_relations(query: Select) -> Select:
        return query.options(
            selectinload(ProductVariant.attribute_values).selectinload(ProductAttributeValue.attribute),
            selectinload(ProductVariant.images),
        ).execution_options(populate_existing=True)

    async def get_with_relations(self, db: AsyncSession, id: UUID) -> Optional[ProductVariant]:
        query = self._with_relations(select(ProductVariant).where(ProductVariant.id == id))
        async with self._guard(db, f"fetching variant {id}"):
            result = await db.execute(query)
            return result.scalar_one_or_none()

    async def list_for_product(self, db: AsyncSession, product_id: UUID) -> List[ProductVariant]:
        query = self._with_relations(
            select(ProductVariant)
            .where(ProductVariant.product_id == product_id)
            .order_by(ProductVariant.created_at, ProductVariant.sku)
        )
        async with self._guard(db, f"listing variants of product {product_id}"):
            result = await db.execute(query)
            return list(result.scalars().all())

    async def get_by_sku(self, db: AsyncSession, sku: str) -> Optional[ProductVariant]:
        return await self.get_by_field(db, "sku", sku)

    async def save(
            self,
            db: AsyncSession,
            *,
            db_obj: Optional[ProductVariant],
            data: Dict[str, Any],
            attribute_values: Optional[List[ProductAttributeValue]] = None,
            images: Optional[List[ProductImage]] = None,
    ) -> ProductVariant:
        """
        Create (``db_obj`` None) or update a variant.

        ``attribute_values`` replaces the variant's values when given;
        ``images`` are only attached on creation.

        Raises:
            ResourceAlreadyExistsException: On a SKU collision
            DatabaseOperationException: On other database errors
        """
        async with self._guard(db, "saving variant", write=True):
            if db_obj is None:
                db_obj = ProductVariant(**data)
                db_obj.attribute_values = list(attribute_values or [])
                db_obj.images = list(images or [])
            else:
                await db.refresh(db_obj, attribute_names=["attribute_values"])
                for field, value in data.items():
                    setattr(db_obj, field, value)
                if attribute_values is not None:
                    db_obj.attribute_values = list(attribute_values)

            db.add(db_obj)
            await db.commit()

        self.logger.info(f"Variant {db_obj.sku} saved")
        return await self.get_with_relations(db, db_obj.id)


# Public instance to be used by use cases
product_variant_repository = AsyncProductVariantCRUD(ProductVariant)
