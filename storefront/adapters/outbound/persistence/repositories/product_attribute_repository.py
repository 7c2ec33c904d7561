# storefront/adapters/outbound/persistence/repositories/product_attribute_repository.py

from typing import List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from storefront.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from storefront.adapters.outbound.persistence.models import ProductAttribute, ProductAttributeValue
from storefront.application.dtos.product_attribute_dto import (
    AttributeValueCreate,
    ProductAttributeCreate,
    ProductAttributeUpdate,
)


class AsyncProductAttributeCRUD(AsyncCRUDBase[ProductAttribute, ProductAttributeCreate, ProductAttributeUpdate]):
    """
    Async CRUD repository for product attributes.

    Attributes are always returned with their values loaded.
    """

    async def list_with_values(self, db: AsyncSession) -> List[ProductAttribute]:
        query = (
            select(ProductAttribute)
            .options(selectinload(ProductAttribute.values))
            .order_by(ProductAttribute.display_order, ProductAttribute.name)
        )
        async with self._guard(db, "listing product attributes"):
            result = await db.execute(query)
            return list(result.scalars().all())

    async def get_with_values(self, db: AsyncSession, id: UUID) -> Optional[ProductAttribute]:
        query = (
            select(ProductAttribute)
            .where(ProductAttribute.id == id)
            .options(selectinload(ProductAttribute.values))
            .execution_options(populate_existing=True)
        )
        async with self._guard(db, f"fetching product attribute {id}"):
            result = await db.execute(query)
            return result.scalar_one_or_none()

    async def get_by_name(self, db: AsyncSession, name: str) -> Optional[ProductAttribute]:
        return await self.get_by_field(db, "name", name)


class AsyncProductAttributeValueCRUD(AsyncCRUDBase[ProductAttributeValue, AttributeValueCreate, AttributeValueCreate]):
    """
    Async CRUD repository for attribute values.
    """

    async def find(self, db: AsyncSession, attribute_id: UUID, value: str) -> Optional[ProductAttributeValue]:
        query = select(ProductAttributeValue).where(
            ProductAttributeValue.attribute_id == attribute_id,
            ProductAttributeValue.value == value,
        )
        async with self._guard(db, "looking up attribute value"):
            result = await db.execute(query)
            return result.scalar_one_or_none()


# Public instances to be used by use cases
product_attribute_repository = AsyncProductAttributeCRUD(ProductAttribute)
attribute_value_repository = AsyncProductAttributeValueCRUD(ProductAttributeValue)
