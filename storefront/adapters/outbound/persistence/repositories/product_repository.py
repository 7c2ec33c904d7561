# storefront/adapters/outbound/persistence/repositories/product_repository.py

"""
Repository for product operations.
"""

from typing import Any, Dict, List, Optional
from uuid import UUID
from sqlalchemy import Select, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from storefront.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from storefront.adapters.outbound.persistence.models import Category, Product
from storefront.application.dtos.product_dto import ProductCreate, ProductUpdate
from storefront.domain.models.catalog_domain_model import ProductStatus


class AsyncProductCRUD(AsyncCRUDBase[Product, ProductCreate, ProductUpdate]):
    """
    Async CRUD repository for the Product entity.

    Products are always returned with brand and categories loaded.
    """

    @staticmethod
    def _with_relations(query: Select) -> Select:
        return query.options(selectinload(Product.brand), selectinload(Product.categories))

    def build_list_query(
            self,
            *,
            category_id: Optional[UUID] = None,
            brand_id: Optional[UUID] = None,
            status: Optional[ProductStatus] = None,
            q: Optional[str] = None,
    ) -> Select:
        """
        Build the filtered listing query, newest first.

        The query is executed by the caller (pagination).
        """
        query = select(Product)
        if category_id is not None:
            query = query.where(Product.categories.any(Category.id == category_id))
        if brand_id is not None:
            query = query.where(Product.brand_id == brand_id)
        if status is not None:
            query = query.where(Product.status == status)
        if q:
            pattern = f"%{q}%"
            query = query.where(or_(Product.name.ilike(pattern), Product.description.ilike(pattern)))
        return self._with_relations(query).order_by(Product.created_at.desc(), Product.name)

    async def get_with_relations(self, db: AsyncSession, id: UUID) -> Optional[Product]:
        query = self._with_relations(select(Product).where(Product.id == id))
        async with self._guard(db, f"fetching product {id}"):
            result = await db.execute(query.execution_options(populate_existing=True))
            return result.scalar_one_or_none()

    async def get_by_name(self, db: AsyncSession, name: str) -> Optional[Product]:
        return await self.get_by_field(db, "name", name)

    async def get_many(self, db: AsyncSession, ids: List[UUID]) -> List[Product]:
        if not ids:
            return []
        async with self._guard(db, "fetching products"):
            result = await db.execute(select(Product).where(Product.id.in_(ids)))
            return list(result.scalars().all())

    async def save_with_categories(
            self,
            db: AsyncSession,
            *,
            db_obj: Optional[Product],
            data: Dict[str, Any],
            categories: Optional[List[Category]] = None,
    ) -> Product:
        """
        Create (``db_obj`` None) or update a product and optionally
        replace its categories.

        Raises:
            ResourceAlreadyExistsException: On a name or SKU collision
            DatabaseOperationException: On other database errors
        """
        async with self._guard(db, "saving product", write=True):
            if db_obj is None:
                db_obj = Product(**data)
                db_obj.categories = list(categories or [])
            else:
                # Load the collection before replacing it
                await db.refresh(db_obj, attribute_names=["categories"])
                for field, value in data.items():
                    setattr(db_obj, field, value)
                if categories is not None:
                    db_obj.categories = list(categories)

            db.add(db_obj)
            await db.commit()

        self.logger.info(f"Product {db_obj.id} saved")
        return await self.get_with_relations(db, db_obj.id)


# Public instance to be used by use cases
product_repository = AsyncProductCRUD(Product)
