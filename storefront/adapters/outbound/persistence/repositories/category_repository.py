# storefront/adapters/outbound/persistence/repositories/category_repository.py

"""
Repository for category operations.
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from storefront.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from storefront.adapters.outbound.persistence.models import Category, product_categories
from storefront.application.dtos.category_dto import CategoryCreate, CategoryUpdate
from storefront.application.ports.outbound import ICategoryHierarchyRepository
from storefront.domain.exceptions import DatabaseOperationException
from storefront.domain.models.category_domain_model import CategoryNode

CATEGORY_ORDER = (Category.display_order.asc(), Category.name.asc())


class AsyncCategoryCRUD(AsyncCRUDBase[Category, CategoryCreate, CategoryUpdate]):
    """
    Async CRUD repository for the Category entity.

    Listings are ordered by display order, then name.
    """

    async def _fetch(self, db: AsyncSession, query, action: str) -> List[Category]:
        async with self._guard(db, action):
            result = await db.execute(query.order_by(*CATEGORY_ORDER))
            return list(result.scalars().unique().all())

    async def get_with_relations(
            self,
            db: AsyncSession,
            id: UUID,
            *,
            include_children: bool = False,
            include_products: bool = False,
    ) -> Optional[Category]:
        """
        Get a category, eagerly loading the requested relationships.

        Args:
            db: Async database session
            id: Category ID
            include_children: Load direct children
            include_products: Load products

        Returns:
            Category or None
        """
        query = select(Category).where(Category.id == id)
        if include_children:
            query = query.options(selectinload(Category.children))
        if include_products:
            query = query.options(selectinload(Category.products))

        async with self._guard(db, f"fetching category {id}"):
            result = await db.execute(query)
            return result.scalar_one_or_none()

    async def get_by_name(self, db: AsyncSession, name: str) -> Optional[Category]:
        return await self.get_by_field(db, "name", name)

    async def list_filtered(
            self,
            db: AsyncSession,
            *,
            name: Optional[str] = None,
            parent_id: Optional[UUID] = None,
            is_active: Optional[bool] = None,
            include_inactive: bool = False,
            only_root: bool = False,
            include_children: bool = False,
    ) -> List[Category]:
        """
        List categories with the public listing filters.

        Inactive categories are hidden unless ``include_inactive`` is set
        or ``is_active`` is explicitly False. ``parent_id`` wins over
        ``only_root``.
        """
        query = select(Category)

        if name:
            query = query.where(Category.name == name)

        if parent_id is not None:
            query = query.where(Category.parent_id == parent_id)
        elif only_root:
            query = query.where(Category.parent_id.is_(None))

        if not include_inactive and is_active is not False:
            query = query.where(Category.is_active.is_(True))
        elif is_active is not None:
            query = query.where(Category.is_active == is_active)

        if include_children:
            query = query.options(selectinload(Category.children))

        return await self._fetch(db, query, "listing categories")

    async def get_roots(self, db: AsyncSession, *, include_children: bool = False) -> List[Category]:
        """Active categories without a parent."""
        query = select(Category).where(Category.parent_id.is_(None), Category.is_active.is_(True))
        if include_children:
            query = query.options(selectinload(Category.children))
        return await self._fetch(db, query, "listing root categories")

    async def get_with_parent(self, db: AsyncSession) -> List[Category]:
        """Active categories that have a parent."""
        query = (
            select(Category)
            .where(Category.parent_id.is_not(None), Category.is_active.is_(True))
            .options(selectinload(Category.parent))
        )
        return await self._fetch(db, query, "listing child categories")

    async def get_children(self, db: AsyncSession, parent_id: UUID) -> List[Category]:
        """Active direct children of a category."""
        query = select(Category).where(Category.parent_id == parent_id, Category.is_active.is_(True))
        return await self._fetch(db, query, "listing category children")

    async def get_with_products(self, db: AsyncSession) -> List[Category]:
        """Active categories that hold at least one product."""
        has_products = (
            select(product_categories.c.category_id)
            .where(product_categories.c.category_id == Category.id)
            .exists()
        )
        query = select(Category).where(Category.is_active.is_(True), has_products)
        return await self._fetch(db, query, "listing categories with products")

    async def get_all_active(self, db: AsyncSession) -> List[Category]:
        query = select(Category).where(Category.is_active.is_(True))
        return await self._fetch(db, query, "loading category tree")

    async def count_children(self, db: AsyncSession, id: UUID) -> int:
        return await self.count(db, parent_id=id)

    async def count_products(self, db: AsyncSession, id: UUID) -> int:
        async with self._guard(db, f"counting products of category {id}"):
            result = await db.execute(
                select(func.count())
                .select_from(product_categories)
                .where(product_categories.c.category_id == id)
            )
            return result.scalar_one()

    async def get_many(self, db: AsyncSession, ids: List[UUID]) -> List[Category]:
        if not ids:
            return []
        return await self._fetch(db, select(Category).where(Category.id.in_(ids)), "fetching categories")


class AsyncCategoryHierarchyRepository(ICategoryHierarchyRepository):
    """
    Parent-pointer reads for the hierarchy validator, bound to one session.

    Only the (id, parent_id) columns are selected.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_node(self, category_id: UUID) -> Optional[CategoryNode]:
        try:
            result = await self.db.execute(
                select(Category.id, Category.parent_id).where(Category.id == category_id)
            )
            row = result.first()
        except SQLAlchemyError as e:
            raise DatabaseOperationException(detail="Error reading category hierarchy", original_error=e)

        if row is None:
            return None
        return CategoryNode(id=row.id, parent_id=row.parent_id)


# Public instance to be used by use cases
category_repository = AsyncCategoryCRUD(Category)
