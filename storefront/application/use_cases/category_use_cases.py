# storefront/application/use_cases/category_use_cases.py

"""
Service for category management.

Creation, listing, nested tree, re-parenting (guarded by
CategoryHierarchyValidator) and deletion of categories.
"""

import logging
from collections import defaultdict
from typing import Dict, List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.adapters.outbound.persistence.models import Category
from storefront.adapters.outbound.persistence.repositories.category_repository import (
    AsyncCategoryHierarchyRepository,
    category_repository,
)
from storefront.application.dtos.category_dto import (
    CategoryCreate,
    CategoryOutput,
    CategoryTreeNode,
    CategoryUpdate,
    CategoryWithChildrenOutput,
    CategoryWithParentOutput,
)
from storefront.domain.exceptions import (
    ResourceAlreadyExistsException,
    ResourceInUseException,
    ResourceNotFoundException,
)
from storefront.domain.services.category_service import CategoryHierarchyValidator

logger = logging.getLogger(__name__)


class AsyncCategoryService:
    """
    Service for category operations.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.hierarchy = CategoryHierarchyValidator(AsyncCategoryHierarchyRepository(db_session))

    async def _get_or_404(self, category_id: UUID, **relations) -> Category:
        category = await category_repository.get_with_relations(self.db, category_id, **relations)
        if category is None:
            raise ResourceNotFoundException(detail="Category not found", resource_id=category_id)
        return category

    async def _ensure_name_available(self, name: str, exclude_id: Optional[UUID] = None) -> None:
        existing = await category_repository.get_by_name(self.db, name)
        if existing is not None and existing.id != exclude_id:
            raise ResourceAlreadyExistsException(detail=f"Category with name '{name}' already exists")

    async def _ensure_parent_exists(self, parent_id: UUID) -> None:
        if not await category_repository.exists(self.db, id=parent_id):
            raise ResourceNotFoundException(detail="Parent category not found", resource_id=parent_id)

    async def create_category(self, data: CategoryCreate) -> CategoryOutput:
        """
        Create a category.

        Raises:
            ResourceAlreadyExistsException: If the name is taken
            ResourceNotFoundException: If the parent does not exist
        """
        await self._ensure_name_available(data.name)
        if data.parent_id is not None:
            await self._ensure_parent_exists(data.parent_id)

        category = await category_repository.create(self.db, obj_in=data)
        return CategoryOutput.model_validate(category)

    async def list_categories(
            self,
            *,
            name: Optional[str] = None,
            parent_id: Optional[UUID] = None,
            is_active: Optional[bool] = None,
            include_inactive: bool = False,
            only_root: bool = False,
            include_children: bool = False,
    ) -> List[CategoryOutput]:
        categories = await category_repository.list_filtered(
            self.db,
            name=name,
            parent_id=parent_id,
            is_active=is_active,
            include_inactive=include_inactive,
            only_root=only_root,
            include_children=include_children,
        )
        output = CategoryWithChildrenOutput if include_children else CategoryOutput
        return [output.model_validate(c) for c in categories]

    async def get_category(self, category_id: UUID, include_children: bool = False) -> CategoryOutput:
        category = await self._get_or_404(category_id, include_children=include_children)
        if include_children:
            return CategoryWithChildrenOutput.model_validate(category)
        return CategoryOutput.model_validate(category)

    async def get_root_categories(self) -> List[CategoryOutput]:
        return [CategoryOutput.model_validate(c) for c in await category_repository.get_roots(self.db)]

    async def get_categories_with_parent(self) -> List[CategoryWithParentOutput]:
        categories = await category_repository.get_with_parent(self.db)
        return [CategoryWithParentOutput.model_validate(c) for c in categories]

    async def get_categories_with_products(self) -> List[CategoryOutput]:
        categories = await category_repository.get_with_products(self.db)
        return [CategoryOutput.model_validate(c) for c in categories]

    async def get_children(self, parent_id: UUID) -> List[CategoryOutput]:
        """
        Active direct children of a category.

        Raises:
            ResourceNotFoundException: If the parent does not exist
        """
        await self._ensure_parent_exists(parent_id)
        children = await category_repository.get_children(self.db, parent_id)
        return [CategoryOutput.model_validate(c) for c in children]

    async def get_category_tree(self) -> List[CategoryTreeNode]:
        """
        Nested tree of active categories.

        Built from one query; an inactive category hides its whole subtree.
        """
        categories = await category_repository.get_all_active(self.db)

        children_of: Dict[Optional[UUID], List[Category]] = defaultdict(list)
        for category in categories:
            children_of[category.parent_id].append(category)

        def build(category: Category) -> CategoryTreeNode:
            return CategoryTreeNode(
                **CategoryOutput.model_validate(category).model_dump(),
                children=[build(child) for child in children_of.get(category.id, [])],
            )

        return [build(root) for root in children_of.get(None, [])]

    async def update_category(self, category_id: UUID, data: CategoryUpdate) -> CategoryOutput:
        """
        Partially update a category.

        When ``parent_id`` is sent and differs from the current parent, the
        new parent must exist and the move must keep the hierarchy acyclic.

        Raises:
            ResourceNotFoundException: Unknown category or parent
            ResourceAlreadyExistsException: Name taken by another category
            InvalidOperationException: Category set as its own parent
            CycleDetectedException: Move would create a cycle
        """
        category = await self._get_or_404(category_id)
        update_data = data.model_dump(exclude_unset=True)

        if update_data.get("name") and update_data["name"] != category.name:
            await self._ensure_name_available(update_data["name"], exclude_id=category_id)

        if "parent_id" in update_data:
            new_parent_id = update_data["parent_id"]
            if new_parent_id is not None and new_parent_id != category.parent_id:
                if new_parent_id != category_id:
                    await self._ensure_parent_exists(new_parent_id)
            # Runs against the tree as stored, before the new link is written
            await self.hierarchy.validate_reparent(category_id, new_parent_id)

        category = await category_repository.update(self.db, db_obj=category, obj_in=update_data)
        logger.info(f"Category {category_id} updated")
        return CategoryOutput.model_validate(category)

    async def delete_category(self, category_id: UUID) -> None:
        """
        Delete a category without children or products.

        Raises:
            ResourceNotFoundException: Unknown category
            ResourceInUseException: The category still has children or products
        """
        await self._get_or_404(category_id)

        if await category_repository.count_children(self.db, category_id):
            raise ResourceInUseException(
                detail="Cannot delete category with children. Delete or reassign them first."
            )
        if await category_repository.count_products(self.db, category_id):
            raise ResourceInUseException(
                detail="Cannot delete category with products. Remove or reassign them first."
            )

        await category_repository.remove(self.db, id=category_id)
