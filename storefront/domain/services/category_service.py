# storefront/domain/services/category_service.py

import logging
from typing import Optional, Set
from uuid import UUID

from storefront.application.ports.outbound import ICategoryHierarchyRepository
from storefront.domain.exceptions import (
    CycleDetectedException,
    InvalidOperationException,
)

logger = logging.getLogger(__name__)


class CategoryHierarchyValidator:
    """
    Guards the category parent-pointer tree against self-parenting and cycles.

    Must run before the new parent link is persisted: it reads the tree as
    it stands prior to the mutation.
    """

    def __init__(self, repository: ICategoryHierarchyRepository):
        self.repository = repository

    async def validate_reparent(self, category_id: UUID, proposed_parent_id: Optional[UUID]) -> None:
        """
        Validate moving ``category_id`` under ``proposed_parent_id``.

        Args:
            category_id: Category being updated
            proposed_parent_id: New parent, or None to make it a root

        Raises:
            InvalidOperationException: If the category would be its own parent
            CycleDetectedException: If the category would become its own ancestor
        """
        if proposed_parent_id is None:
            return

        if proposed_parent_id == category_id:
            raise InvalidOperationException(detail="Category cannot be its own parent")

        current = await self.repository.get_node(category_id)
        if current is not None and current.parent_id == proposed_parent_id:
            # Same parent, nothing changes
            return

        visited: Set[UUID] = set()
        node_id: Optional[UUID] = proposed_parent_id

        while node_id is not None:
            if node_id in visited or node_id == category_id:
                logger.warning(
                    f"Rejected reparent of category {category_id} under {proposed_parent_id}: cycle"
                )
                raise CycleDetectedException()

            visited.add(node_id)

            node = await self.repository.get_node(node_id)
            if node is None:
                break

            node_id = node.parent_id
