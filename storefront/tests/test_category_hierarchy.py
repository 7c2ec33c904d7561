from typing import Dict, Optional
from uuid import UUID, uuid4

import pytest

from storefront.application.ports.outbound import ICategoryHierarchyRepository
from storefront.domain.exceptions import CycleDetectedException, InvalidOperationException
from storefront.domain.models.category_domain_model import CategoryNode
from storefront.domain.services.category_service import CategoryHierarchyValidator


class InMemoryHierarchy(ICategoryHierarchyRepository):
    def __init__(self):
        self.parents: Dict[UUID, Optional[UUID]] = {}
        self.lookups = 0

    def add(self, parent: Optional[UUID] = None) -> UUID:
        node_id = uuid4()
        self.parents[node_id] = parent
        return node_id

    async def get_node(self, category_id: UUID) -> Optional[CategoryNode]:
        self.lookups += 1
        if category_id not in self.parents:
            return None
        return CategoryNode(id=category_id, parent_id=self.parents[category_id])


@pytest.fixture()
def tree():
    return InMemoryHierarchy()


@pytest.fixture()
def validator(tree):
    return CategoryHierarchyValidator(tree)


@pytest.fixture()
def electronics_tree(tree):
    electronics = tree.add()
    laptops = tree.add(electronics)
    gaming = tree.add(laptops)
    return electronics, laptops, gaming


async def test_moving_to_root_is_always_allowed(validator, tree, electronics_tree):
    _, _, gaming = electronics_tree

    await validator.validate_reparent(gaming, None)
    assert tree.lookups == 0


async def test_category_cannot_be_its_own_parent(validator, electronics_tree):
    electronics, _, _ = electronics_tree

    with pytest.raises(InvalidOperationException):
        await validator.validate_reparent(electronics, electronics)


async def test_ancestor_cannot_move_under_descendant(validator, electronics_tree):
    electronics, laptops, gaming = electronics_tree

    with pytest.raises(CycleDetectedException):
        await validator.validate_reparent(electronics, gaming)

    with pytest.raises(CycleDetectedException):
        await validator.validate_reparent(laptops, gaming)


async def test_descendant_can_move_up(validator, electronics_tree):
    electronics, _, gaming = electronics_tree

    await validator.validate_reparent(gaming, electronics)


async def test_move_to_unrelated_branch(validator, tree, electronics_tree):
    _, laptops, _ = electronics_tree
    home = tree.add()
    kitchen = tree.add(home)

    await validator.validate_reparent(laptops, kitchen)


async def test_same_parent_skips_walk(validator, tree, electronics_tree):
    _, laptops, gaming = electronics_tree

    await validator.validate_reparent(gaming, laptops)
    assert tree.lookups == 1


async def test_walk_stops_at_missing_node(validator, tree):
    category = tree.add()
    orphan_parent = uuid4()
    proposed = tree.add(orphan_parent)

    await validator.validate_reparent(category, proposed)


async def test_walk_terminates_on_corrupt_cycle(validator, tree):
    a = tree.add()
    b = tree.add(a)
    tree.parents[a] = b
    category = tree.add()

    with pytest.raises(CycleDetectedException):
        await validator.validate_reparent(category, a)
