# storefront/adapters/outbound/persistence/repositories/cart_repository.py

"""
Repository for carts and cart lines.
"""

from typing import Optional
from pydantic import BaseModel
from uuid import UUID
from sqlalchemy import delete, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from storefront.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from storefront.adapters.outbound.persistence.models import Cart, CartItem
from storefront.application.dtos.cart_dto import CartItemAdd, CartItemUpdate


class AsyncCartCRUD(AsyncCRUDBase[Cart, BaseModel, BaseModel]):
    """
    Async CRUD repository for the Cart entity.

    Carts are returned with their lines, and each line's product and
    variant, loaded so prices can be computed outside the session.
    """

    async def _fetch_one(self, db: AsyncSession, action: str, *criteria) -> Optional[Cart]:
        query = (
            select(Cart)
            .where(*criteria)
            .options(selectinload(Cart.items).selectinload(CartItem.product))
            .options(selectinload(Cart.items).selectinload(CartItem.variant))
            .execution_options(populate_existing=True)
        )
        async with self._guard(db, action):
            result = await db.execute(query)
            return result.scalar_one_or_none()

    async def get_with_items(self, db: AsyncSession, id: UUID) -> Optional[Cart]:
        return await self._fetch_one(db, f"fetching cart {id}", Cart.id == id)

    async def get_by_user(self, db: AsyncSession, user_id: UUID) -> Optional[Cart]:
        return await self._fetch_one(db, f"fetching cart of user {user_id}", Cart.user_id == user_id)

    async def clear(self, db: AsyncSession, cart_id: UUID) -> int:
        async with self._guard(db, f"clearing cart {cart_id}", write=True):
            result = await db.execute(delete(CartItem).where(CartItem.cart_id == cart_id))
            await db.commit()
        return result.rowcount

    async def merge(self, db: AsyncSession, *, source: Cart, target: Cart) -> None:
        """
        Fold ``source`` lines into ``target`` and delete ``source``.

        Lines for the same product and variant add up; the others move
        over unchanged. Both carts must have their items loaded.
        """
        lines = {(item.product_id, item.variant_id): item for item in target.items}
        async with self._guard(db, f"merging cart {source.id} into {target.id}", write=True):
            for item in source.items:
                line = lines.get((item.product_id, item.variant_id))
                if line is not None:
                    line.quantity += item.quantity
                else:
                    await db.execute(
                        update(CartItem)
                        .where(CartItem.id == item.id)
                        .values(cart_id=target.id)
                        .execution_options(synchronize_session=False)
                    )
            await db.execute(
                delete(Cart).where(Cart.id == source.id).execution_options(synchronize_session=False)
            )
            await db.commit()
        db.expunge(source)
        self.logger.info(f"Cart {source.id} merged into {target.id}")


class AsyncCartItemCRUD(AsyncCRUDBase[CartItem, CartItemAdd, CartItemUpdate]):
    """
    Async CRUD repository for cart lines.
    """

    async def find_line(
            self, db: AsyncSession, cart_id: UUID, product_id: UUID, variant_id: Optional[UUID]
    ) -> Optional[CartItem]:
        """The line of ``cart_id`` holding this product and variant, if any."""
        variant_match = CartItem.variant_id.is_(None) if variant_id is None else CartItem.variant_id == variant_id
        query = select(CartItem).where(
            CartItem.cart_id == cart_id,
            CartItem.product_id == product_id,
            variant_match,
        )
        async with self._guard(db, "looking up cart line"):
            result = await db.execute(query)
            return result.scalar_one_or_none()


# Public instances to be used by use cases
cart_repository = AsyncCartCRUD(Cart)
cart_item_repository = AsyncCartItemCRUD(CartItem)
