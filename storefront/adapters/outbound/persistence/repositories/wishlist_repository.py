# storefront/adapters/outbound/persistence/repositories/wishlist_repository.py

from typing import List, Optional
from uuid import UUID
from sqlalchemy import delete, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from storefront.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from storefront.adapters.outbound.persistence.models import Wishlist, WishlistItem
from storefront.application.dtos.wishlist_dto import WishlistCreate, WishlistItemAdd, WishlistUpdate


class AsyncWishlistCRUD(AsyncCRUDBase[Wishlist, WishlistCreate, WishlistUpdate]):
    """
    Async CRUD repository for the Wishlist entity.

    Wishlists are always read through their owner and returned with
    their items, products and variants loaded.
    """

    @staticmethod
    def _owned(user_id: UUID, *criteria):
        return (
            select(Wishlist)
            .where(Wishlist.user_id == user_id, *criteria)
            .options(selectinload(Wishlist.items).selectinload(WishlistItem.product))
            .options(selectinload(Wishlist.items).selectinload(WishlistItem.variant))
            .execution_options(populate_existing=True)
        )

    async def list_for_user(self, db: AsyncSession, user_id: UUID) -> List[Wishlist]:
        """Newest first."""
        query = self._owned(user_id).order_by(Wishlist.created_at.desc())
        async with self._guard(db, f"listing wishlists of user {user_id}"):
            result = await db.execute(query)
            return list(result.scalars().all())

    async def get_for_user(self, db: AsyncSession, user_id: UUID, id: UUID) -> Optional[Wishlist]:
        async with self._guard(db, f"fetching wishlist {id}"):
            result = await db.execute(self._owned(user_id, Wishlist.id == id))
            return result.scalar_one_or_none()

    async def get_oldest_for_user(self, db: AsyncSession, user_id: UUID) -> Optional[Wishlist]:
        query = self._owned(user_id).order_by(Wishlist.created_at).limit(1)
        async with self._guard(db, f"fetching default wishlist of user {user_id}"):
            result = await db.execute(query)
            return result.scalar_one_or_none()

    async def clear(self, db: AsyncSession, wishlist_id: UUID) -> int:
        async with self._guard(db, f"clearing wishlist {wishlist_id}", write=True):
            result = await db.execute(delete(WishlistItem).where(WishlistItem.wishlist_id == wishlist_id))
            await db.commit()
        return result.rowcount


class AsyncWishlistItemCRUD(AsyncCRUDBase[WishlistItem, WishlistItemAdd, WishlistItemAdd]):
    """
    Async CRUD repository for wishlist items.
    """

    async def find_line(
            self, db: AsyncSession, wishlist_id: UUID, product_id: UUID, variant_id: Optional[UUID]
    ) -> Optional[WishlistItem]:
        variant_match = (
            WishlistItem.variant_id.is_(None) if variant_id is None else WishlistItem.variant_id == variant_id
        )
        query = select(WishlistItem).where(
            WishlistItem.wishlist_id == wishlist_id,
            WishlistItem.product_id == product_id,
            variant_match,
        )
        async with self._guard(db, "looking up wishlist item"):
            result = await db.execute(query)
            return result.scalar_one_or_none()

    async def move(self, db: AsyncSession, item_id: UUID, target_id: UUID) -> None:
        statement = (
            update(WishlistItem)
            .where(WishlistItem.id == item_id)
            .values(wishlist_id=target_id)
            .execution_options(synchronize_session=False)
        )
        async with self._guard(db, f"moving wishlist item {item_id}", write=True):
            await db.execute(statement)
            await db.commit()


# Public instances to be used by use cases
wishlist_repository = AsyncWishlistCRUD(Wishlist)
wishlist_item_repository = AsyncWishlistItemCRUD(WishlistItem)
