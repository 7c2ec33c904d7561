# storefront/application/use_cases/wishlist_use_cases.py

import logging
from typing import List
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.adapters.outbound.persistence.models import Wishlist, WishlistItem
from storefront.adapters.outbound.persistence.models.wishlist_model import DEFAULT_WISHLIST_NAME
from storefront.adapters.outbound.persistence.repositories.wishlist_repository import (
    wishlist_item_repository,
    wishlist_repository,
)
from storefront.application.dtos.wishlist_dto import (
    WishlistCreate,
    WishlistItemAdd,
    WishlistOutput,
    WishlistUpdate,
)
from storefront.application.use_cases.product_variant_use_cases import AsyncProductVariantService
from storefront.domain.exceptions import (
    InvalidOperationException,
    ResourceAlreadyExistsException,
    ResourceNotFoundException,
)

logger = logging.getLogger(__name__)


class AsyncWishlistService:
    """
    Service for user wishlists.

    Every operation takes the acting user's id; wishlists of other
    users are reported as not found.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.catalog = AsyncProductVariantService(db_session)

    async def _get_owned(self, user_id: UUID, wishlist_id: UUID) -> Wishlist:
        wishlist = await wishlist_repository.get_for_user(self.db, user_id, wishlist_id)
        if wishlist is None:
            raise ResourceNotFoundException(detail="Wishlist not found", resource_id=wishlist_id)
        return wishlist

    async def _output(self, user_id: UUID, wishlist_id: UUID) -> WishlistOutput:
        return WishlistOutput.model_validate(await self._get_owned(user_id, wishlist_id))

    @staticmethod
    def _item(wishlist: Wishlist, item_id: UUID) -> WishlistItem:
        for item in wishlist.items:
            if item.id == item_id:
                return item
        raise ResourceNotFoundException(detail="Wishlist item not found", resource_id=item_id)

    async def create_wishlist(self, user_id: UUID, data: WishlistCreate) -> WishlistOutput:
        wishlist = await wishlist_repository.create(
            self.db, obj_in={"user_id": user_id, "name": data.name or DEFAULT_WISHLIST_NAME}
        )
        return await self._output(user_id, wishlist.id)

    async def list_wishlists(self, user_id: UUID) -> List[WishlistOutput]:
        wishlists = await wishlist_repository.list_for_user(self.db, user_id)
        return [WishlistOutput.model_validate(w) for w in wishlists]

    async def get_default_wishlist(self, user_id: UUID) -> WishlistOutput:
        """The user's oldest wishlist, created when the user has none."""
        wishlist = await wishlist_repository.get_oldest_for_user(self.db, user_id)
        if wishlist is None:
            return await self.create_wishlist(user_id, WishlistCreate())
        return WishlistOutput.model_validate(wishlist)

    async def get_wishlist(self, user_id: UUID, wishlist_id: UUID) -> WishlistOutput:
        return await self._output(user_id, wishlist_id)

    async def rename_wishlist(self, user_id: UUID, wishlist_id: UUID, data: WishlistUpdate) -> WishlistOutput:
        wishlist = await self._get_owned(user_id, wishlist_id)
        await wishlist_repository.update(self.db, db_obj=wishlist, obj_in={"name": data.name})
        return await self._output(user_id, wishlist_id)

    async def delete_wishlist(self, user_id: UUID, wishlist_id: UUID) -> None:
        await self._get_owned(user_id, wishlist_id)
        await wishlist_repository.remove(self.db, id=wishlist_id)
        logger.info(f"Wishlist {wishlist_id} deleted")

    async def add_item(self, user_id: UUID, wishlist_id: UUID, data: WishlistItemAdd) -> WishlistOutput:
        """
        Raises:
            ResourceNotFoundException: Unknown wishlist, product, or variant of another product
            ResourceAlreadyExistsException: The product and variant are already listed
        """
        wishlist = await self._get_owned(user_id, wishlist_id)
        product, variant = await self.catalog.get_line_target(data.product_id, data.variant_id)

        if await wishlist_item_repository.find_line(self.db, wishlist.id, product.id, data.variant_id):
            raise ResourceAlreadyExistsException(detail="This item is already in your wishlist")

        await wishlist_item_repository.create(
            self.db,
            obj_in={"wishlist_id": wishlist.id, "product_id": product.id, "variant_id": data.variant_id},
        )
        return await self._output(user_id, wishlist_id)

    async def remove_item(self, user_id: UUID, wishlist_id: UUID, item_id: UUID) -> WishlistOutput:
        self._item(await self._get_owned(user_id, wishlist_id), item_id)
        await wishlist_item_repository.remove(self.db, id=item_id)
        return await self._output(user_id, wishlist_id)

    async def clear_wishlist(self, user_id: UUID, wishlist_id: UUID) -> WishlistOutput:
        await self._get_owned(user_id, wishlist_id)
        await wishlist_repository.clear(self.db, wishlist_id)
        return await self._output(user_id, wishlist_id)

    async def move_item(
            self, user_id: UUID, source_id: UUID, item_id: UUID, target_id: UUID
    ) -> WishlistOutput:
        """
        Move an item to another wishlist of the same user and return the
        target.

        When the target already lists the same product and variant, the
        item is dropped from the source instead, leaving one copy.

        Raises:
            ResourceNotFoundException: Unknown wishlist or item
            InvalidOperationException: Source and target are the same wishlist
        """
        if source_id == target_id:
            raise InvalidOperationException(detail="Source and target wishlist are the same")

        source = await self._get_owned(user_id, source_id)
        target = await self._get_owned(user_id, target_id)
        item = self._item(source, item_id)

        duplicate = await wishlist_item_repository.find_line(self.db, target.id, item.product_id, item.variant_id)
        if duplicate is not None:
            await wishlist_item_repository.remove(self.db, id=item_id)
        else:
            await wishlist_item_repository.move(self.db, item_id, target.id)
        return await self._output(user_id, target_id)
