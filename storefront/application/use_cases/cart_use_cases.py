# storefront/application/use_cases/cart_use_cases.py

"""
Shopping cart use cases.

A logged-in user has exactly one cart, created on first access. Guests
work on a cart addressed by its id (sent back by the client in the
X-Cart-Id header) until they log in and merge it into their own.
"""

import logging
from typing import Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.adapters.outbound.persistence.models import Cart, CartItem, User
from storefront.adapters.outbound.persistence.repositories.cart_repository import (
    cart_item_repository,
    cart_repository,
)
from storefront.application.dtos.cart_dto import CartItemAdd, CartItemUpdate, CartOutput
from storefront.application.use_cases.product_variant_use_cases import AsyncProductVariantService
from storefront.domain.exceptions import (
    InvalidInputException,
    ResourceAlreadyExistsException,
    ResourceNotFoundException,
)
from storefront.domain.services.pricing_service import ensure_in_stock

logger = logging.getLogger(__name__)


class AsyncCartService:
    """
    Service for carts and their lines.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.catalog = AsyncProductVariantService(db_session)

    async def _load(self, cart_id: UUID) -> Cart:
        cart = await cart_repository.get_with_items(self.db, cart_id)
        if cart is None:
            raise ResourceNotFoundException(detail="Cart not found", resource_id=cart_id)
        return cart

    async def _output(self, cart_id: UUID) -> CartOutput:
        return CartOutput.model_validate(await self._load(cart_id))

    @staticmethod
    def _line(cart: Cart, item_id: UUID) -> CartItem:
        for item in cart.items:
            if item.id == item_id:
                return item
        raise ResourceNotFoundException(detail="Cart item not found", resource_id=item_id)

    async def get_user_cart(self, user_id: UUID) -> Cart:
        """The user's cart, created when missing."""
        cart = await cart_repository.get_by_user(self.db, user_id)
        if cart is not None:
            return cart
        try:
            created = await cart_repository.create(self.db, obj_in={"user_id": user_id})
        except ResourceAlreadyExistsException:
            # a concurrent request created it first
            return await cart_repository.get_by_user(self.db, user_id)
        logger.info(f"Cart {created.id} created for user {user_id}")
        return await self._load(created.id)

    async def get_guest_cart(self, cart_id: UUID) -> Cart:
        """
        Raises:
            ResourceNotFoundException: No such cart, or the cart belongs to a user
        """
        cart = await self._load(cart_id)
        if not cart.is_guest:
            raise ResourceNotFoundException(detail="Cart not found", resource_id=cart_id)
        return cart

    async def create_guest_cart(self) -> Cart:
        created = await cart_repository.create(self.db, obj_in={"user_id": None})
        logger.info(f"Guest cart {created.id} created")
        return await self._load(created.id)

    async def resolve_cart(
            self, user: Optional[User], guest_cart_id: Optional[UUID], *, create: bool = False
    ) -> Cart:
        """
        Pick the cart a request works on: the user's cart when logged in,
        else the guest cart named by ``guest_cart_id``, else (with
        ``create``) a new guest cart.

        Raises:
            ResourceNotFoundException: No cart could be resolved
        """
        if user is not None:
            return await self.get_user_cart(user.id)
        if guest_cart_id is not None:
            return await self.get_guest_cart(guest_cart_id)
        if create:
            return await self.create_guest_cart()
        raise ResourceNotFoundException(detail="No cart found. Send the X-Cart-Id header or log in")

    async def view_cart(self, cart: Cart) -> CartOutput:
        return CartOutput.model_validate(cart)

    async def add_item(self, cart: Cart, data: CartItemAdd) -> CartOutput:
        """
        Put a product, or one of its variants, in the cart.

        A line for the same product and variant has its quantity raised
        instead of being duplicated. Stock is checked against the
        resulting quantity.

        Raises:
            ResourceNotFoundException: Unknown product, or variant of another product
            InvalidInputException: Inactive variant or not enough stock
        """
        product, variant = await self.catalog.get_line_target(data.product_id, data.variant_id)
        if variant is not None and not variant.is_active:
            raise InvalidInputException(fields={"variant_id": "variant is not available"})

        line = await cart_item_repository.find_line(self.db, cart.id, product.id, data.variant_id)
        requested = data.quantity + (line.quantity if line is not None else 0)
        ensure_in_stock(product, variant, requested)

        if line is not None:
            await cart_item_repository.update(self.db, db_obj=line, obj_in={"quantity": requested})
        else:
            await cart_item_repository.create(
                self.db,
                obj_in={
                    "cart_id": cart.id,
                    "product_id": product.id,
                    "variant_id": data.variant_id,
                    "quantity": data.quantity,
                },
            )
        return await self._output(cart.id)

    async def update_item(self, cart: Cart, item_id: UUID, data: CartItemUpdate) -> CartOutput:
        """
        Set the quantity of a line.

        Raises:
            ResourceNotFoundException: The line is not in this cart
            InvalidInputException: Not enough stock
        """
        item = self._line(cart, item_id)
        ensure_in_stock(item.product, item.variant, data.quantity)
        await cart_item_repository.update(self.db, db_obj=item, obj_in={"quantity": data.quantity})
        return await self._output(cart.id)

    async def remove_item(self, cart: Cart, item_id: UUID) -> CartOutput:
        self._line(cart, item_id)
        await cart_item_repository.remove(self.db, id=item_id)
        return await self._output(cart.id)

    async def clear_cart(self, cart: Cart) -> CartOutput:
        removed = await cart_repository.clear(self.db, cart.id)
        logger.info(f"Cart {cart.id} cleared ({removed} lines)")
        return await self._output(cart.id)

    async def merge_guest_cart(self, user: User, guest_cart_id: UUID) -> CartOutput:
        """
        Fold a guest cart into the user's cart and delete the guest cart.

        Raises:
            ResourceNotFoundException: Unknown guest cart
        """
        target = await self.get_user_cart(user.id)
        source = await self.get_guest_cart(guest_cart_id)
        await cart_repository.merge(self.db, source=source, target=target)
        return await self._output(target.id)
