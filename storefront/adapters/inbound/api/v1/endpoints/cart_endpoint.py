# storefront/adapters/inbound/api/v1/endpoints/cart_endpoint.py

"""
Cart endpoints.

Logged-in users always work on their own cart. Guests send the id of
their cart in the ``X-Cart-Id`` header; ``GET /carts`` and
``POST /carts/items`` without it start a new guest cart, whose id is
returned in the body.
"""

from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.adapters.outbound.persistence.models import User
from storefront.adapters.inbound.api.deps import get_current_user, get_optional_user, get_session
from storefront.application.dtos.cart_dto import CartItemAdd, CartItemUpdate, CartMerge, CartOutput
from storefront.application.use_cases.cart_use_cases import AsyncCartService

router = APIRouter()


def guest_cart_id(
        x_cart_id: Optional[UUID] = Header(
            None, alias="X-Cart-Id", description="Guest cart id; ignored for logged-in users."
        ),
) -> Optional[UUID]:
    return x_cart_id


NO_CART = {"description": "No cart: missing X-Cart-Id for a guest, or unknown cart"}


@router.get(
    "/",
    response_model=CartOutput,
    summary="Get Cart",
    description="The user's cart, the guest cart named by X-Cart-Id, or a new guest cart.",
    responses={404: {"description": "Unknown guest cart"}},
)
async def get_cart(
        user: Optional[User] = Depends(get_optional_user),
        cart_id: Optional[UUID] = Depends(guest_cart_id),
        db: AsyncSession = Depends(get_session),
):
    service = AsyncCartService(db)
    cart = await service.resolve_cart(user, cart_id, create=True)
    return await service.view_cart(cart)


@router.post(
    "/items",
    response_model=CartOutput,
    summary="Add To Cart",
    description="""
    Adds a product (optionally one of its variants) to the cart. Adding a
    line that is already in the cart raises its quantity. Stock is checked
    against the resulting quantity.
    """,
    responses={
        400: {"description": "Not enough stock or inactive variant"},
        404: {"description": "Unknown cart, product or variant"},
    }
)
async def add_to_cart(
        data: CartItemAdd,
        user: Optional[User] = Depends(get_optional_user),
        cart_id: Optional[UUID] = Depends(guest_cart_id),
        db: AsyncSession = Depends(get_session),
):
    service = AsyncCartService(db)
    cart = await service.resolve_cart(user, cart_id, create=True)
    return await service.add_item(cart, data)


@router.patch(
    "/items/{item_id}",
    response_model=CartOutput,
    summary="Update Cart Item",
    responses={
        400: {"description": "Not enough stock"},
        404: NO_CART,
    }
)
async def update_cart_item(
        item_id: UUID,
        data: CartItemUpdate,
        user: Optional[User] = Depends(get_optional_user),
        cart_id: Optional[UUID] = Depends(guest_cart_id),
        db: AsyncSession = Depends(get_session),
):
    service = AsyncCartService(db)
    cart = await service.resolve_cart(user, cart_id)
    return await service.update_item(cart, item_id, data)


@router.delete(
    "/items/{item_id}",
    response_model=CartOutput,
    summary="Remove Cart Item",
    responses={404: NO_CART},
)
async def remove_cart_item(
        item_id: UUID,
        user: Optional[User] = Depends(get_optional_user),
        cart_id: Optional[UUID] = Depends(guest_cart_id),
        db: AsyncSession = Depends(get_session),
):
    service = AsyncCartService(db)
    cart = await service.resolve_cart(user, cart_id)
    return await service.remove_item(cart, item_id)


@router.delete(
    "/",
    response_model=CartOutput,
    summary="Clear Cart",
    responses={404: NO_CART},
)
async def clear_cart(
        user: Optional[User] = Depends(get_optional_user),
        cart_id: Optional[UUID] = Depends(guest_cart_id),
        db: AsyncSession = Depends(get_session),
):
    service = AsyncCartService(db)
    cart = await service.resolve_cart(user, cart_id)
    return await service.clear_cart(cart)


@router.post(
    "/merge",
    response_model=CartOutput,
    summary="Merge Guest Cart - Logged in user",
    description="Moves the guest cart's lines into the user's cart and deletes the guest cart.",
    responses={
        401: {"description": "Not authenticated"},
        404: {"description": "Unknown guest cart"},
    }
)
async def merge_guest_cart(
        data: CartMerge,
        current_user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_session),
):
    return await AsyncCartService(db).merge_guest_cart(current_user, data.guest_cart_id)
