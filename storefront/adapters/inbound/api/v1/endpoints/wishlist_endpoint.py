# storefront/adapters/inbound/api/v1/endpoints/wishlist_endpoint.py

from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.adapters.outbound.persistence.models import User
from storefront.adapters.inbound.api.deps import get_current_user, get_session
from storefront.application.dtos.wishlist_dto import (
    WishlistCreate,
    WishlistItemAdd,
    WishlistOutput,
    WishlistUpdate,
)
from storefront.application.use_cases.wishlist_use_cases import AsyncWishlistService

# Every route acts on the caller's own wishlists
router = APIRouter(responses={401: {"description": "Not authenticated"}})

NOT_FOUND = {404: {"description": "Wishlist not found"}}


@router.post(
    "/",
    response_model=WishlistOutput,
    status_code=status.HTTP_201_CREATED,
    summary="Create Wishlist",
)
async def create_wishlist(
        data: WishlistCreate,
        current_user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_session),
):
    return await AsyncWishlistService(db).create_wishlist(current_user.id, data)


@router.get("/", response_model=List[WishlistOutput], summary="List My Wishlists")
async def list_wishlists(current_user: User = Depends(get_current_user), db: AsyncSession = Depends(get_session)):
    return await AsyncWishlistService(db).list_wishlists(current_user.id)


@router.get(
    "/default",
    response_model=WishlistOutput,
    summary="Get Default Wishlist",
    description="The oldest wishlist of the user, created on first access.",
)
async def get_default_wishlist(
        current_user: User = Depends(get_current_user), db: AsyncSession = Depends(get_session)
):
    return await AsyncWishlistService(db).get_default_wishlist(current_user.id)


@router.get("/{wishlist_id}", response_model=WishlistOutput, summary="Get Wishlist", responses=NOT_FOUND)
async def get_wishlist(
        wishlist_id: UUID,
        current_user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_session),
):
    return await AsyncWishlistService(db).get_wishlist(current_user.id, wishlist_id)


@router.patch("/{wishlist_id}", response_model=WishlistOutput, summary="Rename Wishlist", responses=NOT_FOUND)
async def rename_wishlist(
        wishlist_id: UUID,
        data: WishlistUpdate,
        current_user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_session),
):
    return await AsyncWishlistService(db).rename_wishlist(current_user.id, wishlist_id, data)


@router.delete(
    "/{wishlist_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Wishlist",
    responses=NOT_FOUND,
)
async def delete_wishlist(
        wishlist_id: UUID,
        current_user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_session),
):
    await AsyncWishlistService(db).delete_wishlist(current_user.id, wishlist_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{wishlist_id}/items",
    response_model=WishlistOutput,
    status_code=status.HTTP_201_CREATED,
    summary="Add Wishlist Item",
    responses={
        404: {"description": "Unknown wishlist, product or variant"},
        409: {"description": "The item is already in the wishlist"},
    }
)
async def add_wishlist_item(
        wishlist_id: UUID,
        data: WishlistItemAdd,
        current_user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_session),
):
    return await AsyncWishlistService(db).add_item(current_user.id, wishlist_id, data)


@router.delete(
    "/{wishlist_id}/items/{item_id}",
    response_model=WishlistOutput,
    summary="Remove Wishlist Item",
    responses={404: {"description": "Unknown wishlist or item"}},
)
async def remove_wishlist_item(
        wishlist_id: UUID,
        item_id: UUID,
        current_user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_session),
):
    return await AsyncWishlistService(db).remove_item(current_user.id, wishlist_id, item_id)


@router.delete("/{wishlist_id}/items", response_model=WishlistOutput, summary="Clear Wishlist", responses=NOT_FOUND)
async def clear_wishlist(
        wishlist_id: UUID,
        current_user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_session),
):
    return await AsyncWishlistService(db).clear_wishlist(current_user.id, wishlist_id)


@router.post(
    "/{wishlist_id}/items/{item_id}/move/{target_id}",
    response_model=WishlistOutput,
    summary="Move Wishlist Item",
    description="""
    Moves an item to another wishlist of the user and returns the target.
    If the target already lists the same product and variant, the item is
    only removed from the source.
    """,
    responses={
        400: {"description": "Source and target are the same wishlist"},
        404: {"description": "Unknown wishlist or item"},
    }
)
async def move_wishlist_item(
        wishlist_id: UUID,
        item_id: UUID,
        target_id: UUID,
        current_user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_session),
):
    return await AsyncWishlistService(db).move_item(current_user.id, wishlist_id, item_id, target_id)
