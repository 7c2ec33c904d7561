# storefront/adapters/inbound/api/v1/endpoints/banner_endpoint.py

from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.application.use_cases.banner_use_cases import AsyncBannerService
from storefront.adapters.inbound.api.deps import get_session
from storefront.adapters.outbound.security.permissions import require_admin
from storefront.application.dtos.banner_dto import BannerCreate, BannerOutput, BannerUpdate
from storefront.domain.models.catalog_domain_model import BannerPosition, BannerType

router = APIRouter()


@router.get(
    "/",
    response_model=List[BannerOutput],
    summary="Active Banners",
    description="Active banners ordered by display order, then creation date.",
)
async def list_active_banners(db: AsyncSession = Depends(get_session)):
    return await AsyncBannerService(db).list_active()


@router.get("/position/{position}", response_model=List[BannerOutput], summary="Active Banners By Position")
async def list_banners_by_position(position: BannerPosition, db: AsyncSession = Depends(get_session)):
    return await AsyncBannerService(db).list_by_position(position)


@router.get("/type/{banner_type}", response_model=List[BannerOutput], summary="Active Banners By Type")
async def list_banners_by_type(banner_type: BannerType, db: AsyncSession = Depends(get_session)):
    return await AsyncBannerService(db).list_by_type(banner_type)


@router.get(
    "/promotions/active",
    response_model=List[BannerOutput],
    summary="Running Promotions",
    description="Active promotion banners whose start/end window contains the current time.",
)
async def list_active_promotions(db: AsyncSession = Depends(get_session)):
    return await AsyncBannerService(db).list_active_promotions()


@router.get(
    "/{banner_id}",
    response_model=BannerOutput,
    summary="Get Banner",
    responses={404: {"description": "Banner not found"}},
)
async def get_banner(banner_id: UUID, db: AsyncSession = Depends(get_session)):
    return await AsyncBannerService(db).get_banner(banner_id)


@router.post(
    "/",
    response_model=BannerOutput,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
    summary="Create Banner - Admin only",
    responses={400: {"description": "Unknown linked category or product"}},
)
async def create_banner(data: BannerCreate, db: AsyncSession = Depends(get_session)):
    return await AsyncBannerService(db).create_banner(data)


@router.patch(
    "/{banner_id}",
    response_model=BannerOutput,
    dependencies=[Depends(require_admin)],
    summary="Update Banner - Admin only",
    responses={
        400: {"description": "Invalid window or unknown linked item"},
        404: {"description": "Banner not found"},
    }
)
async def update_banner(banner_id: UUID, data: BannerUpdate, db: AsyncSession = Depends(get_session)):
    return await AsyncBannerService(db).update_banner(banner_id, data)


@router.delete(
    "/{banner_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
    summary="Delete Banner - Admin only",
)
async def delete_banner(banner_id: UUID, db: AsyncSession = Depends(get_session)):
    await AsyncBannerService(db).delete_banner(banner_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
