# storefront/adapters/inbound/api/v1/endpoints/brand_endpoint.py

from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.application.use_cases.brand_use_cases import AsyncBrandService
from storefront.adapters.inbound.api.deps import get_session
from storefront.adapters.outbound.security.permissions import require_admin
from storefront.application.dtos.brand_dto import BrandCreate, BrandOutput, BrandUpdate

router = APIRouter()


@router.post(
    "/",
    response_model=BrandOutput,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
    summary="Create Brand - Admin only",
    responses={409: {"description": "A brand with this name already exists"}},
)
async def create_brand(data: BrandCreate, db: AsyncSession = Depends(get_session)):
    return await AsyncBrandService(db).create_brand(data)


@router.get("/", response_model=List[BrandOutput], summary="List Brands")
async def list_brands(
        name: Optional[str] = Query(None, description="Exact name match"),
        is_active: Optional[bool] = Query(None),
        include_inactive: bool = Query(False),
        db: AsyncSession = Depends(get_session),
):
    return await AsyncBrandService(db).list_brands(
        name=name, is_active=is_active, include_inactive=include_inactive
    )


@router.get("/with-products", response_model=List[BrandOutput], summary="Brands With Products")
async def get_brands_with_products(db: AsyncSession = Depends(get_session)):
    return await AsyncBrandService(db).get_brands_with_products()


@router.get(
    "/{brand_id}",
    response_model=BrandOutput,
    summary="Get Brand",
    responses={404: {"description": "Brand not found"}},
)
async def get_brand(brand_id: UUID, db: AsyncSession = Depends(get_session)):
    return await AsyncBrandService(db).get_brand(brand_id)


@router.patch(
    "/{brand_id}",
    response_model=BrandOutput,
    dependencies=[Depends(require_admin)],
    summary="Update Brand - Admin only",
    responses={
        404: {"description": "Brand not found"},
        409: {"description": "A brand with this name already exists"},
    }
)
async def update_brand(brand_id: UUID, data: BrandUpdate, db: AsyncSession = Depends(get_session)):
    return await AsyncBrandService(db).update_brand(brand_id, data)


@router.delete(
    "/{brand_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
    summary="Delete Brand - Admin only",
    responses={
        400: {"description": "Brand still has products"},
        404: {"description": "Brand not found"},
    }
)
async def delete_brand(brand_id: UUID, db: AsyncSession = Depends(get_session)):
    await AsyncBrandService(db).delete_brand(brand_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
