# storefront/adapters/inbound/api/v1/endpoints/product_endpoint.py

from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query, Response, status
from fastapi_pagination import Page, Params
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.application.use_cases.product_use_cases import AsyncProductService
from storefront.adapters.inbound.api.deps import get_session
from storefront.adapters.outbound.security.permissions import require_admin
from storefront.application.dtos.product_dto import ProductCreate, ProductOutput, ProductUpdate
from storefront.domain.models.catalog_domain_model import ProductStatus
from storefront.shared.utils.pagination import pagination_params

router = APIRouter()


@router.post(
    "/",
    response_model=ProductOutput,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
    summary="Create Product - Admin only",
    responses={
        400: {"description": "Unknown brand or category, or discount above price"},
        409: {"description": "A product with this name already exists"},
    }
)
async def create_product(data: ProductCreate, db: AsyncSession = Depends(get_session)):
    return await AsyncProductService(db).create_product(data)


@router.get(
    "/",
    response_model=Page[ProductOutput],
    summary="List Products - Paginated",
    description="""
    Returns a page of products, newest first.

    Filters:
    - `category_id`: products linked to the category
    - `brand_id`: products of the brand
    - `status`: draft, published or archived
    - `q`: case-insensitive search on name and description
    """,
)
async def list_products(
        params: Params = Depends(pagination_params),
        category_id: Optional[UUID] = Query(None),
        brand_id: Optional[UUID] = Query(None),
        product_status: Optional[ProductStatus] = Query(None, alias="status"),
        q: Optional[str] = Query(None, min_length=1),
        db: AsyncSession = Depends(get_session),
):
    return await AsyncProductService(db).list_products(
        params,
        category_id=category_id,
        brand_id=brand_id,
        status=product_status,
        q=q,
    )


@router.get(
    "/{product_id}",
    response_model=ProductOutput,
    summary="Get Product",
    responses={404: {"description": "Product not found"}},
)
async def get_product(product_id: UUID, db: AsyncSession = Depends(get_session)):
    return await AsyncProductService(db).get_product(product_id)


@router.patch(
    "/{product_id}",
    response_model=ProductOutput,
    dependencies=[Depends(require_admin)],
    summary="Update Product - Admin only",
    responses={
        400: {"description": "Unknown brand or category, or discount above price"},
        404: {"description": "Product not found"},
        409: {"description": "A product with this name already exists"},
    }
)
async def update_product(product_id: UUID, data: ProductUpdate, db: AsyncSession = Depends(get_session)):
    return await AsyncProductService(db).update_product(product_id, data)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
    summary="Delete Product - Admin only",
    responses={404: {"description": "Product not found"}},
)
async def delete_product(product_id: UUID, db: AsyncSession = Depends(get_session)):
    await AsyncProductService(db).delete_product(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
