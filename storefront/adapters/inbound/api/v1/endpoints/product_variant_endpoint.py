# storefront/adapters/inbound/api/v1/endpoints/product_variant_endpoint.py

"""
Variants and images of a product, mounted under /products/{product_id}.
"""

from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.application.use_cases.product_image_use_cases import AsyncProductImageService
from storefront.application.use_cases.product_variant_use_cases import AsyncProductVariantService
from storefront.adapters.inbound.api.deps import get_session
from storefront.adapters.outbound.security.permissions import require_admin
from storefront.application.dtos.product_variant_dto import (
    ProductImageCreate,
    ProductImageOutput,
    ProductImageUpdate,
    ProductVariantCreate,
    ProductVariantOutput,
    ProductVariantUpdate,
)

router = APIRouter()


# ─── VARIANTS ─────────────────────────────────────────────────────────────────

@router.post(
    "/{product_id}/variants",
    response_model=ProductVariantOutput,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
    summary="Create Variant - Admin only",
    description="""
    Adds a SKU to the product. Attribute values are matched by
    `attribute_id` and `value`, and created under the attribute when new.
    Without `price` the variant takes the product's price; the first
    image becomes the default unless another one is flagged.
    """,
    responses={
        400: {"description": "Unknown attribute, or discount above price"},
        404: {"description": "Product not found"},
        409: {"description": "A variant with this SKU already exists"},
    }
)
async def create_variant(
        product_id: UUID, data: ProductVariantCreate, db: AsyncSession = Depends(get_session)
):
    return await AsyncProductVariantService(db).create_variant(product_id, data)


@router.get(
    "/{product_id}/variants",
    response_model=List[ProductVariantOutput],
    summary="List Variants",
    responses={404: {"description": "Product not found"}},
)
async def list_variants(product_id: UUID, db: AsyncSession = Depends(get_session)):
    return await AsyncProductVariantService(db).list_variants(product_id)


@router.get(
    "/{product_id}/variants/{variant_id}",
    response_model=ProductVariantOutput,
    summary="Get Variant",
    responses={404: {"description": "Product or variant not found"}},
)
async def get_variant(product_id: UUID, variant_id: UUID, db: AsyncSession = Depends(get_session)):
    return await AsyncProductVariantService(db).get_variant(product_id, variant_id)


@router.patch(
    "/{product_id}/variants/{variant_id}",
    response_model=ProductVariantOutput,
    dependencies=[Depends(require_admin)],
    summary="Update Variant - Admin only",
    responses={
        400: {"description": "Unknown attribute, or discount above price"},
        404: {"description": "Product or variant not found"},
        409: {"description": "A variant with this SKU already exists"},
    }
)
async def update_variant(
        product_id: UUID,
        variant_id: UUID,
        data: ProductVariantUpdate,
        db: AsyncSession = Depends(get_session),
):
    return await AsyncProductVariantService(db).update_variant(product_id, variant_id, data)


@router.delete(
    "/{product_id}/variants/{variant_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
    summary="Delete Variant - Admin only",
    responses={404: {"description": "Product or variant not found"}},
)
async def delete_variant(product_id: UUID, variant_id: UUID, db: AsyncSession = Depends(get_session)):
    await AsyncProductVariantService(db).delete_variant(product_id, variant_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{product_id}/variants/{variant_id}/images",
    response_model=ProductImageOutput,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
    summary="Add Variant Image - Admin only",
    responses={404: {"description": "Product or variant not found"}},
)
async def add_variant_image(
        product_id: UUID,
        variant_id: UUID,
        data: ProductImageCreate,
        db: AsyncSession = Depends(get_session),
):
    return await AsyncProductImageService(db).add_image(product_id, data, variant_id=variant_id)


# ─── IMAGES ───────────────────────────────────────────────────────────────────

@router.get(
    "/{product_id}/images",
    response_model=List[ProductImageOutput],
    summary="List Product Images",
    description="Product level images in display order; variant images come with the variant.",
    responses={404: {"description": "Product not found"}},
)
async def list_images(product_id: UUID, db: AsyncSession = Depends(get_session)):
    return await AsyncProductImageService(db).list_images(product_id)


@router.post(
    "/{product_id}/images",
    response_model=ProductImageOutput,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
    summary="Add Product Image - Admin only",
    responses={404: {"description": "Product not found"}},
)
async def add_image(product_id: UUID, data: ProductImageCreate, db: AsyncSession = Depends(get_session)):
    return await AsyncProductImageService(db).add_image(product_id, data)


@router.patch(
    "/{product_id}/images/{image_id}",
    response_model=ProductImageOutput,
    dependencies=[Depends(require_admin)],
    summary="Update Image - Admin only",
    description="Works for product images and for images of the product's variants.",
    responses={404: {"description": "Product or image not found"}},
)
async def update_image(
        product_id: UUID,
        image_id: UUID,
        data: ProductImageUpdate,
        db: AsyncSession = Depends(get_session),
):
    return await AsyncProductImageService(db).update_image(product_id, image_id, data)


@router.delete(
    "/{product_id}/images/{image_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
    summary="Delete Image - Admin only",
    responses={404: {"description": "Product or image not found"}},
)
async def delete_image(product_id: UUID, image_id: UUID, db: AsyncSession = Depends(get_session)):
    await AsyncProductImageService(db).delete_image(product_id, image_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
