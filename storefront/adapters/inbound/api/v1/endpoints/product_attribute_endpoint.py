# storefront/adapters/inbound/api/v1/endpoints/product_attribute_endpoint.py

from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.application.use_cases.product_attribute_use_cases import AsyncProductAttributeService
from storefront.adapters.inbound.api.deps import get_session
from storefront.adapters.outbound.security.permissions import require_admin
from storefront.application.dtos.product_attribute_dto import (
    AttributeValueCreate,
    ProductAttributeCreate,
    ProductAttributeOutput,
    ProductAttributeUpdate,
)

router = APIRouter()


@router.post(
    "/",
    response_model=ProductAttributeOutput,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
    summary="Create Attribute - Admin only",
    responses={409: {"description": "An attribute with this name already exists"}},
)
async def create_attribute(data: ProductAttributeCreate, db: AsyncSession = Depends(get_session)):
    return await AsyncProductAttributeService(db).create_attribute(data)


@router.get(
    "/",
    response_model=List[ProductAttributeOutput],
    summary="List Attributes",
    description="Every attribute with its values, by display order then name.",
)
async def list_attributes(db: AsyncSession = Depends(get_session)):
    return await AsyncProductAttributeService(db).list_attributes()


@router.get(
    "/{attribute_id}",
    response_model=ProductAttributeOutput,
    summary="Get Attribute",
    responses={404: {"description": "Attribute not found"}},
)
async def get_attribute(attribute_id: UUID, db: AsyncSession = Depends(get_session)):
    return await AsyncProductAttributeService(db).get_attribute(attribute_id)


@router.patch(
    "/{attribute_id}",
    response_model=ProductAttributeOutput,
    dependencies=[Depends(require_admin)],
    summary="Update Attribute - Admin only",
    responses={
        404: {"description": "Attribute not found"},
        409: {"description": "An attribute with this name already exists"},
    }
)
async def update_attribute(
        attribute_id: UUID, data: ProductAttributeUpdate, db: AsyncSession = Depends(get_session)
):
    return await AsyncProductAttributeService(db).update_attribute(attribute_id, data)


@router.delete(
    "/{attribute_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
    summary="Delete Attribute - Admin only",
    description="Deletes the attribute together with its values; variants lose those values.",
    responses={404: {"description": "Attribute not found"}},
)
async def delete_attribute(attribute_id: UUID, db: AsyncSession = Depends(get_session)):
    await AsyncProductAttributeService(db).delete_attribute(attribute_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{attribute_id}/values",
    response_model=ProductAttributeOutput,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
    summary="Add Attribute Value - Admin only",
    responses={
        404: {"description": "Attribute not found"},
        409: {"description": "The attribute already has this value"},
    }
)
async def add_attribute_value(
        attribute_id: UUID, data: AttributeValueCreate, db: AsyncSession = Depends(get_session)
):
    return await AsyncProductAttributeService(db).add_value(attribute_id, data)


@router.delete(
    "/{attribute_id}/values/{value_id}",
    response_model=ProductAttributeOutput,
    dependencies=[Depends(require_admin)],
    summary="Remove Attribute Value - Admin only",
    responses={404: {"description": "Attribute or value not found"}},
)
async def remove_attribute_value(attribute_id: UUID, value_id: UUID, db: AsyncSession = Depends(get_session)):
    return await AsyncProductAttributeService(db).remove_value(attribute_id, value_id)
