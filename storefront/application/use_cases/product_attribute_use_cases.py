# storefront/application/use_cases/product_attribute_use_cases.py

import logging
from typing import List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.adapters.outbound.persistence.models import ProductAttribute
from storefront.adapters.outbound.persistence.repositories.product_attribute_repository import (
    attribute_value_repository,
    product_attribute_repository,
)
from storefront.application.dtos.product_attribute_dto import (
    AttributeValueCreate,
    ProductAttributeCreate,
    ProductAttributeOutput,
    ProductAttributeUpdate,
)
from storefront.domain.exceptions import ResourceAlreadyExistsException, ResourceNotFoundException

logger = logging.getLogger(__name__)


class AsyncProductAttributeService:
    """
    Service for product attributes and their values.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session

    async def _get_or_404(self, attribute_id: UUID) -> ProductAttribute:
        attribute = await product_attribute_repository.get_with_values(self.db, attribute_id)
        if attribute is None:
            raise ResourceNotFoundException(detail="Attribute not found", resource_id=attribute_id)
        return attribute

    async def _ensure_name_available(self, name: str, exclude_id: Optional[UUID] = None) -> None:
        existing = await product_attribute_repository.get_by_name(self.db, name)
        if existing is not None and existing.id != exclude_id:
            raise ResourceAlreadyExistsException(detail=f"Attribute with name '{name}' already exists")

    async def _output(self, attribute_id: UUID) -> ProductAttributeOutput:
        return ProductAttributeOutput.model_validate(await self._get_or_404(attribute_id))

    async def create_attribute(self, data: ProductAttributeCreate) -> ProductAttributeOutput:
        await self._ensure_name_available(data.name)
        attribute = await product_attribute_repository.create(self.db, obj_in=data)
        return await self._output(attribute.id)

    async def list_attributes(self) -> List[ProductAttributeOutput]:
        attributes = await product_attribute_repository.list_with_values(self.db)
        return [ProductAttributeOutput.model_validate(a) for a in attributes]

    async def get_attribute(self, attribute_id: UUID) -> ProductAttributeOutput:
        return await self._output(attribute_id)

    async def update_attribute(self, attribute_id: UUID, data: ProductAttributeUpdate) -> ProductAttributeOutput:
        """
        Raises:
            ResourceNotFoundException: Unknown attribute
            ResourceAlreadyExistsException: Name taken by another attribute
        """
        attribute = await self._get_or_404(attribute_id)
        update_data = data.model_dump(exclude_unset=True)

        if update_data.get("name") and update_data["name"] != attribute.name:
            await self._ensure_name_available(update_data["name"], exclude_id=attribute_id)

        await product_attribute_repository.update(self.db, db_obj=attribute, obj_in=update_data)
        return await self._output(attribute_id)

    async def delete_attribute(self, attribute_id: UUID) -> None:
        """Delete an attribute; its values and their variant links go with it."""
        await product_attribute_repository.remove(self.db, id=attribute_id)
        logger.info(f"Attribute {attribute_id} deleted")

    async def add_value(self, attribute_id: UUID, data: AttributeValueCreate) -> ProductAttributeOutput:
        """
        Raises:
            ResourceNotFoundException: Unknown attribute
            ResourceAlreadyExistsException: The attribute already has this value
        """
        attribute = await self._get_or_404(attribute_id)
        if await attribute_value_repository.find(self.db, attribute_id, data.value) is not None:
            raise ResourceAlreadyExistsException(
                detail=f"Value '{data.value}' already exists for attribute '{attribute.name}'"
            )
        await attribute_value_repository.create(self.db, obj_in={**data.model_dump(), "attribute_id": attribute_id})
        return await self._output(attribute_id)

    async def remove_value(self, attribute_id: UUID, value_id: UUID) -> ProductAttributeOutput:
        attribute = await self._get_or_404(attribute_id)
        if value_id not in {v.id for v in attribute.values}:
            raise ResourceNotFoundException(
                detail=f"Value not found for attribute '{attribute.name}'", resource_id=value_id
            )
        await attribute_value_repository.remove(self.db, id=value_id)
        return await self._output(attribute_id)
