# storefront/application/use_cases/product_use_cases.py

import logging
from typing import List, Optional
from uuid import UUID
from fastapi_pagination import Page, Params
from fastapi_pagination.ext.sqlalchemy import apaginate
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.adapters.outbound.persistence.models import Category, Product
from storefront.adapters.outbound.persistence.repositories.brand_repository import brand_repository
from storefront.adapters.outbound.persistence.repositories.category_repository import category_repository
from storefront.adapters.outbound.persistence.repositories.product_repository import product_repository
from storefront.application.dtos.product_dto import ProductCreate, ProductOutput, ProductUpdate
from storefront.domain.exceptions import (
    InvalidInputException,
    ResourceAlreadyExistsException,
    ResourceNotFoundException,
)
from storefront.domain.models.catalog_domain_model import ProductStatus

logger = logging.getLogger(__name__)


class AsyncProductService:
    """
    Service for catalog products.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session

    async def _get_or_404(self, product_id: UUID) -> Product:
        product = await product_repository.get_with_relations(self.db, product_id)
        if product is None:
            raise ResourceNotFoundException(detail="Product not found", resource_id=product_id)
        return product

    async def _ensure_name_available(self, name: str, exclude_id: Optional[UUID] = None) -> None:
        existing = await product_repository.get_by_name(self.db, name)
        if existing is not None and existing.id != exclude_id:
            raise ResourceAlreadyExistsException(detail=f"Product with name '{name}' already exists")

    async def _ensure_brand_exists(self, brand_id: Optional[UUID]) -> None:
        if brand_id is not None and not await brand_repository.exists(self.db, id=brand_id):
            raise InvalidInputException(fields={"brand_id": "brand not found"})

    async def _load_categories(self, category_ids: List[UUID]) -> List[Category]:
        categories = await category_repository.get_many(self.db, category_ids)
        if len(categories) != len(set(category_ids)):
            raise InvalidInputException(fields={"category_ids": "one or more categories not found"})
        return categories

    async def create_product(self, data: ProductCreate) -> ProductOutput:
        """
        Create a product linked to an optional brand and categories.

        Raises:
            ResourceAlreadyExistsException: Name already taken
            InvalidInputException: Unknown brand or categories
        """
        await self._ensure_name_available(data.name)
        await self._ensure_brand_exists(data.brand_id)
        categories = await self._load_categories(data.category_ids)

        product = await product_repository.save_with_categories(
            self.db,
            db_obj=None,
            data=data.model_dump(exclude={"category_ids"}),
            categories=categories,
        )
        logger.info(f"Product '{product.name}' created")
        return ProductOutput.model_validate(product)

    async def list_products(
            self,
            params: Params,
            *,
            category_id: Optional[UUID] = None,
            brand_id: Optional[UUID] = None,
            status: Optional[ProductStatus] = None,
            q: Optional[str] = None,
    ) -> Page[ProductOutput]:
        query = product_repository.build_list_query(
            category_id=category_id, brand_id=brand_id, status=status, q=q
        )
        page = await apaginate(self.db, query, params)
        return Page[ProductOutput](
            items=[ProductOutput.model_validate(p) for p in page.items],
            total=page.total,
            page=page.page,
            size=page.size,
            pages=page.pages,
        )

    async def get_product(self, product_id: UUID) -> ProductOutput:
        return ProductOutput.model_validate(await self._get_or_404(product_id))

    async def update_product(self, product_id: UUID, data: ProductUpdate) -> ProductOutput:
        """
        Partially update a product; ``category_ids`` replaces its categories.

        Raises:
            ResourceNotFoundException: Unknown product
            ResourceAlreadyExistsException: Name taken by another product
            InvalidInputException: Unknown brand or categories, or discount above price
        """
        product = await self._get_or_404(product_id)
        update_data = data.model_dump(exclude_unset=True)

        if update_data.get("name") and update_data["name"] != product.name:
            await self._ensure_name_available(update_data["name"], exclude_id=product_id)
        if "brand_id" in update_data:
            await self._ensure_brand_exists(update_data["brand_id"])

        price = update_data.get("price", product.price)
        discount = update_data.get("discount_price", product.discount_price)
        if discount is not None and price is not None and discount > price:
            raise InvalidInputException(fields={"discount_price": "cannot exceed price"})

        categories = None
        if "category_ids" in update_data:
            categories = await self._load_categories(update_data.pop("category_ids") or [])

        product = await product_repository.save_with_categories(
            self.db, db_obj=product, data=update_data, categories=categories
        )
        return ProductOutput.model_validate(product)

    async def delete_product(self, product_id: UUID) -> None:
        await product_repository.remove(self.db, id=product_id)
