# storefront/application/use_cases/product_variant_use_cases.py

import logging
from typing import Dict, List, Optional, Tuple
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.adapters.outbound.persistence.models import (
    Product,
    ProductAttributeValue,
    ProductImage,
    ProductVariant,
)
from storefront.adapters.outbound.persistence.repositories.product_attribute_repository import (
    attribute_value_repository,
    product_attribute_repository,
)
from storefront.adapters.outbound.persistence.repositories.product_repository import product_repository
from storefront.adapters.outbound.persistence.repositories.product_variant_repository import (
    product_variant_repository,
)
from storefront.application.dtos.product_variant_dto import (
    ProductImageCreate,
    ProductVariantCreate,
    ProductVariantOutput,
    ProductVariantUpdate,
    VariantAttributeValueInput,
)
from storefront.domain.exceptions import (
    InvalidInputException,
    ResourceAlreadyExistsException,
    ResourceNotFoundException,
)

logger = logging.getLogger(__name__)


def default_image_index(images: List[ProductImageCreate]) -> int:
    """The first image flagged default, otherwise the first image."""
    for index, image in enumerate(images):
        if image.is_default:
            return index
    return 0


class AsyncProductVariantService:
    """
    Service for the variants of a product.

    Every operation is scoped to the product in the URL: a variant of
    another product is reported as not found.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session

    async def _get_product(self, product_id: UUID) -> Product:
        product = await product_repository.get(self.db, product_id)
        if product is None:
            raise ResourceNotFoundException(detail="Product not found", resource_id=product_id)
        return product

    async def _get_variant(self, product_id: UUID, variant_id: UUID) -> ProductVariant:
        variant = await product_variant_repository.get_with_relations(self.db, variant_id)
        if variant is None or variant.product_id != product_id:
            raise ResourceNotFoundException(detail="Variant not found", resource_id=variant_id)
        return variant

    async def _ensure_sku_available(self, sku: str, exclude_id: Optional[UUID] = None) -> None:
        existing = await product_variant_repository.get_by_sku(self.db, sku)
        if existing is not None and existing.id != exclude_id:
            raise ResourceAlreadyExistsException(detail=f"Variant with SKU '{sku}' already exists")

    async def _resolve_attribute_values(
            self, entries: List[VariantAttributeValueInput]
    ) -> List[ProductAttributeValue]:
        """
        Map the requested values to stored ones, building the missing
        values under their attribute.

        Raises:
            InvalidInputException: Unknown attribute, or two values for one attribute
        """
        resolved: Dict[UUID, ProductAttributeValue] = {}
        for entry in entries:
            if entry.attribute_id in resolved:
                raise InvalidInputException(
                    fields={"attribute_values": f"attribute {entry.attribute_id} given more than once"}
                )
            if not await product_attribute_repository.exists(self.db, id=entry.attribute_id):
                raise InvalidInputException(
                    fields={"attribute_values": f"attribute {entry.attribute_id} not found"}
                )
            value = await attribute_value_repository.find(self.db, entry.attribute_id, entry.value)
            if value is None:
                value = ProductAttributeValue(
                    attribute_id=entry.attribute_id,
                    value=entry.value,
                    description=entry.description,
                    color_code=entry.color_code,
                )
            resolved[entry.attribute_id] = value
        return list(resolved.values())

    @staticmethod
    def _check_discount(price, discount_price) -> None:
        if price is not None and discount_price is not None and discount_price > price:
            raise InvalidInputException(fields={"discount_price": "cannot exceed price"})

    @staticmethod
    def _build_images(images: List[ProductImageCreate], fallback_alt: str) -> List[ProductImage]:
        default_index = default_image_index(images)
        return [
            ProductImage(
                url=image.url,
                alt=image.alt or fallback_alt,
                display_order=image.display_order if image.display_order is not None else index,
                is_default=index == default_index,
            )
            for index, image in enumerate(images)
        ]

    async def create_variant(self, product_id: UUID, data: ProductVariantCreate) -> ProductVariantOutput:
        """
        Add a variant to a product.

        A variant without a price takes the product's current price.

        Raises:
            ResourceNotFoundException: Unknown product
            ResourceAlreadyExistsException: SKU already taken
            InvalidInputException: Unknown attribute, or discount above price
        """
        product = await self._get_product(product_id)
        await self._ensure_sku_available(data.sku)
        attribute_values = await self._resolve_attribute_values(data.attribute_values)

        fields = data.model_dump(exclude={"attribute_values", "images"})
        if fields["price"] is None:
            fields["price"] = product.price
        self._check_discount(fields["price"], fields["discount_price"])
        fields["product_id"] = product_id

        variant = await product_variant_repository.save(
            self.db,
            db_obj=None,
            data=fields,
            attribute_values=attribute_values,
            images=self._build_images(data.images, data.name or product.name),
        )
        logger.info(f"Variant {variant.sku} added to product {product_id}")
        return ProductVariantOutput.model_validate(variant)

    async def list_variants(self, product_id: UUID) -> List[ProductVariantOutput]:
        await self._get_product(product_id)
        variants = await product_variant_repository.list_for_product(self.db, product_id)
        return [ProductVariantOutput.model_validate(v) for v in variants]

    async def get_variant(self, product_id: UUID, variant_id: UUID) -> ProductVariantOutput:
        return ProductVariantOutput.model_validate(await self._get_variant(product_id, variant_id))

    async def update_variant(
            self, product_id: UUID, variant_id: UUID, data: ProductVariantUpdate
    ) -> ProductVariantOutput:
        """
        Partially update a variant; ``attribute_values`` replaces its values.

        Raises:
            ResourceNotFoundException: Unknown product or variant
            ResourceAlreadyExistsException: SKU taken by another variant
            InvalidInputException: Unknown attribute, or discount above price
        """
        variant = await self._get_variant(product_id, variant_id)
        update_data = data.model_dump(exclude_unset=True, exclude={"attribute_values"})

        if update_data.get("sku") and update_data["sku"] != variant.sku:
            await self._ensure_sku_available(update_data["sku"], exclude_id=variant_id)
        self._check_discount(
            update_data.get("price", variant.price),
            update_data.get("discount_price", variant.discount_price),
        )

        attribute_values = None
        if data.attribute_values is not None:
            attribute_values = await self._resolve_attribute_values(data.attribute_values)

        variant = await product_variant_repository.save(
            self.db, db_obj=variant, data=update_data, attribute_values=attribute_values
        )
        return ProductVariantOutput.model_validate(variant)

    async def delete_variant(self, product_id: UUID, variant_id: UUID) -> None:
        await self._get_variant(product_id, variant_id)
        await product_variant_repository.remove(self.db, id=variant_id)
        logger.info(f"Variant {variant_id} removed from product {product_id}")

    async def get_line_target(
            self, product_id: UUID, variant_id: Optional[UUID]
    ) -> Tuple[Product, Optional[ProductVariant]]:
        """
        Resolve the product and optional variant a cart or wishlist line
        points at.

        Raises:
            ResourceNotFoundException: Unknown product, or a variant that
                does not belong to it
        """
        product = await self._get_product(product_id)
        if variant_id is None:
            return product, None
        variant = await product_variant_repository.get(self.db, variant_id)
        if variant is None or variant.product_id != product_id:
            raise ResourceNotFoundException(detail="Variant not found for this product", resource_id=variant_id)
        return product, variant
