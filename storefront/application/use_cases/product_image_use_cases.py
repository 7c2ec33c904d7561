# storefront/application/use_cases/product_image_use_cases.py

import logging
from typing import Dict, List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.adapters.outbound.persistence.models import ProductImage
from storefront.adapters.outbound.persistence.repositories.product_image_repository import (
    product_image_repository,
)
from storefront.adapters.outbound.persistence.repositories.product_variant_repository import (
    product_variant_repository,
)
from storefront.application.dtos.product_variant_dto import (
    ProductImageCreate,
    ProductImageOutput,
    ProductImageUpdate,
)
from storefront.application.use_cases.product_variant_use_cases import AsyncProductVariantService
from storefront.domain.exceptions import ResourceNotFoundException

logger = logging.getLogger(__name__)


def _owner_of(image: ProductImage) -> Dict[str, UUID]:
    if image.variant_id is not None:
        return {"variant_id": image.variant_id}
    return {"product_id": image.product_id}


class AsyncProductImageService:
    """
    Service for the images of a product and of its variants.

    Each owner keeps at most one default image: flagging an image as
    default unflags its siblings, and deleting the default promotes the
    next image in display order.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.variants = AsyncProductVariantService(db_session)

    async def _get_image(self, product_id: UUID, image_id: UUID) -> ProductImage:
        image = await product_image_repository.get(self.db, image_id)
        if image is not None and image.variant_id is not None:
            variant = await product_variant_repository.get(self.db, image.variant_id)
            belongs = variant is not None and variant.product_id == product_id
        else:
            belongs = image is not None and image.product_id == product_id
        if not belongs:
            raise ResourceNotFoundException(detail="Image not found", resource_id=image_id)
        return image

    async def list_images(self, product_id: UUID) -> List[ProductImageOutput]:
        """Product level images, in display order."""
        await self.variants.get_line_target(product_id, None)
        images = await product_image_repository.list_for_owner(self.db, product_id=product_id)
        return [ProductImageOutput.model_validate(i) for i in images]

    async def add_image(
            self, product_id: UUID, data: ProductImageCreate, variant_id: Optional[UUID] = None
    ) -> ProductImageOutput:
        """
        Attach an image to the product, or to one of its variants when
        ``variant_id`` is given.

        Raises:
            ResourceNotFoundException: Unknown product or variant
        """
        product, variant = await self.variants.get_line_target(product_id, variant_id)
        owner = {"variant_id": variant.id} if variant is not None else {"product_id": product.id}

        existing = await product_image_repository.count_for_owner(self.db, **owner)
        is_default = data.is_default if data.is_default is not None else existing == 0
        fallback_alt = (variant.name if variant is not None else None) or product.name

        image = await product_image_repository.create(
            self.db,
            obj_in={
                "url": data.url,
                "alt": data.alt or fallback_alt,
                "display_order": data.display_order if data.display_order is not None else existing,
                "is_default": is_default,
                **owner,
            },
        )
        if is_default:
            await product_image_repository.clear_default(self.db, keep_id=image.id, **owner)
        return ProductImageOutput.model_validate(image)

    async def update_image(self, product_id: UUID, image_id: UUID, data: ProductImageUpdate) -> ProductImageOutput:
        image = await self._get_image(product_id, image_id)
        image = await product_image_repository.update(
            self.db, db_obj=image, obj_in=data.model_dump(exclude_unset=True)
        )
        if image.is_default:
            await product_image_repository.clear_default(self.db, keep_id=image.id, **_owner_of(image))
        return ProductImageOutput.model_validate(image)

    async def delete_image(self, product_id: UUID, image_id: UUID) -> None:
        image = await self._get_image(product_id, image_id)
        owner = _owner_of(image)
        was_default = image.is_default

        await product_image_repository.remove(self.db, id=image_id)

        if was_default:
            remaining = await product_image_repository.list_for_owner(self.db, **owner)
            if remaining:
                await product_image_repository.update(self.db, db_obj=remaining[0], obj_in={"is_default": True})
                logger.info(f"Image {remaining[0].id} promoted to default")
