# storefront/adapters/outbound/persistence/repositories/__init__.py

"""
Repository module.

Exports the CRUD repositories of the system entities and the
session-bound adapters used by the domain services.
"""

from storefront.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from storefront.adapters.outbound.persistence.repositories.user_repository import (
    AsyncUserCRUD,
    AsyncUserIdentityLookup,
    user_repository,
)
from storefront.adapters.outbound.persistence.repositories.refresh_token_repository import (
    AsyncRefreshTokenRepository,
)
from storefront.adapters.outbound.persistence.repositories.category_repository import (
    AsyncCategoryCRUD,
    AsyncCategoryHierarchyRepository,
    category_repository,
)
from storefront.adapters.outbound.persistence.repositories.brand_repository import (
    AsyncBrandCRUD,
    brand_repository,
)
from storefront.adapters.outbound.persistence.repositories.product_repository import (
    AsyncProductCRUD,
    product_repository,
)
from storefront.adapters.outbound.persistence.repositories.banner_repository import (
    AsyncBannerCRUD,
    banner_repository,
)
from storefront.adapters.outbound.persistence.repositories.product_attribute_repository import (
    AsyncProductAttributeCRUD,
    AsyncProductAttributeValueCRUD,
    attribute_value_repository,
    product_attribute_repository,
)
from storefront.adapters.outbound.persistence.repositories.product_variant_repository import (
    AsyncProductVariantCRUD,
    product_variant_repository,
)
from storefront.adapters.outbound.persistence.repositories.product_image_repository import (
    AsyncProductImageCRUD,
    product_image_repository,
)
from storefront.adapters.outbound.persistence.repositories.cart_repository import (
    AsyncCartCRUD,
    AsyncCartItemCRUD,
    cart_item_repository,
    cart_repository,
)
from storefront.adapters.outbound.persistence.repositories.wishlist_repository import (
    AsyncWishlistCRUD,
    AsyncWishlistItemCRUD,
    wishlist_item_repository,
    wishlist_repository,
)

__all__ = [
    # Classes
    "AsyncCRUDBase",
    "AsyncUserCRUD",
    "AsyncCategoryCRUD",
    "AsyncBrandCRUD",
    "AsyncProductCRUD",
    "AsyncBannerCRUD",
    "AsyncProductAttributeCRUD",
    "AsyncProductAttributeValueCRUD",
    "AsyncProductVariantCRUD",
    "AsyncProductImageCRUD",
    "AsyncCartCRUD",
    "AsyncCartItemCRUD",
    "AsyncWishlistCRUD",
    "AsyncWishlistItemCRUD",

    # Session-bound adapters
    "AsyncUserIdentityLookup",
    "AsyncRefreshTokenRepository",
    "AsyncCategoryHierarchyRepository",

    # Instances
    "user_repository",
    "category_repository",
    "brand_repository",
    "product_repository",
    "banner_repository",
    "product_attribute_repository",
    "attribute_value_repository",
    "product_variant_repository",
    "product_image_repository",
    "cart_repository",
    "cart_item_repository",
    "wishlist_repository",
    "wishlist_item_repository",
]
