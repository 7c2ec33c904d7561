# storefront/adapters/outbound/persistence/models/__init__.py

"""
Data models module.

Exports every SQLAlchemy model of the system so that importing this
package registers all tables on ``Base.metadata``.
"""

# Base
from storefront.adapters.outbound.persistence.models.base_model import Base

# Identity
from storefront.adapters.outbound.persistence.models.user_model import User
from storefront.adapters.outbound.persistence.models.refresh_token_model import RefreshToken

# Catalog
from storefront.adapters.outbound.persistence.models.product_model import (
    Product,
    ProductStatus,
    product_categories,
)
from storefront.adapters.outbound.persistence.models.category_model import Category
from storefront.adapters.outbound.persistence.models.brand_model import Brand
from storefront.adapters.outbound.persistence.models.banner_model import (
    Banner,
    BannerPosition,
    BannerType,
    banner_categories,
    banner_products,
)
from storefront.adapters.outbound.persistence.models.product_variant_model import (
    ProductVariant,
    product_variant_attribute_values,
)
from storefront.adapters.outbound.persistence.models.product_attribute_model import (
    ProductAttribute,
    ProductAttributeValue,
)
from storefront.adapters.outbound.persistence.models.product_image_model import ProductImage

# Shopping
from storefront.adapters.outbound.persistence.models.cart_model import Cart, CartItem
from storefront.adapters.outbound.persistence.models.wishlist_model import Wishlist, WishlistItem

__all__ = [
    # Base
    "Base",

    # Identity
    "User",
    "RefreshToken",

    # Catalog
    "Category",
    "Product",
    "ProductStatus",
    "Brand",
    "Banner",
    "BannerType",
    "BannerPosition",
    "ProductVariant",
    "ProductAttribute",
    "ProductAttributeValue",
    "ProductImage",

    # Shopping
    "Cart",
    "CartItem",
    "Wishlist",
    "WishlistItem",

    # Association tables
    "product_categories",
    "banner_categories",
    "banner_products",
    "product_variant_attribute_values",
]
