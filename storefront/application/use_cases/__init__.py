# storefront/application/use_cases/__init__.py

"""
Application service module.

This package contains the application services that implement the business logic
of the application, organized according to functional domains.
"""

# Export service classes for easier imports
from storefront.application.use_cases.auth_use_cases import AsyncAuthService
from storefront.application.use_cases.category_use_cases import AsyncCategoryService
from storefront.application.use_cases.brand_use_cases import AsyncBrandService
from storefront.application.use_cases.banner_use_cases import AsyncBannerService
from storefront.application.use_cases.product_use_cases import AsyncProductService
from storefront.application.use_cases.product_attribute_use_cases import AsyncProductAttributeService
from storefront.application.use_cases.product_variant_use_cases import AsyncProductVariantService
from storefront.application.use_cases.product_image_use_cases import AsyncProductImageService
from storefront.application.use_cases.cart_use_cases import AsyncCartService
from storefront.application.use_cases.wishlist_use_cases import AsyncWishlistService

# Export all services
__all__ = [
    "AsyncAuthService",
    "AsyncCategoryService",
    "AsyncBrandService",
    "AsyncBannerService",
    "AsyncProductService",
    "AsyncProductAttributeService",
    "AsyncProductVariantService",
    "AsyncProductImageService",
    "AsyncCartService",
    "AsyncWishlistService",
]
