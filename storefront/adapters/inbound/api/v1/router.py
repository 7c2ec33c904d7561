# storefront/adapters/inbound/api/v1/router.py

from fastapi import APIRouter
from storefront.adapters.inbound.api.v1.endpoints import (
    auth_endpoint,
    banner_endpoint,
    brand_endpoint,
    cart_endpoint,
    category_endpoint,
    product_attribute_endpoint,
    product_endpoint,
    product_variant_endpoint,
    user_endpoint,
    wishlist_endpoint,
)

api_router = APIRouter()

api_router.include_router(auth_endpoint.router, prefix="/auth", tags=["Auth"])
api_router.include_router(user_endpoint.router, prefix="/users", tags=["User"])

# Catalog
api_router.include_router(category_endpoint.router, prefix="/categories", tags=["Categories"])
api_router.include_router(brand_endpoint.router, prefix="/brands", tags=["Brands"])
api_router.include_router(banner_endpoint.router, prefix="/banners", tags=["Banners"])
api_router.include_router(product_endpoint.router, prefix="/products", tags=["Products"])
api_router.include_router(product_variant_endpoint.router, prefix="/products", tags=["Product Variants"])
api_router.include_router(
    product_attribute_endpoint.router, prefix="/product-attributes", tags=["Product Attributes"]
)

# Shopping
api_router.include_router(cart_endpoint.router, prefix="/carts", tags=["Cart"])
api_router.include_router(wishlist_endpoint.router, prefix="/wishlists", tags=["Wishlist"])
