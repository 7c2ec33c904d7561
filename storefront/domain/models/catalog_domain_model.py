# storefront/domain/models/catalog_domain_model.py

import enum


class ProductStatus(str, enum.Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    OUT_OF_STOCK = "out_of_stock"
    DISCONTINUED = "discontinued"


class BannerType(str, enum.Enum):
    HERO = "hero"
    PROMOTION = "promotion"
    CATEGORY = "category"
    BRAND = "brand"
    SEASONAL = "seasonal"


class BannerPosition(str, enum.Enum):
    HOME_TOP = "home_top"
    HOME_MIDDLE = "home_middle"
    HOME_BOTTOM = "home_bottom"
    CATEGORY_PAGE = "category_page"
    PRODUCT_PAGE = "product_page"
