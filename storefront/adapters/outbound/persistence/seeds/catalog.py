# storefront/adapters/outbound/persistence/seeds/catalog.py

"""
Seed script for a small sample catalog.

Only runs when SEED_SAMPLE_DATA is enabled.
"""

import logging
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.adapters.outbound.persistence.repositories.banner_repository import banner_repository
from storefront.adapters.outbound.persistence.repositories.brand_repository import brand_repository
from storefront.adapters.outbound.persistence.repositories.category_repository import category_repository
from storefront.domain.models.catalog_domain_model import BannerPosition, BannerType

logger = logging.getLogger(__name__)

# (name, parent name, display order)
categories = [
    ("Electronics", None, 0),
    ("Laptops", "Electronics", 0),
    ("Gaming Laptops", "Laptops", 0),
    ("Smartphones", "Electronics", 1),
    ("Home", None, 1),
]

brands = [
    {"name": "Acme", "website": "https://acme.example.com"},
    {"name": "Globex", "website": "https://globex.example.com"},
]

banners = [
    {
        "title": "Welcome to the store",
        "image_url": "/images/banners/welcome.jpg",
        "type": BannerType.HERO,
        "position": BannerPosition.HOME_TOP,
        "is_default": True,
    },
]


async def run_catalog_seed(db: AsyncSession) -> None:
    created = {}
    for name, parent_name, display_order in categories:
        category = await category_repository.get_by_name(db, name)
        if category:
            logger.info(f"Category '{name}' already exists")
        else:
            category = await category_repository.create(
                db,
                obj_in={
                    "name": name,
                    "display_order": display_order,
                    "parent_id": created[parent_name].id if parent_name else None,
                },
            )
            logger.info(f"Category '{name}' created")
        created[name] = category

    for data in brands:
        if await brand_repository.get_by_name(db, data["name"]):
            logger.info(f"Brand '{data['name']}' already exists")
            continue
        await brand_repository.create(db, obj_in=data)
        logger.info(f"Brand '{data['name']}' created")

    for data in banners:
        if await banner_repository.exists(db, title=data["title"]):
            logger.info(f"Banner '{data['title']}' already exists")
            continue
        await banner_repository.create(db, obj_in=data)
        logger.info(f"Banner '{data['title']}' created")
