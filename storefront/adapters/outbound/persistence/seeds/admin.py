# storefront/adapters/outbound/persistence/seeds/admin.py

"""
Seed script for the administrator account.
"""

import logging
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.adapters.configuration.config import settings
from storefront.adapters.outbound.persistence.repositories.user_repository import user_repository
from storefront.application.dtos.user_dto import UserCreate
from storefront.domain.models.user_domain_model import UserRole

logger = logging.getLogger(__name__)


async def run_admin_seed(db: AsyncSession) -> None:
    if not settings.ADMIN_EMAIL or not settings.ADMIN_PASSWORD:
        logger.info("ADMIN_EMAIL/ADMIN_PASSWORD not set, skipping admin seed")
        return

    if await user_repository.get_by_email(db, email=settings.ADMIN_EMAIL):
        logger.info(f"Admin '{settings.ADMIN_EMAIL}' already exists")
        return

    admin = await user_repository.create_with_password(
        db,
        obj_in=UserCreate(
            email=settings.ADMIN_EMAIL,
            username=settings.ADMIN_USERNAME,
            full_name="Administrator",
            password=settings.ADMIN_PASSWORD,
        ),
        role=UserRole.ADMIN,
    )
    logger.info(f"Admin '{admin.email}' created")
