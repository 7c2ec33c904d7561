# storefront/adapters/outbound/persistence/seeds/__init__.py

"""
Seeds module for database initialization.

This module contains functions to populate the database with the
initial data the system needs to operate.
"""

import logging
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.adapters.configuration.config import settings
from storefront.adapters.outbound.persistence.seeds.admin import run_admin_seed
from storefront.adapters.outbound.persistence.seeds.catalog import run_catalog_seed

# Configure logger
logger = logging.getLogger(__name__)


async def run_all_seeds(db: AsyncSession) -> None:
    """
    Runs every seed in order.

    Args:
        db: Async database session
    """
    logger.info("Running all seeds")

    await run_admin_seed(db)
    if settings.SEED_SAMPLE_DATA:
        await run_catalog_seed(db)

    logger.info("All seeds ran successfully")


if __name__ == "__main__":
    """
    Entry point for direct execution:
    `python -m storefront.adapters.outbound.persistence.seeds`
    """
    import asyncio
    from storefront.adapters.outbound.persistence.database import create_tables, get_db_context

    async def _main() -> None:
        await create_tables()
        async with get_db_context() as session:
            await run_all_seeds(session)

    logging.basicConfig(level=logging.INFO)
    asyncio.run(_main())
