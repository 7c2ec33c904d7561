# migrations/env.py

import asyncio
import os
import sys
from logging.config import fileConfig
from sqlalchemy.ext.asyncio import async_engine_from_config
from sqlalchemy.pool import NullPool
from alembic import context

# Make the application importable
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from storefront.adapters.configuration.config import settings
from storefront.adapters.outbound.persistence.models import Base

DB_URL = str(settings.DATABASE_URL)

# Alembic config
alembic_config = context.config

# Default Alembic logging
if alembic_config.config_file_name is not None:
    fileConfig(alembic_config.config_file_name)

# Database URL comes from the settings, not from alembic.ini
alembic_config.set_main_option("sqlalchemy.url", DB_URL)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Migrations offline"""
    url = alembic_config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=url.startswith("sqlite"),
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        render_as_batch=connection.dialect.name == "sqlite",
    )

    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    """Migrations online, through the async engine"""
    connectable = async_engine_from_config(
        alembic_config.get_section(alembic_config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=NullPool,
    )

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
