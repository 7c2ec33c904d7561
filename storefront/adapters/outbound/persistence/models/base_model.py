# storefront/adapters/outbound/persistence/models/base_model.py

"""
Declarative base shared by every ORM model.
"""

from sqlalchemy.orm import declarative_base

# Parent class of all ORM models, holds the metadata used by create_all and Alembic
Base = declarative_base()
