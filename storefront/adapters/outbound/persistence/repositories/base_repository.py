# storefront/adapters/outbound/persistence/repositories/base_repository.py

"""
Generic async repository shared by every catalog and user table.

Each public method runs inside ``_guard``, which turns SQLAlchemy errors
into domain exceptions and rolls the session back when a write fails.
Writes commit immediately; callers that need several statements in one
transaction (the refresh token store) use their own repository instead.
"""

from contextlib import asynccontextmanager
from typing import Any, Dict, Generic, Optional, Type, TypeVar, Union
from pydantic import BaseModel
from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError, IntegrityError
from sqlalchemy.future import select
import logging

from storefront.adapters.outbound.persistence.models.base_model import Base
from storefront.domain.exceptions import (
    ResourceNotFoundException,
    ResourceAlreadyExistsException,
    DatabaseOperationException
)

ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


def _is_unique_violation(error: IntegrityError) -> bool:
    text = str(error.orig if error.orig is not None else error).lower()
    return "unique" in text or "duplicate" in text


class AsyncCRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """
    Repository base with the lookups and writes every entity needs.

    Subclasses add entity specific queries and reuse ``_guard`` so that
    failures surface as ``DatabaseOperationException`` with a readable
    ``action`` label.
    """

    def __init__(self, model: Type[ModelType]):
        self.model = model
        self.entity = model.__name__
        self.logger = logging.getLogger(f"{__name__}.{self.entity}")

    @asynccontextmanager
    async def _guard(self, db: AsyncSession, action: str, *, write: bool = False):
        """
        Wrap a unit of database work.

        A unique constraint hit during a write becomes
        ``ResourceAlreadyExistsException``; any other SQLAlchemy error
        becomes ``DatabaseOperationException``. Domain exceptions raised
        inside the block pass through untouched.
        """
        try:
            yield
        except IntegrityError as e:
            if write:
                await db.rollback()
            if _is_unique_violation(e):
                self.logger.warning(f"Duplicate {self.entity} while {action}: {e.orig}")
                raise ResourceAlreadyExistsException(
                    detail=f"{self.entity} with these data already exists"
                )
            self.logger.error(f"Constraint failure while {action}: {e}")
            raise DatabaseOperationException(detail=f"Error {action}", original_error=e)
        except SQLAlchemyError as e:
            if write:
                await db.rollback()
            self.logger.error(f"Database error while {action}: {e}")
            raise DatabaseOperationException(detail=f"Error {action}", original_error=e)

    def _apply_filters(self, query, filters: Dict[str, Any]):
        # None means "not filtered"; %value% strings become ILIKE
        for field, value in filters.items():
            column = getattr(self.model, field, None)
            if column is None or value is None:
                continue
            if isinstance(value, str) and len(value) > 1 and value[0] == value[-1] == "%":
                query = query.where(column.ilike(value))
            else:
                query = query.where(column == value)
        return query

    async def get(self, db: AsyncSession, id: Any) -> Optional[ModelType]:
        async with self._guard(db, f"fetching {self.entity} {id}"):
            result = await db.execute(select(self.model).where(self.model.id == id))
            return result.scalar_one_or_none()

    async def get_or_404(self, db: AsyncSession, id: Any) -> ModelType:
        """
        Same as ``get`` but raises ``ResourceNotFoundException`` on a miss.
        """
        found = await self.get(db, id)
        if found is None:
            raise ResourceNotFoundException(detail=f"{self.entity} not found", resource_id=id)
        return found

    async def get_by_field(self, db: AsyncSession, field_name: str, value: Any) -> Optional[ModelType]:
        """
        Fetch the single row whose ``field_name`` column equals ``value``.

        Intended for unique columns (name, email, slug).
        """
        column = getattr(self.model, field_name)
        async with self._guard(db, f"fetching {self.entity} by {field_name}"):
            result = await db.execute(select(self.model).where(column == value))
            return result.scalar_one_or_none()

    async def exists(self, db: AsyncSession, **filters) -> bool:
        query = self._apply_filters(select(self.model), filters)
        async with self._guard(db, f"checking {self.entity} existence"):
            result = await db.execute(select(query.exists()))
            return bool(result.scalar())

    async def create(self, db: AsyncSession, *, obj_in: Union[CreateSchemaType, Dict[str, Any]]) -> ModelType:
        """
        Insert a row built from a schema or a plain dict and commit.

        Raises:
            ResourceAlreadyExistsException: a unique column clashed
            DatabaseOperationException: any other database failure
        """
        values = obj_in if isinstance(obj_in, dict) else obj_in.model_dump()
        row = self.model(**values)

        async with self._guard(db, f"creating {self.entity}", write=True):
            db.add(row)
            await db.commit()
            await db.refresh(row)

        self.logger.info(f"{self.entity} {row.id} created")
        return row

    async def update(
            self, db: AsyncSession, *, db_obj: ModelType, obj_in: Union[UpdateSchemaType, Dict[str, Any]]
    ) -> ModelType:
        """
        Apply a partial update and commit.

        With a schema only the fields the client actually sent are
        written (``exclude_unset``), so an explicit ``null`` clears a
        column while an omitted field is left alone.
        """
        changes = obj_in if isinstance(obj_in, dict) else obj_in.model_dump(exclude_unset=True)

        async with self._guard(db, f"updating {self.entity}", write=True):
            for field, value in changes.items():
                if hasattr(db_obj, field):
                    setattr(db_obj, field, value)
            db.add(db_obj)
            await db.commit()
            await db.refresh(db_obj)

        self.logger.info(f"{self.entity} {db_obj.id} updated ({', '.join(changes) or 'no fields'})")
        return db_obj

    async def remove(self, db: AsyncSession, *, id: Any) -> ModelType:
        """
        Delete a row by id and commit.

        Raises:
            ResourceNotFoundException: no row with this id
            DatabaseOperationException: the row is still referenced
        """
        row = await self.get_or_404(db, id)

        async with self._guard(db, f"removing {self.entity}", write=True):
            await db.delete(row)
            await db.commit()

        self.logger.info(f"{self.entity} {id} removed")
        return row

    async def count(self, db: AsyncSession, **filters) -> int:
        query = self._apply_filters(select(self.model), filters)
        async with self._guard(db, f"counting {self.entity} rows"):
            result = await db.execute(select(func.count()).select_from(query.subquery()))
            return result.scalar_one()
