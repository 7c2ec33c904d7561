# storefront/adapters/outbound/persistence/repositories/refresh_token_repository.py

"""
Refresh token persistence.

Writes are flushed, not committed: the surrounding unit of work
(see get_db_context) commits them together, so a rotation's
mark-used and the new token land atomically.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.exc import SQLAlchemyError

from storefront.adapters.outbound.persistence.models import RefreshToken as RefreshTokenModel
from storefront.application.ports.outbound import IRefreshTokenRepository
from storefront.domain.exceptions import DatabaseOperationException
from storefront.domain.models.refresh_token_domain_model import RefreshToken

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _db_errors(action: str):
    # No rollback here: the unit of work owning the session handles it
    try:
        yield
    except SQLAlchemyError as e:
        logger.error(f"Refresh token store failed while {action}: {e}")
        raise DatabaseOperationException(detail=f"Error {action}", original_error=e)


class AsyncRefreshTokenRepository(IRefreshTokenRepository):
    """
    SQLAlchemy implementation of the refresh token store, bound to one session.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    @staticmethod
    def _to_domain(row: RefreshTokenModel) -> RefreshToken:
        return RefreshToken(
            id=row.id,
            token=row.token,
            user_id=row.user_id,
            expires_at=row.expires_at,
            is_revoked=row.is_revoked,
            is_used=row.is_used,
            created_at=row.created_at,
        )

    async def _bulk_update(self, action: str, *criteria, **values) -> int:
        statement = (
            update(RefreshTokenModel)
            .where(*criteria)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        async with _db_errors(action):
            result = await self.db.execute(statement)
        return result.rowcount

    async def create(self, token: RefreshToken) -> RefreshToken:
        row = RefreshTokenModel(
            token=token.token,
            user_id=token.user_id,
            expires_at=token.expires_at,
            is_revoked=token.is_revoked,
            is_used=token.is_used,
        )
        async with _db_errors(f"storing refresh token for user {token.user_id}"):
            self.db.add(row)
            await self.db.flush()
        return self._to_domain(row)

    async def get_by_token(self, token: str) -> Optional[RefreshToken]:
        # populate_existing: another request may have flipped the flags
        query = (
            select(RefreshTokenModel)
            .where(RefreshTokenModel.token == token)
            .execution_options(populate_existing=True)
        )
        async with _db_errors("fetching refresh token"):
            row = (await self.db.execute(query)).scalar_one_or_none()
        return None if row is None else self._to_domain(row)

    async def list_by_user(self, user_id: UUID, revoked: Optional[bool] = None) -> List[RefreshToken]:
        query = select(RefreshTokenModel).where(RefreshTokenModel.user_id == user_id)
        if revoked is not None:
            query = query.where(RefreshTokenModel.is_revoked == revoked)

        async with _db_errors(f"listing refresh tokens of user {user_id}"):
            result = await self.db.execute(query.order_by(RefreshTokenModel.created_at))
        return [self._to_domain(row) for row in result.scalars().all()]

    async def mark_used(self, token: str) -> bool:
        """
        Flip ``is_used`` with a single conditional UPDATE.

        The WHERE clause makes the transition race-safe: of two concurrent
        rotations of the same token only one sees a matched row.
        """
        matched = await self._bulk_update(
            "rotating refresh token",
            RefreshTokenModel.token == token,
            RefreshTokenModel.is_used.is_(False),
            RefreshTokenModel.is_revoked.is_(False),
            is_used=True,
        )
        return matched == 1

    async def revoke(self, token: str) -> bool:
        matched = await self._bulk_update(
            "revoking refresh token",
            RefreshTokenModel.token == token,
            is_revoked=True,
        )
        return matched > 0

    async def revoke_all_for_user(self, user_id: UUID) -> int:
        return await self._bulk_update(
            f"revoking refresh tokens of user {user_id}",
            RefreshTokenModel.user_id == user_id,
            RefreshTokenModel.is_revoked.is_(False),
            is_revoked=True,
        )

    async def delete_expired(self, before: datetime) -> int:
        """
        Remove tokens that expired before ``before`` (naive UTC) and
        return how many rows went.
        """
        statement = (
            delete(RefreshTokenModel)
            .where(RefreshTokenModel.expires_at < before)
            .execution_options(synchronize_session=False)
        )
        async with _db_errors("purging expired refresh tokens"):
            result = await self.db.execute(statement)
        return result.rowcount
