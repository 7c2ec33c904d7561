# storefront/adapters/outbound/persistence/repositories/user_repository.py

"""
Repository for user operations.

Database operations related to users, plus the identity lookup
used by the token lifecycle.
"""

from typing import Optional
from uuid import UUID
from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from storefront.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from storefront.adapters.outbound.persistence.models import User
from storefront.adapters.outbound.security.auth_user_manager import UserAuthManager
from storefront.application.dtos.user_dto import UserCreate
from storefront.application.ports.outbound import IUserLookup
from storefront.domain.models.user_domain_model import UserIdentity, UserRole
from storefront.domain.services.auth_service import PasswordService
from storefront.domain.exceptions import (
    ResourceAlreadyExistsException,
    InvalidCredentialsException,
    InvalidInputException,
)


def to_identity(db_model: User) -> UserIdentity:
    """Project a stored user onto the identity embedded in access tokens."""
    role = db_model.role.value if isinstance(db_model.role, UserRole) else db_model.role
    return UserIdentity(id=db_model.id, email=db_model.email, role=role)


class AsyncUserCRUD(AsyncCRUDBase[User, UserCreate, UserCreate]):
    """
    User accounts: lookups by login fields, registration with a hashed
    password and credential checks for the login endpoint.
    """

    async def get_by_email(self, db: AsyncSession, email: str) -> Optional[User]:
        # Emails are stored lowercased at registration
        return await self.get_by_field(db, "email", email.lower())

    async def get_by_username(self, db: AsyncSession, username: str) -> Optional[User]:
        return await self.get_by_field(db, "username", username)

    async def create_with_password(
            self,
            db: AsyncSession,
            *,
            obj_in: UserCreate,
            role: UserRole = UserRole.CUSTOMER,
    ) -> User:
        """
        Register an account.

        The email is lowercased and the password bcrypt hashed before the
        row is written. ``role`` defaults to customer; the admin seed
        passes ``UserRole.ADMIN``.

        Raises:
            ResourceAlreadyExistsException: email or username taken
            InvalidInputException: password fails the strength rules
        """
        clash = or_(User.email == obj_in.email.lower(), User.username == obj_in.username)
        async with self._guard(db, "checking user uniqueness"):
            existing = await db.execute(select(User.id).where(clash))
            taken = existing.first() is not None
        if taken:
            self.logger.warning(f"Registration refused, account exists: {obj_in.email}")
            raise ResourceAlreadyExistsException(
                detail="A user with this email or username already exists"
            )

        if not PasswordService.verify_password_strength(obj_in.password):
            raise InvalidInputException(
                detail="Password does not meet minimum security requirements.",
                fields={"password": "too weak"},
            )

        values = obj_in.model_dump()
        password = values.pop("password")
        values["email"] = values["email"].lower()
        values["password"] = await UserAuthManager.hash_password(password)
        values["role"] = role

        return await self.create(db, obj_in=values)

    async def authenticate(self, db: AsyncSession, *, email: str, password: str) -> User:
        """
        Return the user owning ``email`` if ``password`` matches.

        Unknown email, wrong password and disabled accounts all raise
        ``InvalidCredentialsException``.
        """
        user = await self.get_by_email(db, email=email)
        if not user:
            self.logger.warning(f"Login attempt with non-existent email: {email}")
            raise InvalidCredentialsException(detail="Incorrect email or password")

        if not user.is_active:
            self.logger.warning(f"Login attempt with inactive user: {email}")
            raise InvalidCredentialsException(detail="Inactive user")

        if not await UserAuthManager.verify_password(password, user.password):
            self.logger.warning(f"Login attempt with incorrect password: {email}")
            raise InvalidCredentialsException(detail="Incorrect email or password")

        return user


class AsyncUserIdentityLookup(IUserLookup):
    """
    Identity lookup bound to one database session.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_identity(self, user_id: UUID) -> Optional[UserIdentity]:
        user = await user_repository.get(self.db, user_id)
        if user is None:
            return None
        return to_identity(user)


# Public instance to be used by use cases
user_repository = AsyncUserCRUD(User)
