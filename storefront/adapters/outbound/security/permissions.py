# storefront/adapters/outbound/security/permissions.py

from fastapi import Depends

from storefront.adapters.inbound.api.deps import get_current_user
from storefront.adapters.outbound.persistence.models import User
from storefront.domain.exceptions import PermissionDeniedException
from storefront.domain.models.user_domain_model import UserRole


def require_role(*roles: UserRole):
    """
    Returns a dependency that only lets through users with one of ``roles``.

    Usage:
        @router.post(..., dependencies=[Depends(require_role(UserRole.ADMIN, UserRole.STAFF))])
    """

    async def role_checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in roles:
            raise PermissionDeniedException(
                detail="Access denied",
                role=" or ".join(role.value for role in roles),
            )
        return current_user

    return role_checker


require_admin = require_role(UserRole.ADMIN)
