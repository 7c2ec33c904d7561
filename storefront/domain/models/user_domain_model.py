# storefront/domain/models/user_domain_model.py

import enum
from dataclasses import dataclass
from uuid import UUID


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    CUSTOMER = "customer"
    STAFF = "staff"


@dataclass
class UserIdentity:
    """
    Identity fields embedded in an access token at issuance time.

    Snapshot only: later changes to the stored user (role, email) are
    not reflected until a new token pair is issued.
    """
    id: UUID
    email: str
    role: str
