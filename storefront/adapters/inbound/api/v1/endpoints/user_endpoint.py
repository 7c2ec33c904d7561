# storefront/adapters/inbound/api/v1/endpoints/user_endpoint.py

import logging
from fastapi import APIRouter, Depends

from storefront.adapters.outbound.persistence.models import User
from storefront.adapters.inbound.api.deps import get_current_user
from storefront.application.dtos.user_dto import UserOutput

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/me",
    response_model=UserOutput,
    summary="Get My Data - Logged in user data",
    description="Returns the authenticated user data via JWT token.",
    responses={
        200: {
            "description": "Authenticated user data",
            "content": {
                "application/json": {
                    "example": {
                        "id": "3fa85f64-5717-4562-b3fc-2c963f66afa6",
                        "username": "jdoe",
                        "email": "jdoe@example.com",
                        "full_name": "John Doe",
                        "role": "customer",
                        "is_active": True,
                        "created_at": "2024-01-01T00:00:00",
                        "updated_at": "2024-01-02T00:00:00"
                    }
                }
            }
        },
        401: {
            "description": "Not authenticated or invalid token",
            "content": {
                "application/json": {
                    "example": {
                        "detail": "Invalid or expired token."
                    }
                }
            }
        }
    }
)
async def get_my_data(current_user: User = Depends(get_current_user)):
    return current_user
