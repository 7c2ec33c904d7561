# storefront/application/dtos/base_dto.py

"""
Base class for the application DTOs.
"""

from pydantic import BaseModel, ConfigDict


class CustomBaseModel(BaseModel):
    """
    Base model for every DTO of the application.

    Reads attributes from ORM objects, so models can be returned
    straight from the repositories.
    """

    model_config = ConfigDict(from_attributes=True)
