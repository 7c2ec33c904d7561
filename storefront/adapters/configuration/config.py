# storefront/adapters/configuration/config.py

import json
from typing import Annotated, Optional, List, Union
from logging import getLevelName
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    # Logging
    LOG_LEVEL: str = "INFO"

    # Environment
    ENVIRONMENT: str = "development"  # "development", "production", "testing"

    # Database
    POSTGRES_USER: Optional[str] = None
    POSTGRES_PASSWORD: Optional[str] = None
    POSTGRES_DB: Optional[str] = None
    POSTGRES_HOST: Optional[str] = None
    POSTGRES_PORT: int = 5432
    DATABASE_URL: Optional[str] = Field(default=None, validate_default=True)

    DEBUG: bool = False

    # Auth
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    JWT_ACCESS_EXPIRATION: str = "15m"
    JWT_REFRESH_EXPIRATION: str = "7d"
    TOKEN_CLEANUP_INTERVAL_HOURS: int = 24

    # Seeds
    ADMIN_EMAIL: Optional[str] = None
    ADMIN_PASSWORD: Optional[str] = None
    ADMIN_USERNAME: str = "admin"
    SEED_SAMPLE_DATA: bool = False

    # CORS
    CORS_ORIGINS: Annotated[List[str], NoDecode] = ["http://localhost:8000", "http://127.0.0.1:8000"]

    # HTTP
    USE_HTTPS: bool = False

    # API Documentation
    SCHEMA_VISIBILITY: bool = True

    @field_validator("DATABASE_URL", mode="before")
    def assemble_db_url(cls, value, info):
        if value:
            return value

        data = info.data
        if not data.get("POSTGRES_HOST"):
            return "sqlite+aiosqlite:///./storefront.db"

        return (
            f"postgresql+asyncpg://{data['POSTGRES_USER']}:{data['POSTGRES_PASSWORD']}"
            f"@{data['POSTGRES_HOST']}:{data['POSTGRES_PORT']}/{data['POSTGRES_DB']}"
        )

    @field_validator("CORS_ORIGINS", mode="before")
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> List[str]:
        """
        A CSV string (e.g. 'a,b,c') becomes a list.
        Lists and JSON arrays are returned unchanged.
        """
        if isinstance(v, str) and v.strip().startswith("["):
            return json.loads(v)
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        if isinstance(v, list):
            return v
        raise ValueError(f"Invalid CORS_ORIGINS: {v!r}")

    @field_validator("LOG_LEVEL", mode="before")
    def validate_log_level(cls, v: str) -> str:
        """Ensure the value is a valid logging level."""
        lvl = v.upper()
        if not isinstance(getLevelName(lvl), int):
            raise ValueError(f"Invalid LOG_LEVEL: {v!r}")
        return lvl

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
