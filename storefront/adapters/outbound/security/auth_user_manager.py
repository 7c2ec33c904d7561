# storefront/adapters/outbound/security/auth_user_manager.py

from datetime import timedelta
from typing import Any, Dict

from jose import jwt, JWTError
from fastapi import HTTPException, status
from passlib.context import CryptContext

from storefront.adapters.configuration.config import settings
from storefront.application.ports.outbound import IAccessTokenIssuer
from storefront.shared.utils.time import utcnow


class JoseTokenIssuer(IAccessTokenIssuer):
    """
    Signs and verifies HS256 access tokens with python-jose.
    """

    def __init__(self, secret_key: str = None, algorithm: str = None):
        self.secret_key = secret_key or settings.SECRET_KEY
        self.algorithm = algorithm or settings.ALGORITHM

    def sign(self, payload: Dict[str, Any], expires_delta: timedelta) -> str:
        claims = dict(payload)
        # jose converts naive datetimes as UTC
        claims["exp"] = utcnow() + expires_delta
        return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> Dict[str, Any]:
        """Decode a token, raising JWTError if the signature or exp is invalid."""
        return jwt.decode(token, self.secret_key, algorithms=[self.algorithm])


class UserAuthManager:
    """
    Password hashing and access token verification for users.
    """

    crypt_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
    token_issuer = JoseTokenIssuer()

    @classmethod
    async def hash_password(cls, password: str) -> str:
        """Return the hash of a plain text password."""
        return cls.crypt_context.hash(password)

    @classmethod
    async def verify_password(cls, plain_password: str, hashed_password: str) -> bool:
        """Verify if the plain text password matches the stored hash."""
        return cls.crypt_context.verify(plain_password, hashed_password)

    @classmethod
    async def verify_access_token(cls, token: str) -> dict:
        """
        Verify and decode a JWT access token.

        Refresh tokens are opaque and never reach this method; anything
        that is not an ``access`` token is rejected.
        """
        try:
            payload = cls.token_issuer.verify(token)
        except JWTError:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid or expired token."
            )

        if payload.get("type") != "access":
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid token: incorrect type."
            )

        return payload
