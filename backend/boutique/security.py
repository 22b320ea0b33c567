"""
Boutique Backend — Password Hashing & Session Tokens
=====================================================

What:  PasswordHasher (argon2 via passlib) and TokenIssuer (HS256 JWT via
       python-jose).
How:   Both are plain objects built once by the application factory and
       injected into AuthService and the access-control dependencies.

Session Token:
    Claims: id, email, role, iat, exp
    Lifetime: TOKEN_TTL (one hour), no refresh, no server-side revocation.

Hashing is CPU-bound (tens of milliseconds for argon2), so the async helpers
run it in Starlette's threadpool to keep the event loop responsive.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi.concurrency import run_in_threadpool
from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import ValidationError as PydanticValidationError

from boutique.exceptions import AuthError
from boutique.schemas.auth import Identity

logger = logging.getLogger(__name__)

TOKEN_TTL = timedelta(hours=1)


class PasswordHasher:
    """Salted one-way password hashing with library defaults."""

    def __init__(self) -> None:
        self._context = CryptContext(
            schemes=["argon2"],
            default="argon2",
            deprecated="auto",
        )

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, hashed: str) -> bool:
        try:
            return self._context.verify(password, hashed)
        except (ValueError, TypeError):
            # Unrecognised or corrupt hash in the store
            logger.warning("Stored password hash could not be parsed")
            return False

    def dummy_verify(self) -> None:
        """Spend the same time as a real verification (unknown-email logins)."""
        self._context.dummy_verify()

    async def hash_async(self, password: str) -> str:
        return await run_in_threadpool(self.hash, password)

    async def verify_async(self, password: str, hashed: str) -> bool:
        return await run_in_threadpool(self.verify, password, hashed)

    async def dummy_verify_async(self) -> None:
        await run_in_threadpool(self.dummy_verify)


class TokenIssuer:
    """
    Mints and verifies session tokens.

    decode() collapses every failure (bad signature, expired, malformed,
    missing claims) into one AuthError so callers cannot tell them apart.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        ttl: timedelta = TOKEN_TTL,
    ):
        self._secret = secret
        self.algorithm = algorithm
        self.ttl = ttl

    def mint(self, identity: Identity, now: Optional[datetime] = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        claims = {
            "id": identity.id,
            "email": identity.email,
            "role": identity.role.value,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self.ttl).timestamp()),
        }
        return jwt.encode(claims, self._secret, algorithm=self.algorithm)

    def decode(self, token: str) -> Identity:
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require_exp": True},
            )
            return Identity(id=claims["id"], email=claims["email"], role=claims["role"])
        except (JWTError, KeyError, PydanticValidationError) as e:
            logger.info("Session token rejected: %s", type(e).__name__)
            raise AuthError(message="Invalid token.", context={"reason": type(e).__name__})
