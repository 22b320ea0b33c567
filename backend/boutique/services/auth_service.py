"""
Boutique Backend — Auth Service
================================

What:  User registration and login.
How:   register() validates input, hashes the password and inserts a User;
       login() looks the user up by email, verifies the hash and mints a
       session token.
Who:   Called by the /api/register and /api/login route handlers.

Flow (POST /api/login):
    ┌──────────┐    ┌─────────────┐    ┌──────────────┐    ┌──────────┐
    │ Validate │───▶│ SELECT user │───▶│ verify hash  │───▶│  mint    │
    │  fields  │    │  by email   │    │ (threadpool) │    │  token   │
    └──────────┘    └─────────────┘    └──────────────┘    └──────────┘

    Unknown email and wrong password both end in InvalidCredentialsError.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from boutique.exceptions import InvalidCredentialsError, StoreError, ValidationError
from boutique.models.user import Role, User
from boutique.schemas.auth import Identity, LoginRequest, RegisterRequest, TokenResponse
from boutique.schemas.common import MessageResponse
from boutique.security import PasswordHasher, TokenIssuer

logger = logging.getLogger(__name__)


def _parse_role(value: Optional[str]) -> Role:
    if value is None or not value.strip():
        return Role.CLIENT
    try:
        return Role(value.strip().lower())
    except ValueError:
        raise ValidationError(
            message=f"Unknown role '{value}'. Allowed roles: client, admin.",
            field="role",
            context={"allowed": [r.value for r in Role]},
        )


class AuthService:
    """
    Business logic for credentials and session tokens.

    The hasher and token issuer are injected at construction; the database
    session is passed per call because it is scoped to the request.
    """

    def __init__(self, hasher: PasswordHasher, tokens: TokenIssuer):
        self.hasher = hasher
        self.tokens = tokens

    async def register(self, db: AsyncSession, payload: RegisterRequest) -> MessageResponse:
        """
        Create a user account.

        Raises:
            ValidationError: email or password missing, unknown role (→ 400)
            StoreError: duplicate email or database failure (→ 500)
        """
        email = (payload.email or "").strip()
        missing = []
        if not email:
            missing.append("email")
        if not payload.password:
            missing.append("password")
        if missing:
            raise ValidationError(
                message="Email and password are required.",
                context={"missing": missing},
            )
        role = _parse_role(payload.role)

        hashed = await self.hasher.hash_async(payload.password)
        user = User(email=email, password=hashed, role=role)

        try:
            db.add(user)
            await db.flush()
        except IntegrityError as e:
            logger.warning("Registration rejected by unique constraint for %s", email)
            raise StoreError(
                message="Error while registering the user.",
                context={"reason": "duplicate_email", "error_type": type(e).__name__},
            )
        except SQLAlchemyError as e:
            logger.error("Database error registering user: %s", str(e))
            raise StoreError(
                message="Error while registering the user.",
                context={"error_type": type(e).__name__},
            )

        logger.info("User registered: id=%s role=%s", user.id, role.value)
        return MessageResponse(message="User created successfully.")

    async def login(self, db: AsyncSession, payload: LoginRequest) -> TokenResponse:
        """
        Verify credentials and issue a session token.

        Raises:
            ValidationError: email or password missing (→ 400)
            InvalidCredentialsError: unknown email or wrong password (→ 400)
            StoreError: database failure (→ 500)
        """
        email = (payload.email or "").strip()
        if not email or not payload.password:
            raise ValidationError(message="Email and password are required.")

        try:
            result = await db.execute(select(User).where(User.email == email))
            user = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error during login: %s", str(e))
            raise StoreError(context={"error_type": type(e).__name__})

        if user is None:
            await self.hasher.dummy_verify_async()
            raise InvalidCredentialsError()

        if not await self.hasher.verify_async(payload.password, user.password):
            raise InvalidCredentialsError(context={"user_id": user.id})

        token = self.tokens.mint(Identity(id=user.id, email=user.email, role=user.role))
        logger.info("User logged in: id=%s", user.id)
        return TokenResponse(token=token)
