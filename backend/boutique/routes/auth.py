"""
Boutique Backend — Auth Route Handlers
=======================================

What:  POST /api/register and POST /api/login.
How:   Parse the JSON body, delegate to AuthService, return its result.
       Errors propagate to the global exception handlers in main.py.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from boutique.database import get_db_session
from boutique.dependencies import get_auth_service
from boutique.schemas.auth import LoginRequest, RegisterRequest, TokenResponse
from boutique.schemas.common import ErrorResponse, MessageResponse
from boutique.services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Auth"])


@router.post(
    "/register",
    status_code=201,
    response_model=MessageResponse,
    response_model_exclude_none=True,
    responses={
        400: {"description": "Missing email/password or unknown role", "model": ErrorResponse},
        500: {"description": "Duplicate email or database error", "model": ErrorResponse},
    },
    summary="Register a client or admin account",
)
async def register(
    payload: RegisterRequest,
    db: AsyncSession = Depends(get_db_session),
    auth: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    """
    Create an account. No token is returned; the caller logs in separately.
    """
    return await auth.register(db, payload)


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={
        400: {"description": "Missing fields or incorrect email/password", "model": ErrorResponse},
    },
    summary="Exchange credentials for a session token",
)
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
    auth: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """
    Returns a session token valid for one hour.

    Send it back as `Authorization: Bearer <token>` on protected routes.
    """
    return await auth.login(db, payload)
