"""
Boutique Backend — Access Control
==================================

What:  Session-token verification and role authorization for protected routes.
How:   Applied per route as FastAPI dependencies rather than as global
       Starlette middleware, so public routes never look at the
       Authorization header.

Per-request states:
    UNVERIFIED ──token valid──▶ VERIFIED ──role ok──▶ handler runs
         │                          │
         └─missing/invalid─▶ REJECTED (401)
                                    └─wrong role─▶ REJECTED (403)

Usage:
    @router.post("/products")
    async def create(identity: Identity = Depends(require_admin)):
        ...
"""

import logging
from typing import Callable, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from boutique.dependencies import get_token_issuer
from boutique.exceptions import AuthError, AuthzError
from boutique.models.user import Role
from boutique.schemas.auth import Identity
from boutique.security import TokenIssuer

logger = logging.getLogger(__name__)

# auto_error=False: a missing header is reported through AuthError, keeping
# the error body format identical to every other failure
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenIssuer = Depends(get_token_issuer),
) -> Identity:
    """
    Verify the bearer token and return the caller's identity.

    The identity is also attached to request.state.identity for downstream
    use (logging, handlers that receive the Request).

    Raises:
        AuthError: token missing, or failed signature/expiry/shape checks (→ 401)
    """
    if credentials is None or not credentials.credentials:
        raise AuthError(message="Access denied, token missing.")

    identity = tokens.decode(credentials.credentials)
    request.state.identity = identity
    return identity


def authorize(identity: Identity, required: Role) -> Identity:
    """
    The single authorization check for role-gated operations.

    Raises:
        AuthzError: identity does not hold the required role (→ 403)
    """
    if identity.role is not required:
        logger.warning(
            "Authorization denied: user %s has role %s, %s required",
            identity.id,
            identity.role.value,
            required.value,
        )
        raise AuthzError(message=f"Access denied, {required.value} role required.")
    return identity


def require_role(role: Role) -> Callable[..., Identity]:
    """
    Dependency factory enforcing a role after token verification.

    Usage: Depends(require_role(Role.ADMIN))
    """

    async def role_checker(identity: Identity = Depends(get_current_identity)) -> Identity:
        return authorize(identity, role)

    return role_checker


require_admin = require_role(Role.ADMIN)
