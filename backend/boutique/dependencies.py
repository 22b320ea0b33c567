"""
Boutique Backend — Service Dependencies
========================================

What:  FastAPI dependency getters returning the service instances the
       application factory placed on app.state.

Usage:
    @router.post("/register")
    async def register(auth: AuthService = Depends(get_auth_service)):
        ...
"""

from fastapi import Request

from boutique.security import TokenIssuer
from boutique.services.auth_service import AuthService
from boutique.services.catalog_service import CatalogService


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_catalog_service(request: Request) -> CatalogService:
    return request.app.state.catalog_service


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer
