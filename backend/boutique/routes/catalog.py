"""
Boutique Backend — Catalog Route Handlers (/products)
======================================================

What:  JSON product endpoints without the /api prefix:
       GET /products, POST /products, PUT /products/{product_id}.
How:   Same CatalogService and the same field contract as /api/products;
       the image is sent as a reference string instead of a file upload.

These routes are public, matching the routes the storefront frontend has
always called. Deployments that need them protected should add
Depends(require_admin) at router level.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from boutique.database import get_db_session
from boutique.dependencies import get_catalog_service
from boutique.schemas.common import ErrorResponse, MessageResponse
from boutique.schemas.product import ProductFields, ProductResponse
from boutique.services.catalog_service import CatalogService

router = APIRouter(tags=["Catalog"])


@router.get(
    "/products",
    response_model=List[ProductResponse],
    responses={500: {"description": "Database error", "model": ErrorResponse}},
    summary="List all products",
)
async def list_products(
    db: AsyncSession = Depends(get_db_session),
    catalog: CatalogService = Depends(get_catalog_service),
) -> List[ProductResponse]:
    return await catalog.list_products(db)


@router.post(
    "/products",
    status_code=201,
    response_model=MessageResponse,
    responses={
        400: {"description": "Missing field", "model": ErrorResponse},
        500: {"description": "Database error", "model": ErrorResponse},
    },
    summary="Add a product (JSON body, image by reference)",
)
async def create_product(
    fields: ProductFields,
    db: AsyncSession = Depends(get_db_session),
    catalog: CatalogService = Depends(get_catalog_service),
) -> MessageResponse:
    return await catalog.create_product(db, fields)


@router.put(
    "/products/{product_id}",
    response_model=MessageResponse,
    response_model_exclude_none=True,
    responses={
        400: {"description": "Missing field", "model": ErrorResponse},
        404: {"description": "No product with this id", "model": ErrorResponse},
        500: {"description": "Database error", "model": ErrorResponse},
    },
    summary="Replace every field of a product",
)
async def update_product(
    product_id: int,
    fields: ProductFields,
    db: AsyncSession = Depends(get_db_session),
    catalog: CatalogService = Depends(get_catalog_service),
) -> MessageResponse:
    return await catalog.update_product(db, product_id, fields)
