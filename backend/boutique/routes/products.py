"""
Boutique Backend — Product Route Handlers (/api)
=================================================

What:  GET /api/products (public listing) and POST /api/products
       (admin-only creation with a multipart image upload).

Request Flow (POST /api/products):
    1. require_admin verifies the bearer token and the admin role
    2. Multipart fields are read; price is coerced to a number by FastAPI
    3. CatalogService validates fields, stores the image, inserts the row
    4. 201 Created with the new product id
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from boutique.database import get_db_session
from boutique.dependencies import get_catalog_service
from boutique.middleware.access_control import require_admin
from boutique.schemas.auth import Identity
from boutique.schemas.common import ErrorResponse, MessageResponse
from boutique.schemas.product import MAX_PRICE, ProductFields, ProductResponse
from boutique.services.catalog_service import CatalogService
from boutique.services.image_store import ImageUpload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Products"])


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
        400: {"description": "Missing field or image", "model": ErrorResponse},
        401: {"description": "Token missing or invalid", "model": ErrorResponse},
        403: {"description": "Admin role required", "model": ErrorResponse},
        500: {"description": "Database or storage error", "model": ErrorResponse},
    },
    summary="Add a product with its image (admin only)",
)
async def create_product(
    identity: Identity = Depends(require_admin),
    name: Optional[str] = Form(default=None),
    description: Optional[str] = Form(default=None),
    price: Optional[float] = Form(default=None, ge=0, lt=MAX_PRICE, allow_inf_nan=False),
    fabric: Optional[str] = Form(default=None),
    color: Optional[str] = Form(default=None),
    image: Optional[UploadFile] = File(default=None, description="Product image (png, jpg, jpeg, gif, webp)"),
    db: AsyncSession = Depends(get_db_session),
    catalog: CatalogService = Depends(get_catalog_service),
) -> MessageResponse:
    """
    Create a product from a multipart form. The image file is required.
    """
    fields = ProductFields(
        name=name,
        description=description,
        price=price,
        fabric=fabric,
        color=color,
    )

    upload = None
    if image is not None and image.filename:
        try:
            upload = ImageUpload(
                filename=image.filename,
                content=await image.read(),
                content_type=image.content_type,
            )
        finally:
            await image.close()

    logger.info(
        "Admin %s creating product (image=%s)",
        identity.id,
        upload.filename if upload else None,
    )
    return await catalog.create_product(db, fields, upload)
