"""
Boutique Backend — Catalog Service
===================================

What:  Listing, creation and full-replace update of products.
How:   Validates ProductFields, stores an uploaded image through ImageStore
       when one is given, and persists through the async session.
Who:   Called by both product routers (/api/products and /products).

Creation Flow:
    ┌──────────┐    ┌─────────────┐    ┌──────────────┐
    │ Validate │───▶│ Store image │───▶│ INSERT row   │
    │  fields  │    │ (optional)  │    │  (commit)    │
    └──────────┘    └─────────────┘    └──────────────┘

    Validation runs before the image is written, so a rejected request never
    leaves a file behind. If the insert or its commit fails after the write,
    the file is removed and StoreError propagates.

Both creation entry points share one contract: name, description, price and
an image are required. The multipart route satisfies "image" with an
uploaded file; the JSON route with an image reference.
"""

import logging
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from boutique.exceptions import NotFoundError, StoreError, ValidationError
from boutique.models.product import Product
from boutique.schemas.common import MessageResponse
from boutique.schemas.product import ProductFields, ProductResponse
from boutique.services.image_store import ImageStore, ImageUpload

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "All product fields must be filled in."


def _require(fields: ProductFields, require_image: bool) -> None:
    missing = fields.missing_fields(require_image=require_image)
    if missing:
        raise ValidationError(message=MISSING_FIELDS_MESSAGE, context={"missing": missing})


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class CatalogService:
    """
    Business logic layer for product operations.

    Responsibilities:
        - list_products(): every product, ordered by id
        - create_product(): validated insert, optionally with an uploaded image
        - update_product(): full replace by id, NotFoundError when no row matched
    """

    def __init__(self, images: ImageStore, image_url_prefix: str = "/images"):
        self.images = images
        self.image_url_prefix = image_url_prefix

    async def list_products(self, db: AsyncSession) -> List[ProductResponse]:
        """
        Return all products. An empty catalog yields an empty list.

        Raises:
            StoreError: Query execution failed (→ 500)
        """
        try:
            result = await db.execute(select(Product).order_by(Product.id))
            products = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing products: %s", str(e), exc_info=True)
            raise StoreError(
                message="Could not retrieve products. Please try again.",
                context={"error_type": type(e).__name__},
            )

        return [ProductResponse.from_model(p, self.image_url_prefix) for p in products]

    async def create_product(
        self,
        db: AsyncSession,
        fields: ProductFields,
        upload: Optional[ImageUpload] = None,
    ) -> MessageResponse:
        """
        Validate and insert a product.

        Args:
            db: Async database session
            fields: Client-supplied attributes
            upload: Image file from a multipart request; takes the place of
                    fields.image when present

        Raises:
            ValidationError: required field missing or bad image (→ 400)
            FileStorageError: image write failed (→ 500)
            StoreError: insert failed (→ 500)
        """
        _require(fields, require_image=upload is None)

        image_name = _clean(fields.image)
        if upload is not None:
            image_name = await self.images.save(upload)

        product = Product(
            name=fields.name.strip(),
            description=fields.description.strip(),
            price=fields.price,
            fabric=_clean(fields.fabric),
            color=_clean(fields.color),
            image=image_name,
        )

        # A failed flush or commit removes the stored image
        try:
            db.add(product)
            await db.flush()
            await db.commit()
        except SQLAlchemyError as e:
            if upload is not None:
                await self.images.remove(image_name)
            logger.error("Database error creating product: %s", str(e))
            raise StoreError(
                message="Error while adding the product.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Product created: id=%s image=%s", product.id, image_name)
        return MessageResponse(message="Product added successfully.", id=product.id)

    async def update_product(
        self,
        db: AsyncSession,
        product_id: int,
        fields: ProductFields,
    ) -> MessageResponse:
        """
        Replace every mutable field of a product in a single UPDATE.

        Raises:
            ValidationError: required field missing (→ 400)
            NotFoundError: no product has this id (→ 404)
            StoreError: update failed (→ 500)
        """
        _require(fields, require_image=True)

        statement = (
            update(Product)
            .where(Product.id == product_id)
            .values(
                name=fields.name.strip(),
                description=fields.description.strip(),
                price=fields.price,
                fabric=_clean(fields.fabric),
                color=_clean(fields.color),
                image=_clean(fields.image),
            )
        )
        try:
            result = await db.execute(statement)
        except SQLAlchemyError as e:
            logger.error("Database error updating product %s: %s", product_id, str(e))
            raise StoreError(
                message="Error while updating the product.",
                context={"product_id": product_id, "error_type": type(e).__name__},
            )

        if result.rowcount == 0:
            raise NotFoundError(resource="product", resource_id=str(product_id))

        logger.info("Product updated: id=%s", product_id)
        return MessageResponse(message="Product updated successfully.")
