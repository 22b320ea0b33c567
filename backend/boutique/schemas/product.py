"""
Boutique Backend — Product Schemas
===================================

What:  The product input contract shared by every creation/update path, and
       the product representation returned to clients.

Input contract (ProductFields):
    name, description, price   required (checked by CatalogService)
    fabric, color              optional
    image                      required on creation unless a file is uploaded
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from boutique.models.product import Product

# NUMERIC(10, 2) holds at most 99,999,999.99
MAX_PRICE = 100_000_000


class ProductFields(BaseModel):
    """Mutable product attributes as sent by the client."""
    name: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = Field(default=None)
    price: Optional[float] = Field(default=None, ge=0, lt=MAX_PRICE, allow_inf_nan=False)
    fabric: Optional[str] = Field(default=None, max_length=100)
    color: Optional[str] = Field(default=None, max_length=50)
    image: Optional[str] = Field(default=None, max_length=255)

    def missing_fields(self, require_image: bool = True) -> List[str]:
        """Names of required fields that are absent or blank."""
        missing = [
            name
            for name in ("name", "description")
            if not (getattr(self, name) or "").strip()
        ]
        if self.price is None:
            missing.append("price")
        if require_image and not (self.image or "").strip():
            missing.append("image")
        return missing


class ProductResponse(BaseModel):
    id: int
    name: str
    description: str
    price: float
    fabric: Optional[str] = None
    color: Optional[str] = None
    image: Optional[str] = None
    image_url: Optional[str] = Field(default=None, description="Public URL of the product image")

    @classmethod
    def from_model(cls, product: Product, image_url_prefix: str = "/images") -> "ProductResponse":
        image_url = None
        if product.image:
            image_url = f"{image_url_prefix.rstrip('/')}/{product.image}"
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            price=float(product.price),
            fabric=product.fabric,
            color=product.color,
            image=product.image,
            image_url=image_url,
        )
