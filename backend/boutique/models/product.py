"""
Boutique Backend — Product SQLAlchemy Model
============================================

What:  ORM model representing the `products` table (the catalog store).
Who:   Used by CatalogService for listing, creation and full-replace updates.

Table Design:
    - price: NUMERIC(10, 2) returned to Python as float for JSON responses.
    - fabric / color: optional descriptive attributes.
    - image: generated file name inside the image directory (or a client
      supplied reference on the JSON creation path). Nullable because rows
      created before image uploads existed have none.
"""

from typing import Optional

from sqlalchemy import Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from boutique.database import Base


class Product(Base):
    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[float] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=False)
    fabric: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    color: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    image: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, name='{self.name}', price={self.price})>"
