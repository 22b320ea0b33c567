"""
Boutique Backend — User SQLAlchemy Model
=========================================

What:  ORM model representing the `users` table (the credential store).
Who:   Used by AuthService for registration and login; read by Alembic.

Table Design:
    - email: UNIQUE — two registrations with the same email race at this
      constraint and the loser's insert fails.
    - password: argon2 hash produced by passlib; never the plaintext.
    - role: closed enumeration stored as its string value.

Lifecycle:
    Created on registration. Never updated or deleted by this service.
"""

import enum

from sqlalchemy import Enum, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from boutique.database import Base


class Role(str, enum.Enum):
    """Roles a user can hold. Admin-only routes require ADMIN."""

    CLIENT = "client"
    ADMIN = "admin"


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
    )

    password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Salted one-way hash of the password",
    )

    role: Mapped[Role] = mapped_column(
        Enum(
            Role,
            name="user_role",
            native_enum=False,
            length=20,
            values_callable=lambda roles: [r.value for r in roles],
        ),
        nullable=False,
        default=Role.CLIENT,
        server_default=text("'client'"),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', role='{self.role.value}')>"
