"""Create users and products tables

Revision ID: 001
Revises: None
Create Date: 2024-06-10 00:00:00.000000+00:00

What:  Creates the credential store (`users`) and the catalog store
       (`products`).

Rollback: downgrade() drops both tables (destructive — all data lost).
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column(
            "password",
            sa.String(255),
            nullable=False,
            comment="Salted one-way hash of the password",
        ),
        # Enum(native_enum=False) in the model: a plain VARCHAR holding the value
        sa.Column(
            "role",
            sa.String(20),
            nullable=False,
            server_default=sa.text("'client'"),
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    # Unique: concurrent registrations with one email cannot both succeed
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "products",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("fabric", sa.String(100), nullable=True),
        sa.Column("color", sa.String(50), nullable=True),
        sa.Column("image", sa.String(255), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    op.drop_table("products")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
