"""create tenants, payments and owners tables

Revision ID: 3a1f0c2b9d4e
Revises:
Create Date: 2026-09-02 10:15:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3a1f0c2b9d4e"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "tenants",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("phone", sa.String(), nullable=True),
        sa.Column("room", sa.String(), nullable=True),
        sa.Column("bed", sa.String(), nullable=True),
        sa.Column("join_date", sa.Date(), nullable=True),
        sa.Column("rent", sa.Numeric(10, 2), nullable=True),
        sa.Column("rent_confirmed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("id_front", sa.String(), nullable=False, server_default=""),
        sa.Column("id_back", sa.String(), nullable=False, server_default=""),
        sa.Column("profile", sa.String(), nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_tenants_id", "tenants", ["id"], unique=False)

    op.create_table(
        "payments",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("tenant_id", sa.String(), nullable=False),
        sa.Column("tenant_name", sa.String(), nullable=True),
        sa.Column("room", sa.String(), nullable=True),
        sa.Column("month", sa.String(), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("rent", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("deposit", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("maintenance", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("method", sa.String(), nullable=False, server_default="Cash"),
        sa.Column("status", sa.String(), nullable=False, server_default="paid"),
        sa.Column("paid_on", sa.Date(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("tenant_id", "month", "year", name="uq_payments_tenant_month_year"),
    )
    op.create_index("ix_payments_id", "payments", ["id"], unique=False)
    op.create_index("ix_payments_tenant_id", "payments", ["tenant_id"], unique=False)

    op.create_table(
        "owners",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("password_hash", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )
    op.create_index("ix_owners_id", "owners", ["id"], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_owners_id", table_name="owners")
    op.drop_table("owners")
    op.drop_index("ix_payments_tenant_id", table_name="payments")
    op.drop_index("ix_payments_id", table_name="payments")
    op.drop_table("payments")
    op.drop_index("ix_tenants_id", table_name="tenants")
    op.drop_table("tenants")
