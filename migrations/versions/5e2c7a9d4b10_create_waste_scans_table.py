"""create waste_scans table

Revision ID: 5e2c7a9d4b10
Revises:
Create Date: 2026-10-01 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "5e2c7a9d4b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "waste_scans",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.String(), nullable=True),
        sa.Column("qr_code", sa.String(), nullable=False),
        sa.Column("item_name", sa.String(), nullable=False),
        sa.Column("category", sa.String(length=16), nullable=False),
        sa.Column("weight", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("unit", sa.String(length=4), nullable=False, server_default="kg"),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("impact", sa.JSON(), nullable=True),
    )
    op.create_index(
        "ix_waste_scans_user_timestamp", "waste_scans", ["user_id", "timestamp"]
    )


def downgrade() -> None:
    op.drop_index("ix_waste_scans_user_timestamp", table_name="waste_scans")
    op.drop_table("waste_scans")
