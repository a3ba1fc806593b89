"""Initial schema: referrals table

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create referrals table."""
    op.create_table(
        "referrals",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("referrer_name", sa.String(255), nullable=False),
        sa.Column("referrer_email", sa.String(255), nullable=False),
        sa.Column("referrer_phone", sa.String(20), nullable=False),
        sa.Column("friend_name", sa.String(255), nullable=False),
        sa.Column("friend_email", sa.String(255), nullable=False),
        sa.Column("friend_phone", sa.String(20), nullable=False),
        sa.Column("program", sa.String(255), nullable=False),
        sa.Column(
            "status",
            sa.Enum(
                "PENDING", "CONTACTED", "ENROLLED", "REWARDED",
                name="referral_status", native_enum=False, length=20,
            ),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_referrals_created_at", "referrals", ["created_at"])


def downgrade() -> None:
    """Drop referrals table."""
    op.drop_index("ix_referrals_created_at", table_name="referrals")
    op.drop_table("referrals")
