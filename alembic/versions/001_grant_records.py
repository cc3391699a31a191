"""Initial schema — append-only grant_records ledger.

Revision ID: 001_grant_records
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_grant_records"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "grant_records",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("sender_id", sa.String(64), nullable=False),
        sa.Column("sender_username", sa.String(100), nullable=False),
        sa.Column("sender_display_name", sa.String(100), nullable=False),
        sa.Column("recipient_id", sa.String(64), nullable=False),
        sa.Column("recipient_username", sa.String(100), nullable=False),
        sa.Column("recipient_display_name", sa.String(100), nullable=False),
        sa.Column("group_id", sa.String(64), nullable=False),
        sa.Column("group_name", sa.String(100), nullable=True),
        sa.Column("channel_id", sa.String(64), nullable=True),
        sa.Column("message", sa.String(500), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("sender_id <> recipient_id", name="ck_grant_records_not_self"),
    )
    op.create_index(
        "ix_grant_records_sender_period", "grant_records",
        ["group_id", "sender_id", "created_at"],
    )
    op.create_index(
        "ix_grant_records_recipient_period", "grant_records",
        ["group_id", "recipient_id", "created_at"],
    )


def downgrade() -> None:
    op.drop_index("ix_grant_records_recipient_period", table_name="grant_records")
    op.drop_index("ix_grant_records_sender_period", table_name="grant_records")
    op.drop_table("grant_records")
