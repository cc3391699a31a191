"""GrantRecord ORM — the append-only ledger table.

Invariants:
    - Rows are inserted once and never updated or deleted
    - created_at is assigned by the store at insert time (UTC); the server
      default only covers rows written outside the store
    - message is at most 500 characters (enforced before insert)

Design Decisions:
    - Display names and usernames denormalized: captured at grant time, not re-derived
    - Composite indexes match the two hot filters (sender quota, recipient summary)
"""

import uuid
from datetime import datetime

from sqlalchemy import CheckConstraint, String, DateTime, Index, func
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from noodles.db.base import Base


class GrantRecordRow(Base):
    """One Golden Noodle sent from one actor to another within a group."""
    __tablename__ = "grant_records"
    __table_args__ = (
        CheckConstraint("sender_id <> recipient_id", name="ck_grant_records_not_self"),
        Index("ix_grant_records_sender_period", "group_id", "sender_id", "created_at"),
        Index("ix_grant_records_recipient_period", "group_id", "recipient_id", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    sender_id: Mapped[str] = mapped_column(String(64), nullable=False)
    sender_username: Mapped[str] = mapped_column(String(100), nullable=False)
    sender_display_name: Mapped[str] = mapped_column(String(100), nullable=False)
    recipient_id: Mapped[str] = mapped_column(String(64), nullable=False)
    recipient_username: Mapped[str] = mapped_column(String(100), nullable=False)
    recipient_display_name: Mapped[str] = mapped_column(String(100), nullable=False)
    group_id: Mapped[str] = mapped_column(String(64), nullable=False)
    group_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    channel_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    message: Mapped[str] = mapped_column(String(500), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(),
    )
