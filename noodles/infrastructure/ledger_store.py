"""SQL Ledger Store — SQLAlchemy implementation of the LedgerStore protocol.

Invariants:
    - Append-only: this module exposes no update or delete path
    - Every predicate is a bound SQLAlchemy expression (no string-built queries)
    - created_at is assigned here, at insert time, in UTC
    - Returned datetimes are always timezone-aware UTC

Design Decisions:
    - One session per call through DatabaseSessionManager: the store holds no
      connection state of its own
    - Leaderboard aggregation done in SQL (GROUP BY), ties pinned to earliest
      first recognition, then recipient_id, so equal counts order deterministically
    - A renamed recipient stays one row, shown under the name on their newest grant
"""

import logging
from datetime import datetime, timezone
from typing import Callable

from sqlalchemy import func, select
from sqlalchemy.orm import aliased

from noodles.core.domain_types import (
    ActorId, GrantId, GrantRecord, GroupId, LeaderboardEntry, SortDirection,
)
from noodles.core.period_clock import utc_now
from noodles.core.repository_protocols import GrantCriteria
from noodles.infrastructure.database import DatabaseSessionManager
from noodles.models.grant_record import GrantRecordRow

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back; stored values are always UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _predicates(criteria: GrantCriteria, table=GrantRecordRow) -> list:
    clauses = []
    if criteria.group_id is not None:
        clauses.append(table.group_id == criteria.group_id)
    if criteria.sender_id is not None:
        clauses.append(table.sender_id == criteria.sender_id)
    if criteria.recipient_id is not None:
        clauses.append(table.recipient_id == criteria.recipient_id)
    if criteria.created_since is not None:
        clauses.append(table.created_at >= _as_utc(criteria.created_since))
    if criteria.created_before is not None:
        clauses.append(table.created_at < _as_utc(criteria.created_before))
    return clauses


def to_record(row: GrantRecordRow) -> GrantRecord:
    return GrantRecord(
        id=GrantId(row.id),
        sender_id=ActorId(row.sender_id),
        recipient_id=ActorId(row.recipient_id),
        sender_display_name=row.sender_display_name,
        recipient_display_name=row.recipient_display_name,
        sender_username=row.sender_username,
        recipient_username=row.recipient_username,
        group_id=GroupId(row.group_id),
        group_name=row.group_name,
        channel_id=row.channel_id,
        message=row.message,
        created_at=_as_utc(row.created_at),
    )


def _latest_display_name(criteria: GrantCriteria):
    """Recipient name from their newest grant in the same filtered window."""
    latest = aliased(GrantRecordRow)
    return (
        select(latest.recipient_display_name)
        .where(
            latest.recipient_id == GrantRecordRow.recipient_id,
            *_predicates(criteria, latest),
        )
        .order_by(latest.created_at.desc(), latest.id.desc())
        .limit(1)
        .correlate(GrantRecordRow)
        .scalar_subquery()
    )


class SqlLedgerStore:
    """Grant ledger backed by a relational table."""

    def __init__(
        self,
        db: DatabaseSessionManager,
        now: Callable[[], datetime] = utc_now,
    ):
        self.db = db
        self._now = now

    async def count(self, criteria: GrantCriteria) -> int:
        stmt = select(func.count(GrantRecordRow.id)).where(*_predicates(criteria))
        async with self.db.session() as session:
            result = await session.execute(stmt)
            return result.scalar_one()

    async def query(self, criteria: GrantCriteria) -> list[GrantRecord]:
        if criteria.order is SortDirection.ASC:
            ordering = (GrantRecordRow.created_at.asc(), GrantRecordRow.id.asc())
        else:
            ordering = (GrantRecordRow.created_at.desc(), GrantRecordRow.id.desc())
        stmt = (
            select(GrantRecordRow)
            .where(*_predicates(criteria))
            .order_by(*ordering)
        )
        if criteria.limit is not None:
            stmt = stmt.limit(criteria.limit)
        async with self.db.session() as session:
            result = await session.execute(stmt)
            return [to_record(row) for row in result.scalars().all()]

    async def count_by_recipient(
        self, criteria: GrantCriteria,
    ) -> list[LeaderboardEntry]:
        received = func.count(GrantRecordRow.id).label("received")
        first_received = func.min(GrantRecordRow.created_at).label("first_received")
        stmt = (
            select(
                GrantRecordRow.recipient_id,
                _latest_display_name(criteria),
                received,
                first_received,
            )
            .where(*_predicates(criteria))
            .group_by(GrantRecordRow.recipient_id)
            .order_by(
                received.desc(),
                first_received.asc(),
                GrantRecordRow.recipient_id.asc(),
            )
        )
        if criteria.limit is not None:
            stmt = stmt.limit(criteria.limit)
        async with self.db.session() as session:
            result = await session.execute(stmt)
            return [
                LeaderboardEntry(
                    recipient_id=ActorId(recipient_id),
                    recipient_display_name=display_name,
                    count=count,
                )
                for recipient_id, display_name, count, _ in result.all()
            ]

    async def insert(self, fields: dict) -> GrantRecord:
        row = GrantRecordRow(**fields, created_at=_as_utc(self._now()))
        async with self.db.session() as session:
            session.add(row)
            await session.commit()
            await session.refresh(row)
            record = to_record(row)
        logger.info(
            f"Recorded grant {record.id}",
            extra={
                "grant_id": str(record.id),
                "sender_id": record.sender_id,
                "recipient_id": record.recipient_id,
                "group_id": record.group_id,
            },
        )
        return record
