"""Boundary Protocols — contracts between the ledger rules and the persistence shell.

Invariants:
    - Core NEVER imports from the shell — dependency arrows point inward only
    - Filters travel as GrantCriteria values, never as query strings
    - The store assigns id and created_at; callers never supply them

Design Decisions:
    - Protocol over ABC: structural subtyping, tests can pass any conforming fake
    - Async in Protocol: implementations do network IO, services await them
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from noodles.core.domain_types import (
    ActorId, GroupId, GrantRecord, LeaderboardEntry, SortDirection,
)


@dataclass(frozen=True)
class GrantCriteria:
    """Equality and range predicates over grant records.

    None means "no predicate on this field". created_since is inclusive,
    created_before exclusive, matching PeriodWindow.
    """
    group_id: GroupId | None = None
    sender_id: ActorId | None = None
    recipient_id: ActorId | None = None
    created_since: datetime | None = None
    created_before: datetime | None = None
    order: SortDirection = SortDirection.DESC
    limit: int | None = None


class LedgerStore(Protocol):
    """Append-only grant ledger — implemented by the shell."""
    async def count(self, criteria: GrantCriteria) -> int: ...
    async def query(self, criteria: GrantCriteria) -> list[GrantRecord]: ...
    async def count_by_recipient(
        self, criteria: GrantCriteria,
    ) -> list[LeaderboardEntry]: ...
    async def insert(self, fields: dict) -> GrantRecord: ...
