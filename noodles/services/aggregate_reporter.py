"""Aggregate Reporter — received summary, leaderboard and monthly report.

Invariants:
    - Pure reads: nothing here writes to the ledger
    - Current-period views are bounded by [period start, period end)
    - Empty groups/recipients give {count: 0, recent: []} and [], never errors
    - Leaderboard order: count desc, then earliest first recognition, then recipient_id

Design Decisions:
    - received_summary issues two store calls (count + recent page) rather than
      loading the whole period, so a popular recipient stays cheap to summarize
"""

from noodles.core.domain_types import (
    ActorId, GrantRecord, GroupId, LeaderboardEntry, ReceivedGrant, ReceivedSummary,
    SortDirection,
)
from noodles.core.period_clock import PeriodClock, PeriodWindow, month_window
from noodles.core.repository_protocols import GrantCriteria, LedgerStore

RECENT_RECEIVED_LIMIT: int = 5
LEADERBOARD_SIZE: int = 10


class AggregateReporter:

    def __init__(
        self,
        store: LedgerStore,
        clock: PeriodClock,
        recent_limit: int = RECENT_RECEIVED_LIMIT,
        leaderboard_size: int = LEADERBOARD_SIZE,
    ):
        self.store = store
        self.clock = clock
        self.recent_limit = recent_limit
        self.leaderboard_size = leaderboard_size

    def _criteria(self, window: PeriodWindow, **kwargs) -> GrantCriteria:
        return GrantCriteria(
            created_since=window.start, created_before=window.end, **kwargs,
        )

    async def received_summary(
        self, recipient_id: ActorId, group_id: GroupId,
    ) -> ReceivedSummary:
        window = self.clock.current_period()
        count = await self.store.count(self._criteria(
            window, group_id=group_id, recipient_id=recipient_id,
        ))
        if count == 0:
            return ReceivedSummary(count=0, recent=[])
        records = await self.store.query(self._criteria(
            window,
            group_id=group_id,
            recipient_id=recipient_id,
            order=SortDirection.DESC,
            limit=self.recent_limit,
        ))
        return ReceivedSummary(
            count=count,
            recent=[
                ReceivedGrant(
                    sender_display_name=r.sender_display_name,
                    message=r.message,
                    created_at=r.created_at,
                )
                for r in records
            ],
        )

    async def leaderboard(self, group_id: GroupId) -> list[LeaderboardEntry]:
        window = self.clock.current_period()
        return await self.store.count_by_recipient(self._criteria(
            window, group_id=group_id, limit=self.leaderboard_size,
        ))

    async def monthly_transactions(
        self, group_id: GroupId, year: int, month: int,
    ) -> list[GrantRecord]:
        """Every grant in the given calendar month, newest first."""
        window = month_window(year, month, self.clock.tz)
        return await self.store.query(self._criteria(
            window, group_id=group_id, order=SortDirection.DESC,
        ))
