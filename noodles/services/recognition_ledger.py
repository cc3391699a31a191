"""Recognition Ledger — the public surface of the quota-and-ledger engine.

Invariants:
    - All components share one store and one clock per ledger instance
    - Exposes remaining_allowance, validate, record_grant, received_summary,
      leaderboard and monthly_transactions; nothing else is public

Design Decisions:
    - Built from Settings + an explicit persistence handle (from_settings),
      so tests construct it with an in-memory store and a frozen clock
"""

from noodles.config import Settings
from noodles.core.domain_types import (
    ActorId, GrantRecord, GroupId, LeaderboardEntry, ReceivedSummary,
)
from noodles.core.enforce_grant import GrantDecision
from noodles.core.grant_message import GrantDraft
from noodles.core.period_clock import PeriodClock
from noodles.core.repository_protocols import LedgerStore
from noodles.infrastructure.database import DatabaseSessionManager
from noodles.infrastructure.ledger_store import SqlLedgerStore
from noodles.services.aggregate_reporter import AggregateReporter
from noodles.services.grant_recorder import GrantRecorder
from noodles.services.grant_validator import GrantValidator
from noodles.services.quota_engine import QuotaEngine


class RecognitionLedger:
    """Facade over quota, validation, recording and reporting."""

    def __init__(
        self,
        store: LedgerStore,
        clock: PeriodClock,
        settings: Settings,
    ):
        self.clock = clock
        self._quota = QuotaEngine(store, clock, settings.monthly_limit)
        self._validator = GrantValidator(self._quota)
        self._recorder = GrantRecorder(
            store, settings.default_message, settings.max_message_length,
        )
        self._reporter = AggregateReporter(
            store, clock, settings.recent_received_limit, settings.leaderboard_size,
        )

    @classmethod
    def from_settings(
        cls, settings: Settings, db: DatabaseSessionManager,
    ) -> "RecognitionLedger":
        clock = PeriodClock(settings.tz)
        return cls(SqlLedgerStore(db, clock.now), clock, settings)

    @property
    def monthly_limit(self) -> int:
        return self._quota.monthly_limit

    async def remaining_allowance(self, sender_id: ActorId, group_id: GroupId) -> int:
        return await self._quota.remaining_allowance(sender_id, group_id)

    async def validate(
        self,
        sender_id: ActorId,
        recipient_id: ActorId,
        recipient_is_eligible: bool,
        group_id: GroupId,
    ) -> GrantDecision:
        return await self._validator.validate(
            sender_id, recipient_id, recipient_is_eligible, group_id,
        )

    async def record_grant(self, draft: GrantDraft) -> GrantRecord:
        return await self._recorder.record_grant(draft)

    async def received_summary(
        self, recipient_id: ActorId, group_id: GroupId,
    ) -> ReceivedSummary:
        return await self._reporter.received_summary(recipient_id, group_id)

    async def leaderboard(self, group_id: GroupId) -> list[LeaderboardEntry]:
        return await self._reporter.leaderboard(group_id)

    async def monthly_transactions(
        self, group_id: GroupId, year: int, month: int,
    ) -> list[GrantRecord]:
        return await self._reporter.monthly_transactions(group_id, year, month)
