"""Quota Engine — remaining monthly allotment for a sender within a group.

Invariants:
    - Counts are read fresh from the store on every call (no caching)
    - Result is never negative
    - Store failures propagate unchanged as PersistenceError
"""

import logging

from noodles.core.domain_types import ActorId, GroupId
from noodles.core.enforce_quota import MONTHLY_LIMIT, compute_remaining
from noodles.core.period_clock import PeriodClock
from noodles.core.repository_protocols import GrantCriteria, LedgerStore

logger = logging.getLogger(__name__)


class QuotaEngine:
    """Derives a sender's remaining allowance from the ledger."""

    def __init__(
        self,
        store: LedgerStore,
        clock: PeriodClock,
        monthly_limit: int = MONTHLY_LIMIT,
    ):
        self.store = store
        self.clock = clock
        self.monthly_limit = monthly_limit

    async def sent_this_period(self, sender_id: ActorId, group_id: GroupId) -> int:
        return await self.store.count(GrantCriteria(
            group_id=group_id,
            sender_id=sender_id,
            created_since=self.clock.current_period_start(),
        ))

    async def remaining_allowance(self, sender_id: ActorId, group_id: GroupId) -> int:
        sent = await self.sent_this_period(sender_id, group_id)
        remaining = compute_remaining(sent, self.monthly_limit)
        logger.debug(
            f"Sender has {remaining} noodles left",
            extra={"sender_id": sender_id, "group_id": group_id, "remaining": remaining},
        )
        return remaining
