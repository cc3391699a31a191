"""Grant Validator — decides whether a prospective grant is admissible.

Invariants:
    - Self check, then eligibility, then quota; first failure wins
    - The quota lookup only happens when the participant rules pass
    - No side effects besides the quota read
"""

from noodles.core.domain_types import ActorId, GroupId
from noodles.core.enforce_grant import (
    GrantDecision, check_participants, decide_with_quota,
)
from noodles.services.quota_engine import QuotaEngine


class GrantValidator:

    def __init__(self, quota: QuotaEngine):
        self.quota = quota

    async def validate(
        self,
        sender_id: ActorId,
        recipient_id: ActorId,
        recipient_is_eligible: bool,
        group_id: GroupId,
    ) -> GrantDecision:
        reason = check_participants(sender_id, recipient_id, recipient_is_eligible)
        if reason is not None:
            return GrantDecision(reason, monthly_limit=self.quota.monthly_limit)
        remaining = await self.quota.remaining_allowance(sender_id, group_id)
        return decide_with_quota(remaining, self.quota.monthly_limit)
