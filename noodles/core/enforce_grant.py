"""Grant Admissibility — ordered business rules for a prospective grant.

Invariants:
    - Order is fixed: self-grant, then eligibility, then quota
    - Each rule short-circuits; at most one RejectionReason is reported
    - check_participants is PURE; the quota rule needs a store lookup and is
      applied by the shell only when the participant rules pass
"""

from dataclasses import dataclass

from noodles.core.domain_types import ActorId, GroupId, RejectionReason
from noodles.core.enforce_quota import is_exhausted
from noodles.core.errors import (
    ErrorContext,
    IneligibleRecipientError,
    NoodleError,
    QuotaExhaustedError,
    SelfGrantError,
)


@dataclass(frozen=True)
class GrantDecision:
    """Outcome of validating a prospective grant."""
    reason: RejectionReason | None = None
    remaining: int | None = None
    monthly_limit: int | None = None

    @property
    def ok(self) -> bool:
        return self.reason is None

    def to_error(self, context: ErrorContext | None = None) -> NoodleError | None:
        """Typed error matching the rejection, or None when admissible."""
        if self.reason is RejectionReason.SELF_GRANT:
            return SelfGrantError(context)
        if self.reason is RejectionReason.INELIGIBLE_RECIPIENT:
            return IneligibleRecipientError(context)
        if self.reason is RejectionReason.QUOTA_EXHAUSTED:
            return QuotaExhaustedError(self.monthly_limit or 0, context)
        return None

    def raise_for_reason(self, context: ErrorContext | None = None) -> None:
        error = self.to_error(context)
        if error is not None:
            raise error


def check_participants(
    sender_id: ActorId, recipient_id: ActorId, recipient_is_eligible: bool,
) -> RejectionReason | None:
    """Self and eligibility rules. Pure — no quota lookup."""
    if sender_id == recipient_id:
        return RejectionReason.SELF_GRANT
    if not recipient_is_eligible:
        return RejectionReason.INELIGIBLE_RECIPIENT
    return None


def decide_with_quota(remaining: int, monthly_limit: int) -> GrantDecision:
    """Quota rule, applied after check_participants passed."""
    if is_exhausted(remaining):
        return GrantDecision(
            RejectionReason.QUOTA_EXHAUSTED, remaining, monthly_limit,
        )
    return GrantDecision(None, remaining, monthly_limit)


def error_context(
    sender_id: ActorId, recipient_id: ActorId, group_id: GroupId,
) -> ErrorContext:
    return ErrorContext(
        sender_id=sender_id, recipient_id=recipient_id, group_id=group_id,
    )
