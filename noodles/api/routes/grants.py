"""Grant Routes — send a Golden Noodle.

Invariants:
    - Validation runs before recording; a rejected grant writes nothing
    - remaining_after is derived from the allowance observed during validation,
      so no second quota query is issued

Design Decisions:
    - Check-then-record is two store calls with no lock spanning them; two
      concurrent sends from one sender can overshoot the limit by one
"""

from fastapi import APIRouter, Depends, status

from noodles.api.dependencies import get_ledger
from noodles.core.domain_types import ActorId, GroupId
from noodles.core.enforce_grant import error_context
from noodles.schemas.grant import GrantCreate, GrantCreated, GrantResponse
from noodles.services.recognition_ledger import RecognitionLedger

router = APIRouter(prefix="/api/v1/groups", tags=["grants"])


@router.post(
    "/{group_id}/grants", response_model=GrantCreated,
    status_code=status.HTTP_201_CREATED,
)
async def send_grant(
    group_id: str,
    body: GrantCreate,
    ledger: RecognitionLedger = Depends(get_ledger),
):
    """Validate and record one grant."""
    sender_id, recipient_id = ActorId(body.sender_id), ActorId(body.recipient_id)
    decision = await ledger.validate(
        sender_id, recipient_id, body.recipient_is_eligible, GroupId(group_id),
    )
    if not decision.ok:
        decision.raise_for_reason(error_context(sender_id, recipient_id, GroupId(group_id)))

    record = await ledger.record_grant(body.to_draft(group_id))
    return GrantCreated(
        grant=GrantResponse.from_record(record),
        remaining_after=max(0, decision.remaining - 1),
    )
