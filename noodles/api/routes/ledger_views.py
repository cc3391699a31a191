"""Ledger Views — balance, received history, leaderboard and monthly report.

Invariants:
    - GET only; nothing here writes to the ledger
    - All views except the report are scoped to the current calendar month
"""

from fastapi import APIRouter, Depends, Path

from noodles.api.dependencies import get_ledger
from noodles.core.domain_types import ActorId, GroupId
from noodles.schemas.grant import (
    GrantResponse,
    LeaderboardResponse,
    LeaderboardRow,
    MonthlyReportResponse,
    ReceivedResponse,
    RemainingResponse,
)
from noodles.services.recognition_ledger import RecognitionLedger

router = APIRouter(prefix="/api/v1/groups", tags=["ledger"])


@router.get("/{group_id}/senders/{sender_id}/remaining", response_model=RemainingResponse)
async def get_remaining(
    group_id: str,
    sender_id: str,
    ledger: RecognitionLedger = Depends(get_ledger),
):
    """Noodles the sender can still give this month."""
    remaining = await ledger.remaining_allowance(ActorId(sender_id), GroupId(group_id))
    return RemainingResponse(
        sender_id=sender_id,
        group_id=group_id,
        remaining=remaining,
        monthly_limit=ledger.monthly_limit,
        given_this_month=ledger.monthly_limit - remaining,
    )


@router.get(
    "/{group_id}/recipients/{recipient_id}/received", response_model=ReceivedResponse,
)
async def get_received(
    group_id: str,
    recipient_id: str,
    ledger: RecognitionLedger = Depends(get_ledger),
):
    """Count and most recent recognitions received this month."""
    summary = await ledger.received_summary(ActorId(recipient_id), GroupId(group_id))
    return ReceivedResponse.from_summary(recipient_id, group_id, summary)


@router.get("/{group_id}/leaderboard", response_model=LeaderboardResponse)
async def get_leaderboard(
    group_id: str,
    ledger: RecognitionLedger = Depends(get_ledger),
):
    """Top recognized members this month."""
    entries = await ledger.leaderboard(GroupId(group_id))
    return LeaderboardResponse(
        group_id=group_id,
        period_start=ledger.clock.current_period_start(),
        entries=[
            LeaderboardRow.from_entry(rank, entry)
            for rank, entry in enumerate(entries, start=1)
        ],
    )


@router.get("/{group_id}/reports/{year}/{month}", response_model=MonthlyReportResponse)
async def get_monthly_report(
    group_id: str,
    year: int = Path(ge=1, le=9998),
    month: int = Path(ge=1, le=12),
    ledger: RecognitionLedger = Depends(get_ledger),
):
    """Every grant in one calendar month, newest first."""
    records = await ledger.monthly_transactions(GroupId(group_id), year, month)
    return MonthlyReportResponse(
        group_id=group_id,
        year=year,
        month=month,
        total=len(records),
        grants=[GrantResponse.from_record(r) for r in records],
    )
