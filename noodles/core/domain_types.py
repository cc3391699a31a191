"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - ActorId and GroupId wrap platform-assigned strings — never mix them up in signatures
    - GrantRecord is frozen: a recorded grant is never mutated
    - All rejection reasons encoded as an Enum — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

ActorId = NewType("ActorId", str)
GroupId = NewType("GroupId", str)
GrantId = NewType("GrantId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class RejectionReason(str, Enum):
    """Why a prospective grant is inadmissible. Checked in declaration order."""
    SELF_GRANT = "self_grant"
    INELIGIBLE_RECIPIENT = "ineligible_recipient"
    QUOTA_EXHAUSTED = "quota_exhausted"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


# ─── Records ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class GrantRecord:
    """One recorded grant, as materialized by the ledger store."""
    id: GrantId
    sender_id: ActorId
    recipient_id: ActorId
    sender_display_name: str
    recipient_display_name: str
    sender_username: str
    recipient_username: str
    group_id: GroupId
    channel_id: str | None
    message: str
    created_at: datetime
    group_name: str | None = None


@dataclass(frozen=True)
class ReceivedGrant:
    """Projection of a grant for the recipient's recent list."""
    sender_display_name: str
    message: str
    created_at: datetime


@dataclass(frozen=True)
class ReceivedSummary:
    count: int
    recent: list[ReceivedGrant]


@dataclass(frozen=True)
class LeaderboardEntry:
    recipient_id: ActorId
    recipient_display_name: str
    count: int
