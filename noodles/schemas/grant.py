"""Grant Schemas — Pydantic models for the HTTP boundary.

Invariants:
    - Identifiers and display strings are non-empty and stripped
    - message is NOT length-limited here: the ledger rejects long messages with
      MESSAGE_TOO_LONG so every caller gets the same error code

Design Decisions:
    - from_record/from_entry classmethods keep core dataclasses free of pydantic
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from noodles.core.domain_types import (
    ActorId, GrantRecord, GroupId, LeaderboardEntry, ReceivedSummary,
)
from noodles.core.grant_message import GrantDraft, message_from_input


class GrantCreate(BaseModel):
    """Request to send one Golden Noodle."""
    sender_id: str = Field(min_length=1, max_length=64)
    sender_username: str = Field(min_length=1, max_length=100)
    sender_display_name: str | None = Field(None, max_length=100)
    recipient_id: str = Field(min_length=1, max_length=64)
    recipient_username: str = Field(min_length=1, max_length=100)
    recipient_display_name: str | None = Field(None, max_length=100)
    recipient_is_eligible: bool = True
    channel_id: str | None = Field(None, max_length=64)
    group_name: str | None = Field(None, max_length=100)
    message: str | None = None

    @field_validator("sender_id", "recipient_id", "sender_username", "recipient_username")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("cannot be empty or whitespace")
        return v

    def to_draft(self, group_id: str) -> GrantDraft:
        return GrantDraft(
            sender_id=ActorId(self.sender_id),
            recipient_id=ActorId(self.recipient_id),
            sender_display_name=self.sender_display_name or self.sender_username,
            recipient_display_name=self.recipient_display_name or self.recipient_username,
            sender_username=self.sender_username,
            recipient_username=self.recipient_username,
            group_id=GroupId(group_id),
            channel_id=self.channel_id,
            group_name=self.group_name,
            message=message_from_input(self.message),
        )


class GrantResponse(BaseModel):
    id: UUID
    sender_id: str
    recipient_id: str
    sender_display_name: str
    recipient_display_name: str
    sender_username: str
    recipient_username: str
    group_id: str
    group_name: str | None
    channel_id: str | None
    message: str
    created_at: datetime

    @classmethod
    def from_record(cls, record: GrantRecord) -> "GrantResponse":
        return cls(
            id=record.id,
            sender_id=record.sender_id,
            recipient_id=record.recipient_id,
            sender_display_name=record.sender_display_name,
            recipient_display_name=record.recipient_display_name,
            sender_username=record.sender_username,
            recipient_username=record.recipient_username,
            group_id=record.group_id,
            group_name=record.group_name,
            channel_id=record.channel_id,
            message=record.message,
            created_at=record.created_at,
        )


class GrantCreated(BaseModel):
    grant: GrantResponse
    remaining_after: int


class RemainingResponse(BaseModel):
    sender_id: str
    group_id: str
    remaining: int
    monthly_limit: int
    given_this_month: int


class ReceivedItem(BaseModel):
    sender_display_name: str
    message: str
    created_at: datetime


class ReceivedResponse(BaseModel):
    recipient_id: str
    group_id: str
    count: int
    recent: list[ReceivedItem]

    @classmethod
    def from_summary(
        cls, recipient_id: str, group_id: str, summary: ReceivedSummary,
    ) -> "ReceivedResponse":
        return cls(
            recipient_id=recipient_id,
            group_id=group_id,
            count=summary.count,
            recent=[
                ReceivedItem(
                    sender_display_name=r.sender_display_name,
                    message=r.message,
                    created_at=r.created_at,
                )
                for r in summary.recent
            ],
        )


class LeaderboardRow(BaseModel):
    rank: int
    recipient_id: str
    recipient_display_name: str
    count: int

    @classmethod
    def from_entry(cls, rank: int, entry: LeaderboardEntry) -> "LeaderboardRow":
        return cls(
            rank=rank,
            recipient_id=entry.recipient_id,
            recipient_display_name=entry.recipient_display_name,
            count=entry.count,
        )


class LeaderboardResponse(BaseModel):
    group_id: str
    period_start: datetime
    entries: list[LeaderboardRow]


class MonthlyReportResponse(BaseModel):
    group_id: str
    year: int
    month: int
    total: int
    grants: list[GrantResponse]
