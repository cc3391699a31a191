"""Grant Recorder — persisting drafts as immutable ledger records.

Tests cover:
    - store assigns id and created_at; fields round-trip from the draft
    - omitted message becomes the placeholder
    - 500-char message succeeds, 501-char message fails and writes nothing
    - end-to-end: grant, then balance and received summary reflect it
"""

import pytest

from noodles.core.errors import MessageTooLongError
from noodles.core.repository_protocols import GrantCriteria
from tests.services.ledger_factories import make_draft


async def test_record_returns_materialized_record(ledger, now):
    record = await ledger.record_grant(make_draft(message="Great work"))
    assert record.id is not None
    assert record.message == "Great work"
    assert record.created_at == now()
    assert record.sender_id == "sender-1"
    assert record.recipient_id == "recipient-1"
    assert record.group_id == "group-1"
    assert record.group_name == "Noodle House"
    assert record.channel_id == "channel-1"


async def test_missing_message_uses_placeholder(ledger):
    record = await ledger.record_grant(make_draft(message=None))
    assert record.message == "For being awesome!"


async def test_500_char_message_succeeds(ledger):
    record = await ledger.record_grant(make_draft(message="a" * 500))
    assert len(record.message) == 500


async def test_501_char_message_rejected_without_write(ledger, store):
    with pytest.raises(MessageTooLongError):
        await ledger.record_grant(make_draft(message="a" * 501))
    assert await store.count(GrantCriteria()) == 0


async def test_each_record_gets_unique_id(ledger):
    first = await ledger.record_grant(make_draft())
    second = await ledger.record_grant(make_draft())
    assert first.id != second.id


async def test_end_to_end_grant_updates_views(ledger):
    record = await ledger.record_grant(
        make_draft(sender="S", recipient="R", group="G", message="Great work", sender_name="Sam"),
    )
    assert record.id is not None
    assert record.message == "Great work"

    assert await ledger.remaining_allowance("S", "G") == 9

    summary = await ledger.received_summary("R", "G")
    assert summary.count == 1
    assert len(summary.recent) == 1
    assert summary.recent[0].sender_display_name == "Sam"
    assert summary.recent[0].message == "Great work"
    assert summary.recent[0].created_at == record.created_at
