"""Quota Engine — remaining allowance derived fresh from the ledger.

Tests cover:
    - remaining == max(0, 10 - sent) for every sent count 0..10
    - quotas are isolated per group and per sender
    - grants received do not consume the recipient's allowance
    - crossing into the next month resets the allowance to 10
    - the month boundary is taken in the configured timezone, not UTC
"""

import pytest
from zoneinfo import ZoneInfo

from noodles.core.period_clock import PeriodClock
from noodles.services.recognition_ledger import RecognitionLedger
from tests.services.ledger_factories import record_many, utc


async def test_fresh_sender_has_full_allowance(ledger):
    assert await ledger.remaining_allowance("sender-1", "group-1") == 10


@pytest.mark.parametrize("sent", [1, 4, 9, 10])
async def test_remaining_is_limit_minus_sent(ledger, now, sent):
    await record_many(ledger, sent, now)
    assert await ledger.remaining_allowance("sender-1", "group-1") == max(0, 10 - sent)


async def test_quota_is_per_group(ledger, now):
    await record_many(ledger, 10, now, group="group-1")
    assert await ledger.remaining_allowance("sender-1", "group-1") == 0
    assert await ledger.remaining_allowance("sender-1", "group-2") == 10


async def test_quota_is_per_sender(ledger, now):
    await record_many(ledger, 3, now, sender="alice", recipient="carol")
    assert await ledger.remaining_allowance("alice", "group-1") == 7
    assert await ledger.remaining_allowance("bob", "group-1") == 10


async def test_receiving_does_not_consume_allowance(ledger, now):
    await record_many(ledger, 4, now, sender="alice", recipient="bob")
    assert await ledger.remaining_allowance("bob", "group-1") == 10


async def test_allowance_resets_in_next_period(ledger, now):
    now.set(utc(2026, 10, 31, 23, 59, 0))
    await record_many(ledger, 10, now)
    assert await ledger.remaining_allowance("sender-1", "group-1") == 0

    now.set(utc(2026, 11, 1, 0, 0, 1))
    assert await ledger.remaining_allowance("sender-1", "group-1") == 10


async def test_remaining_never_negative_after_overshoot(ledger, now):
    # recorder does not re-check quota, so a racing caller can write an 11th
    await record_many(ledger, 11, now)
    assert await ledger.remaining_allowance("sender-1", "group-1") == 0


async def test_store_failure_propagates(clock):
    from noodles.core.errors import PersistenceError
    from noodles.services.quota_engine import QuotaEngine

    class _DownStore:
        async def count(self, criteria):
            raise PersistenceError("Connection or operational error", "execute")

    engine = QuotaEngine(_DownStore(), clock)
    with pytest.raises(PersistenceError):
        await engine.remaining_allowance("sender-1", "group-1")


async def test_period_boundary_follows_reference_timezone(ledger, store, settings, now):
    la = RecognitionLedger(store, PeriodClock(ZoneInfo("America/Los_Angeles"), now), settings)
    # 03:00 UTC on Nov 1 is still the evening of Oct 31 in Los Angeles
    now.set(utc(2026, 11, 1, 3, 0, 0))
    await record_many(la, 10, now)

    now.set(utc(2026, 11, 1, 6, 0, 0))
    assert await la.remaining_allowance("sender-1", "group-1") == 0
    assert await ledger.remaining_allowance("sender-1", "group-1") == 0

    # 07:30 UTC is 00:30 PDT on Nov 1: a new month in Los Angeles only
    now.set(utc(2026, 11, 1, 7, 30, 0))
    assert await la.remaining_allowance("sender-1", "group-1") == 10
    assert await la.leaderboard("group-1") == []
    assert await ledger.remaining_allowance("sender-1", "group-1") == 0
    assert len(await ledger.leaderboard("group-1")) == 1
