"""Ledger Views — remaining, received, leaderboard and monthly report routes.

Tests cover:
    - remaining reports limit, remaining and given-this-month
    - received returns count and recent list
    - leaderboard ranks entries from 1
    - monthly report returns the requested month; invalid month is 400
"""

from tests.services.ledger_factories import record_many, utc


async def test_remaining_for_new_sender(client):
    res = await client.get("/api/v1/groups/G/senders/u1/remaining")
    assert res.status_code == 200
    assert res.json() == {
        "sender_id": "u1",
        "group_id": "G",
        "remaining": 10,
        "monthly_limit": 10,
        "given_this_month": 0,
    }


async def test_remaining_after_grants(client, ledger, now):
    await record_many(ledger, 4, now, sender="u1", group="G")
    res = await client.get("/api/v1/groups/G/senders/u1/remaining")
    assert res.json()["remaining"] == 6
    assert res.json()["given_this_month"] == 4


async def test_received_empty(client):
    res = await client.get("/api/v1/groups/G/recipients/r1/received")
    assert res.status_code == 200
    assert res.json()["count"] == 0
    assert res.json()["recent"] == []


async def test_received_lists_recent(client, ledger, now):
    await record_many(ledger, 2, now, recipient="r1", group="G", message="thanks", sender_name="Sam")
    res = await client.get("/api/v1/groups/G/recipients/r1/received")
    data = res.json()
    assert data["count"] == 2
    assert data["recent"][0]["sender_display_name"] == "Sam"
    assert data["recent"][0]["message"] == "thanks"


async def test_leaderboard_ranks(client, ledger, now):
    await record_many(ledger, 1, now, recipient="A", group="G")
    await record_many(ledger, 2, now, recipient="B", group="G", sender="s2")
    res = await client.get("/api/v1/groups/G/leaderboard")
    data = res.json()
    assert res.status_code == 200
    assert [(e["rank"], e["recipient_id"], e["count"]) for e in data["entries"]] == [
        (1, "B", 2), (2, "A", 1),
    ]
    assert data["period_start"].startswith("2026-10-01")


async def test_leaderboard_empty(client):
    res = await client.get("/api/v1/groups/G/leaderboard")
    assert res.json()["entries"] == []


async def test_monthly_report(client, ledger, now):
    now.set(utc(2026, 9, 10, 9, 0, 0))
    await record_many(ledger, 2, now, group="G")
    now.set(utc(2026, 10, 10, 9, 0, 0))
    await record_many(ledger, 1, now, group="G")

    res = await client.get("/api/v1/groups/G/reports/2026/9")
    data = res.json()
    assert res.status_code == 200
    assert data["total"] == 2
    assert all(g["created_at"].startswith("2026-09-10") for g in data["grants"])


async def test_monthly_report_invalid_month(client):
    res = await client.get("/api/v1/groups/G/reports/2026/13")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"
