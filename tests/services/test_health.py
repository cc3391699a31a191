"""Health probes — liveness always up, readiness follows the database."""

import noodles.infrastructure.database as db_module


async def test_liveness(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_without_database(client, monkeypatch):
    monkeypatch.setattr(db_module, "db_manager", None)
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 503
    assert res.json()["reason"] == "database_unavailable"


async def test_readiness_with_database(client, db_manager, monkeypatch):
    monkeypatch.setattr(db_module, "db_manager", db_manager)
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"


async def test_readiness_with_unreachable_database(client, unreachable_manager, monkeypatch):
    monkeypatch.setattr(db_module, "db_manager", unreachable_manager)
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 503
    assert res.json()["status"] == "not_ready"
