"""Database Infrastructure — declarative Base for the ledger tables.

Invariants:
    - Base is shared by ORM models and the alembic environment

Design Decisions:
    - asyncpg driver for PostgreSQL, aiosqlite for local runs and tests
"""
