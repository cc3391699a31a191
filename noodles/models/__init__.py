"""ORM Models — SQLAlchemy declarative models for persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)

Design Decisions:
    - All models imported here so Base.metadata is complete before create_all
      or alembic autogenerate runs
"""

from noodles.models.grant_record import GrantRecordRow  # noqa: F401
