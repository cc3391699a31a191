"""Infrastructure Layer — persistence handle, ledger store, logging.

Invariants:
    - Infrastructure never decides business rules (quota, eligibility)
    - All SQLAlchemy failures surface as PersistenceError
"""
