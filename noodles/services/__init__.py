"""Service Layer — async orchestration of core rules around the ledger store.

Invariants:
    - Services hold no private copies of records; every call queries the store
    - Services receive their collaborators by injection (no module-level state)
"""
