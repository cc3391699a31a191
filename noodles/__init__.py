"""Golden Noodles Package — peer-recognition ledger with monthly quotas.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
