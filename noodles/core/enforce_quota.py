"""Quota Enforcement — pure allowance arithmetic for the monthly allotment.

Invariants:
    - compute_remaining never returns a negative number
    - MONTHLY_LIMIT (10) is the default allotment; settings may override it
"""

MONTHLY_LIMIT: int = 10


def compute_remaining(sent_count: int, monthly_limit: int = MONTHLY_LIMIT) -> int:
    """Allotment left after `sent_count` grants this period."""
    return max(0, monthly_limit - sent_count)


def is_exhausted(remaining: int) -> bool:
    return remaining <= 0
