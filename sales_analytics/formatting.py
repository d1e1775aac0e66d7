"""
sales_analytics/formatting.py

Display formatting for rupee amounts, percentages and counts.

Applied at render time only; aggregates keep full precision.
"""

from __future__ import annotations

from typing import Final

CRORE: Final[float] = 10_000_000.0
LAKH: Final[float] = 100_000.0
RUPEE_SYMBOL: Final[str] = "₹"


def _group_indian(digits: str) -> str:
    """
    Insert Indian digit separators: last three digits, then pairs.
    """

    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups: list[str] = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join([*groups, tail])


def format_currency(amount: float) -> str:
    """
    Render a rupee amount with no fractional digits, e.g. ``₹12,34,567``.
    """

    digits = f"{abs(amount):.0f}"
    sign = "-" if amount < 0 and digits != "0" else ""
    return f"{sign}{RUPEE_SYMBOL}{_group_indian(digits)}"


def format_compact_currency(amount: float) -> str:
    """
    Render large amounts in crore/lakh notation.

    ``>= 1 crore`` -> ``₹1.0Cr``; ``>= 1 lakh`` -> ``₹1.5L``; smaller
    amounts fall through to :func:`format_currency`.
    """

    if amount >= CRORE:
        return f"{RUPEE_SYMBOL}{amount / CRORE:.1f}Cr"
    if amount >= LAKH:
        return f"{RUPEE_SYMBOL}{amount / LAKH:.1f}L"
    return format_currency(amount)


def format_percentage(value: float) -> str:
    # Not clamped: completion rates can exceed 100.
    return f"{value:.1f}%"


def format_count(value: int) -> str:
    return f"{value:,}"
