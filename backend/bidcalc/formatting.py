"""Formatting helpers for bid documents.

Bids are read by owners and GCs who check the arithmetic, so currency keeps
its cents at every size (e.g. '$149,380.00', not '$149K').
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from decimal import Decimal


def format_currency(amount: Decimal) -> str:
    """Format a dollar amount with separators and cents (e.g. '$1,234.50')."""
    if amount < 0:
        return f"-${-amount:,.2f}"
    return f"${amount:,.2f}"


def format_percent(percent: Decimal) -> str:
    """Format a percent without trailing zeros (e.g. '20%', '11.69%')."""
    text = f"{percent:,.2f}".rstrip("0").rstrip(".")
    return f"{text}%"
