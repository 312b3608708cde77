"""Reinforcing bar weight conversions.

Pounds per linear foot for standard imperial bar sizes (ASTM A615).
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

REBAR_POUNDS_PER_FOOT: dict[str, Decimal] = {
    "#3": Decimal("0.376"),
    "#4": Decimal("0.668"),
    "#5": Decimal("1.043"),
    "#6": Decimal("1.502"),
    "#7": Decimal("2.044"),
    "#8": Decimal("2.670"),
}


def rebar_weight_lb(
    bar_size: str,
    length_lf: Decimal | int,
    table: Mapping[str, Decimal] | None = None,
) -> Decimal:
    """Weight in pounds of ``length_lf`` linear feet of ``bar_size`` bar.

    Args:
        bar_size: Bar designation such as ``"#4"``. A bare number (``"4"``)
            is accepted too.
        length_lf: Total bar length in linear feet.
        table: Optional org-specific conversion table; defaults to
            REBAR_POUNDS_PER_FOOT.

    Raises:
        ValueError: If the bar size is not in the table.
    """
    conversions = REBAR_POUNDS_PER_FOOT if table is None else table
    key = bar_size.strip()
    if not key.startswith("#"):
        key = f"#{key}"
    if key not in conversions:
        msg = f"Unknown rebar size {bar_size!r}; expected one of {sorted(conversions)}"
        raise ValueError(msg)
    return conversions[key] * Decimal(length_lf)
