"""Enums for the bidcalc domain models.

Values are the upper-case names used in bid documents. Free-form store values
are coerced by the input models rather than rejected here.
"""

from enum import StrEnum


class ContingencyOrder(StrEnum):
    """Where contingency sits relative to markup."""

    BEFORE_MARKUP = "BEFORE_MARKUP"
    AFTER_MARKUP = "AFTER_MARKUP"


class LineItemKind(StrEnum):
    """Kind of concrete work a line item prices."""

    SLAB = "SLAB"
    FOOTING = "FOOTING"
    WALL = "WALL"
    OTHER = "OTHER"


class Unit(StrEnum):
    """Units of measure for line item quantities."""

    SF = "SF"
    LF = "LF"
    CY = "CY"
    EA = "EA"
