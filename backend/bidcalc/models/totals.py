"""Totals output models for the bidcalc engine."""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from bidcalc.models.enums import LineItemKind
from bidcalc.models.pricing import TotalsRequest

ZERO = Decimal(0)


class MarkupResult(BaseModel):
    """Markup dollars and the rate they represent against their base."""

    model_config = ConfigDict(frozen=True)

    markup_amount: Decimal = ZERO
    effective_percent: Decimal = ZERO


class ContingencyResult(BaseModel):
    """Contingency for one base, with the markup it ended up paired with.

    When contingency precedes markup the markup is re-priced, so
    ``markup_amount`` may differ from the markup passed in.
    """

    model_config = ConfigDict(frozen=True)

    contingency_amount: Decimal = ZERO
    markup_amount: Decimal = ZERO
    total_before_tax: Decimal = ZERO


class TaxBuckets(BaseModel):
    """Dollar amounts that can be independently switched into the tax base."""

    model_config = ConfigDict(frozen=True)

    materials: Decimal = ZERO
    labor: Decimal = ZERO
    equipment: Decimal = ZERO
    markup: Decimal = ZERO
    contingency: Decimal = ZERO
    mobilization: Decimal = ZERO


class TaxResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    taxable_base: Decimal = ZERO
    tax: Decimal = ZERO


class LineTotal(BaseModel):
    """Per-line pricing detail.

    Markup and contingency are only attributed to lines under flat markup;
    tiered markup is priced once for the whole estimate and leaves them None.
    """

    model_config = ConfigDict(frozen=True)

    index: int
    description: str
    kind: LineItemKind
    base: Decimal
    overhead: Decimal
    markup: Decimal | None = None
    contingency: Decimal | None = None
    markup_percent: Decimal | None = None
    contingency_percent: Decimal | None = None
    total: Decimal | None = None


class TotalsBreakdown(BaseModel):
    """Fully itemized cost breakdown for one estimate.

    ``grand_total`` is always the sum of direct, overhead, markup,
    contingency, mobilization and tax. The two percentages are display
    values: each bucket's dollars over the base it was charged on.
    """

    model_config = ConfigDict(frozen=True)

    direct: Decimal = ZERO
    overhead: Decimal = ZERO
    markup: Decimal = ZERO
    contingency: Decimal = ZERO
    mobilization: Decimal = ZERO
    tax: Decimal = ZERO
    grand_total: Decimal = ZERO
    markup_percent: Decimal = ZERO
    contingency_percent: Decimal = ZERO
    mobilization_count: int = 0
    taxable_base: Decimal = ZERO
    buckets: TaxBuckets = Field(default_factory=TaxBuckets)
    lines: list[LineTotal] = Field(default_factory=list)


class BidSnapshot(BaseModel):
    """An immutable priced copy of an estimate, used to render a stable bid.

    The request is stored alongside the totals so the snapshot can be
    re-derived and checked against the current engine.
    """

    model_config = ConfigDict(frozen=True)

    snapshot_id: str = Field(default_factory=lambda: uuid4().hex)
    project_name: str
    estimate_title: str = "Base Bid"
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    engine_version: str
    request: TotalsRequest
    totals: TotalsBreakdown

    def is_stale(self) -> bool:
        """True when re-pricing the stored request no longer gives the stored totals."""
        from bidcalc.engine import compute_totals

        return compute_totals(self.request) != self.totals

    def to_summary_dict(self) -> dict[str, Any]:
        """Produce a flat dict of display strings for the bid document."""
        from bidcalc.formatting import format_currency, format_percent

        totals = self.totals
        return {
            "project_name": self.project_name,
            "estimate_title": self.estimate_title,
            "direct_formatted": format_currency(totals.direct),
            "overhead_formatted": format_currency(totals.overhead),
            "markup_formatted": format_currency(totals.markup),
            "markup_percent_formatted": format_percent(totals.markup_percent),
            "contingency_formatted": format_currency(totals.contingency),
            "contingency_percent_formatted": format_percent(totals.contingency_percent),
            "mobilization_formatted": format_currency(totals.mobilization),
            "tax_formatted": format_currency(totals.tax),
            "grand_total_formatted": format_currency(totals.grand_total),
            "num_line_items": len(totals.lines),
            "created_at_formatted": self.created_at.strftime("%Y-%m-%d %H:%M"),
        }

    def to_export_dict(self) -> dict[str, Any]:
        """Produce the full nested, JSON-safe snapshot for storage or export."""
        return {
            "snapshot_id": self.snapshot_id,
            "project_name": self.project_name,
            "estimate_title": self.estimate_title,
            "created_at": self.created_at.isoformat(),
            "engine_version": self.engine_version,
            "request": self.request.model_dump(mode="json"),
            "totals": self.totals.model_dump(mode="json"),
        }
