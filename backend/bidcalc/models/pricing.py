"""Pricing input models for the bidcalc totals engine.

Records arrive from a loosely typed data store, so every model:

- accepts snake_case field names as well as the store's camelCase keys,
- treats a ``null`` field exactly like a missing one (the named default wins),
- is frozen, so a configuration value cannot drift while an estimate is priced.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from bidcalc.data.rebar import REBAR_POUNDS_PER_FOOT
from bidcalc.models.enums import ContingencyOrder, LineItemKind, Unit

ZERO = Decimal(0)


def _aliases(name: str, *legacy: str) -> AliasChoices:
    return AliasChoices(name, to_camel(name), *legacy)


class PricingRecord(BaseModel):
    """Base for all pricing records."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @model_validator(mode="before")
    @classmethod
    def nulls_take_defaults(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class LineItem(PricingRecord):
    """One priced row of work, material or equipment.

    Category flags are independent: a turnkey slab can be material, labor
    and equipment at once, or none of them.
    """

    description: str = ""
    kind: LineItemKind = LineItemKind.OTHER
    # Known units become Unit members; anything else ("yd³", "hr") is kept as text
    unit: Unit | str = Field(default=Unit.EA, union_mode="left_to_right")
    quantity: Decimal = ZERO
    unit_cost: Decimal = ZERO
    is_material: bool = False
    is_labor: bool = False
    is_equipment: bool = False
    # Overrides, honoured only when tiered markup is off
    markup_percent: Decimal | None = Field(
        default=None, validation_alias=_aliases("markup_percent", "markupPct"),
    )
    contingency_percent: Decimal | None = Field(
        default=None, validation_alias=_aliases("contingency_percent", "contingencyPct"),
    )
    duration_hours: Decimal = ZERO

    @field_validator("kind", mode="before")
    @classmethod
    def unknown_kind_is_other(cls, v: Any) -> Any:
        if isinstance(v, LineItemKind):
            return v
        try:
            return LineItemKind(str(v).upper())
        except ValueError:
            return LineItemKind.OTHER


class MarkupTier(PricingRecord):
    """A markup band: ``percent`` applies to the slice of base in [min, max)."""

    min_amount: Decimal = ZERO
    max_amount: Decimal | None = None
    percent: Decimal = ZERO
    rank: int = 0

    @property
    def width(self) -> Decimal | None:
        """Band width, or None for an unbounded band. Inverted bands are empty."""
        if self.max_amount is None:
            return None
        return max(self.max_amount - self.min_amount, ZERO)


class OrgSettings(PricingRecord):
    """Organization-wide pricing behaviour."""

    use_markup_tiers: bool = False
    default_contingency_percent: Decimal = Field(
        default=ZERO,
        validation_alias=_aliases("default_contingency_percent", "defaultContingency"),
    )
    contingency_order: ContingencyOrder = ContingencyOrder.AFTER_MARKUP
    mobilization_price: Decimal = ZERO
    mobilization_auto_per_crew_day: bool = False
    crew_hours_per_day: Decimal = Decimal(8)


class TaxScope(PricingRecord):
    """Tax rate (percent) and which buckets feed the taxable base.

    Flags also accept the short bucket names (``materials``, ``labor``...)
    used by callers that send ``taxScope`` as a bare set of switches.
    """

    rate: Decimal = ZERO
    tax_materials: bool = Field(
        default=False, validation_alias=_aliases("tax_materials", "materials"),
    )
    tax_labor: bool = Field(
        default=False, validation_alias=_aliases("tax_labor", "labor"),
    )
    tax_equipment: bool = Field(
        default=False, validation_alias=_aliases("tax_equipment", "equipment"),
    )
    tax_markup: bool = Field(
        default=False, validation_alias=_aliases("tax_markup", "markup"),
    )
    tax_contingency: bool = Field(
        default=False, validation_alias=_aliases("tax_contingency", "contingency"),
    )


class EstimateHeader(PricingRecord):
    """Estimate-level fields that sit above the line items."""

    title: str = "Base Bid"
    overhead_percent: Decimal = Field(
        default=ZERO, validation_alias=_aliases("overhead_percent", "overheadPct"),
    )
    mobilization_count: int = 0
    markup_percent: Decimal | None = Field(
        default=None, validation_alias=_aliases("markup_percent", "markupPct"),
    )
    contingency_percent: Decimal | None = Field(
        default=None, validation_alias=_aliases("contingency_percent", "contingencyPct"),
    )
    overtime_hours_per_day: Decimal = ZERO


class Mobilization(PricingRecord):
    """Mobilization count and unit price for one estimate."""

    count: int = 0
    price: Decimal = ZERO


class TotalsRequest(PricingRecord):
    """Everything the totals engine needs for one pricing pass."""

    items: list[LineItem] = Field(default_factory=list)
    overhead_percent: Decimal = ZERO
    use_markup_tiers: bool = False
    tiers: list[MarkupTier] = Field(default_factory=list)
    markup_percent: Decimal = ZERO
    contingency_percent: Decimal = ZERO
    contingency_order: ContingencyOrder = ContingencyOrder.AFTER_MARKUP
    tax_scope: TaxScope = Field(default_factory=TaxScope)
    mobilization: Mobilization = Field(default_factory=Mobilization)

    @model_validator(mode="before")
    @classmethod
    def fold_tax_rate(cls, data: Any) -> Any:
        """Move a top-level ``taxRate`` into ``tax_scope.rate``.

        The top-level rate wins over a rate already inside the scope.
        """
        if not isinstance(data, dict):
            return data
        rate = data.get("tax_rate")
        if rate is None:
            rate = data.get("taxRate")
        if rate is None:
            return data

        scope = data.get("tax_scope")
        if scope is None:
            scope = data.get("taxScope")
        if isinstance(scope, TaxScope):
            scope = scope.model_dump()
        elif not isinstance(scope, dict):
            scope = {}

        folded = {
            key: value for key, value in data.items()
            if key not in ("tax_rate", "taxRate", "tax_scope", "taxScope")
        }
        folded["tax_scope"] = {**scope, "rate": rate}
        return folded


class PricingConfig(PricingRecord):
    """Immutable org-wide configuration handed to a TotalsEngine."""

    org_settings: OrgSettings = Field(default_factory=OrgSettings)
    tax_scope: TaxScope = Field(default_factory=TaxScope)
    markup_tiers: list[MarkupTier] = Field(default_factory=list)
    rebar_pounds_per_foot: dict[str, Decimal] = Field(
        default_factory=lambda: dict(REBAR_POUNDS_PER_FOOT),
    )


class EstimateRequest(PricingRecord):
    """Line items plus header, priced against an engine's configuration."""

    items: list[LineItem] = Field(default_factory=list)
    header: EstimateHeader = Field(default_factory=EstimateHeader)


class SnapshotRequest(EstimateRequest):
    """An estimate to be priced and frozen for a bid document."""

    project_name: str = "Untitled Project"
