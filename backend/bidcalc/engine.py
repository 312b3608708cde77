"""Totals engine for construction bid estimates.

Pricing model, applied in this order:

1. **Direct cost**: Each line's base is ``quantity * unit_cost`` rounded to
   cents; direct is their sum.
2. **Overhead**: ``direct * overhead%``. Overhead is part of the markup and
   contingency base but is never taxed.
3. **Markup**: Charged on ``direct + overhead``. Flat markup is priced per
   line (line override, else the estimate rate). Tiered markup is priced once
   on the whole estimate as progressive brackets, walked in ascending rank.
4. **Contingency**: ``AFTER_MARKUP`` charges it on base + markup;
   ``BEFORE_MARKUP`` charges it on the base and re-prices markup on
   base + contingency.
5. **Mobilization**: ``price * count``; outside markup and contingency.
6. **Tax**: Rate times the sum of the buckets switched on in the tax scope.
   Mobilization rides in the equipment bucket.

Every function here is pure and touches no shared state.
Missing numbers have already been coerced to zero by the input models, so
nothing in this module raises for empty or partial input.
"""

from __future__ import annotations

import logging
import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from functools import partial
from typing import TYPE_CHECKING

from bidcalc.data.rebar import rebar_weight_lb
from bidcalc.models.enums import ContingencyOrder
from bidcalc.models.pricing import (
    EstimateHeader,
    LineItem,
    Mobilization,
    PricingConfig,
    TotalsRequest,
)
from bidcalc.models.totals import (
    BidSnapshot,
    ContingencyResult,
    LineTotal,
    MarkupResult,
    TaxBuckets,
    TaxResult,
    TotalsBreakdown,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

    from bidcalc.models.pricing import MarkupTier, TaxScope

logger = logging.getLogger(__name__)

ENGINE_VERSION = "1.0.0"

ZERO = Decimal(0)
HUNDRED = Decimal(100)
_CENTS = Decimal("0.01")


def round2(value: Decimal | int) -> Decimal:
    """Round to cents, half away from zero.

    Works at whatever precision the value needs, so very large amounts are
    rounded instead of overflowing the default 28-digit context.
    """
    value = Decimal(value)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        return value.quantize(_CENTS, rounding=ROUND_HALF_UP)


def _percent_of(amount: Decimal, base: Decimal) -> Decimal:
    if base <= 0:
        return ZERO
    return round2(amount / base * HUNDRED)


# ---------------------------------------------------------------------------
# Building blocks
# ---------------------------------------------------------------------------


def compute_line_base(item: LineItem) -> Decimal:
    """Base cost of one line: quantity times unit cost, in cents."""
    return round2(item.quantity * item.unit_cost)


def resolve_tier_markup(base: Decimal, tiers: Sequence[MarkupTier]) -> MarkupResult:
    """Price markup on ``base`` as progressive brackets.

    Tiers are sorted by rank here, whatever order they arrive in (ties keep
    their input order). Each tier absorbs up to its width of what is left of
    the base at its own percent, like income-tax brackets, until the base or
    the tiers run out. An unbounded tier absorbs everything left.

    Example: tiers 0-10k @20%, 10k-50k @15%, 50k+ @10% on a 60,000 base give
    2,000 + 6,000 + 1,000 = 9,000.
    """
    if base <= 0 or not tiers:
        return MarkupResult()

    remaining = base
    markup = ZERO
    for tier in sorted(tiers, key=lambda t: t.rank):
        if remaining <= 0:
            break
        width = tier.width
        portion = remaining if width is None else min(remaining, width)
        if portion > 0:
            markup += portion * tier.percent / HUNDRED
            remaining -= portion

    amount = round2(markup)
    return MarkupResult(markup_amount=amount, effective_percent=_percent_of(amount, base))


def resolve_flat_markup(base: Decimal, percent: Decimal) -> MarkupResult:
    """Price markup on ``base`` at a single flat percent."""
    amount = round2(base * percent / HUNDRED)
    return MarkupResult(markup_amount=amount, effective_percent=_percent_of(amount, base))


def compute_contingency(
    base: Decimal,
    markup_amount: Decimal,
    percent: Decimal,
    order: ContingencyOrder,
    reprice: Callable[[Decimal], Decimal] | None = None,
) -> ContingencyResult:
    """Apply contingency to a pre-markup ``base`` already carrying ``markup_amount``.

    Args:
        base: The pre-markup amount.
        markup_amount: Markup priced on ``base``.
        percent: Contingency percent.
        order: Whether contingency goes on before or after markup.
        reprice: Markup function used when contingency goes on first, so the
            markup follows the contingency-inflated base. Defaults to
            re-applying the effective rate of ``markup_amount`` on ``base``.

    Returns:
        Contingency, the markup that goes with it, and their total with base.
    """
    if order == ContingencyOrder.BEFORE_MARKUP:
        contingency = round2(base * percent / HUNDRED)
        inflated = base + contingency
        if reprice is not None:
            markup = reprice(inflated)
        elif base > 0:
            markup = round2(inflated * markup_amount / base)
        else:
            markup = markup_amount
    else:
        markup = markup_amount
        contingency = round2((base + markup) * percent / HUNDRED)

    return ContingencyResult(
        contingency_amount=contingency,
        markup_amount=markup,
        total_before_tax=round2(base + contingency + markup),
    )


def compute_mobilization(price: Decimal, count: int) -> Decimal:
    """Mobilization dollars; a negative count counts as none."""
    return round2(price * max(count, 0))


def compute_tax(buckets: TaxBuckets, tax_scope: TaxScope) -> TaxResult:
    """Tax the buckets switched on in ``tax_scope``.

    Each flag adds its bucket independently. The equipment flag also brings
    in mobilization.
    """
    taxable = ZERO
    if tax_scope.tax_materials:
        taxable += buckets.materials
    if tax_scope.tax_labor:
        taxable += buckets.labor
    if tax_scope.tax_equipment:
        taxable += buckets.equipment + buckets.mobilization
    if tax_scope.tax_markup:
        taxable += buckets.markup
    if tax_scope.tax_contingency:
        taxable += buckets.contingency

    return TaxResult(taxable_base=taxable, tax=round2(taxable * tax_scope.rate / HUNDRED))


def crew_days(items: Iterable[LineItem], hours_per_day: Decimal) -> int:
    """Whole crew days needed to work every line's duration."""
    total_hours = sum((item.duration_hours for item in items), ZERO)
    if total_hours <= 0 or hours_per_day <= 0:
        return 0
    return math.ceil(total_hours / hours_per_day)


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------


def _flat_markup_amount(base: Decimal, percent: Decimal) -> Decimal:
    return resolve_flat_markup(base, percent).markup_amount


def _tier_markup_amount(base: Decimal, tiers: Sequence[MarkupTier]) -> Decimal:
    return resolve_tier_markup(base, tiers).markup_amount


def compute_totals(request: TotalsRequest) -> TotalsBreakdown:
    """Price an estimate end to end.

    Returns an all-zero breakdown for an empty request. Non-negative input
    never yields negative tax or a negative grand total.
    """
    order = request.contingency_order
    overhead_rate = request.overhead_percent / HUNDRED
    priced = [(item, compute_line_base(item)) for item in request.items]

    direct = sum((base for _, base in priced), ZERO)
    overhead = round2(direct * overhead_rate)

    markup = ZERO
    contingency = ZERO
    markup_base = ZERO
    contingency_base = ZERO
    lines: list[LineTotal] = []

    if request.use_markup_tiers:
        loaded = direct + overhead
        reprice = partial(_tier_markup_amount, tiers=request.tiers)
        result = compute_contingency(
            loaded,
            reprice(loaded),
            request.contingency_percent,
            order,
            reprice=reprice,
        )
        markup = result.markup_amount
        contingency = result.contingency_amount
        if order == ContingencyOrder.BEFORE_MARKUP:
            markup_base, contingency_base = loaded + contingency, loaded
        else:
            markup_base, contingency_base = loaded, loaded + markup

        for index, (item, base) in enumerate(priced):
            lines.append(LineTotal(
                index=index,
                description=item.description,
                kind=item.kind,
                base=base,
                overhead=round2(base * overhead_rate),
            ))
    else:
        for index, (item, base) in enumerate(priced):
            markup_pct = (
                item.markup_percent if item.markup_percent is not None
                else request.markup_percent
            )
            contingency_pct = (
                item.contingency_percent if item.contingency_percent is not None
                else request.contingency_percent
            )
            loaded = base + base * overhead_rate
            reprice = partial(_flat_markup_amount, percent=markup_pct)
            result = compute_contingency(
                loaded, reprice(loaded), contingency_pct, order, reprice=reprice,
            )
            markup += result.markup_amount
            contingency += result.contingency_amount
            if order == ContingencyOrder.BEFORE_MARKUP:
                markup_base += loaded + result.contingency_amount
                contingency_base += loaded
            else:
                markup_base += loaded
                contingency_base += loaded + result.markup_amount

            lines.append(LineTotal(
                index=index,
                description=item.description,
                kind=item.kind,
                base=base,
                overhead=round2(base * overhead_rate),
                markup=result.markup_amount,
                contingency=result.contingency_amount,
                markup_percent=markup_pct,
                contingency_percent=contingency_pct,
                total=result.total_before_tax,
            ))

    mobilization = compute_mobilization(request.mobilization.price, request.mobilization.count)

    buckets = TaxBuckets(
        materials=sum((base for item, base in priced if item.is_material), ZERO),
        labor=sum((base for item, base in priced if item.is_labor), ZERO),
        equipment=sum((base for item, base in priced if item.is_equipment), ZERO),
        markup=markup,
        contingency=contingency,
        mobilization=mobilization,
    )
    tax = compute_tax(buckets, request.tax_scope)

    grand_total = direct + overhead + markup + contingency + mobilization + tax.tax

    logger.debug(
        "Priced %d line items: direct=%s markup=%s contingency=%s grand_total=%s",
        len(request.items),
        direct,
        markup,
        contingency,
        grand_total,
    )

    return TotalsBreakdown(
        direct=round2(direct),
        overhead=overhead,
        markup=round2(markup),
        contingency=round2(contingency),
        mobilization=mobilization,
        tax=tax.tax,
        grand_total=round2(grand_total),
        markup_percent=_percent_of(markup, markup_base),
        contingency_percent=_percent_of(contingency, contingency_base),
        mobilization_count=max(request.mobilization.count, 0),
        taxable_base=round2(tax.taxable_base),
        buckets=buckets,
        lines=lines,
    )


class TotalsEngine:
    """Prices estimates against one organization's pricing configuration.

    Args:
        config: Org-wide settings, tax scope and markup tiers. The engine
            never mutates it, and it holds no other state.

    Example::

        from bidcalc.data.defaults import DEFAULT_PRICING_CONFIG

        engine = TotalsEngine(DEFAULT_PRICING_CONFIG)
        totals = engine.estimate(items, EstimateHeader(overhead_percent=10))
    """

    def __init__(self, config: PricingConfig) -> None:
        self._config = config

    @property
    def config(self) -> PricingConfig:
        return self._config

    def build_request(
        self,
        items: Sequence[LineItem],
        header: EstimateHeader | None = None,
    ) -> TotalsRequest:
        """Resolve estimate overrides against org defaults into a TotalsRequest."""
        header = header or EstimateHeader()
        settings = self._config.org_settings

        contingency_percent = (
            header.contingency_percent if header.contingency_percent is not None
            else settings.default_contingency_percent
        )
        markup_percent = header.markup_percent if header.markup_percent is not None else ZERO

        if settings.mobilization_auto_per_crew_day:
            hours_per_day = settings.crew_hours_per_day + header.overtime_hours_per_day
            mobilization_count = crew_days(items, hours_per_day)
        else:
            mobilization_count = header.mobilization_count

        return TotalsRequest(
            items=list(items),
            overhead_percent=header.overhead_percent,
            use_markup_tiers=settings.use_markup_tiers,
            tiers=self._config.markup_tiers,
            markup_percent=markup_percent,
            contingency_percent=contingency_percent,
            contingency_order=settings.contingency_order,
            tax_scope=self._config.tax_scope,
            mobilization=Mobilization(
                count=mobilization_count,
                price=settings.mobilization_price,
            ),
        )

    def estimate(
        self,
        items: Sequence[LineItem],
        header: EstimateHeader | None = None,
    ) -> TotalsBreakdown:
        """Price ``items`` under this engine's configuration."""
        return compute_totals(self.build_request(items, header))

    def snapshot(
        self,
        items: Sequence[LineItem],
        header: EstimateHeader | None,
        project_name: str,
    ) -> BidSnapshot:
        """Price ``items`` and freeze the result for a bid document."""
        header = header or EstimateHeader()
        return take_snapshot(
            self.build_request(items, header),
            project_name=project_name,
            estimate_title=header.title,
        )

    def rebar_weight_lb(self, bar_size: str, length_lf: Decimal | int) -> Decimal:
        """Weight in pounds of bar, using this organization's conversion table.

        Raises:
            ValueError: If the bar size is not in the org table.
        """
        return rebar_weight_lb(
            bar_size, length_lf, table=self._config.rebar_pounds_per_foot,
        )


def take_snapshot(
    request: TotalsRequest,
    project_name: str,
    estimate_title: str = "Base Bid",
) -> BidSnapshot:
    """Price ``request`` and capture request and totals as one immutable record."""
    return BidSnapshot(
        project_name=project_name,
        estimate_title=estimate_title,
        engine_version=ENGINE_VERSION,
        request=request,
        totals=compute_totals(request),
    )
