"""bidcalc: totals engine for construction bid estimates.

Usage::

    from bidcalc import create_default_engine, EstimateHeader, LineItem

    engine = create_default_engine()
    totals = engine.estimate(items, EstimateHeader(overhead_percent=10))
"""

from bidcalc.engine import (
    ENGINE_VERSION,
    TotalsEngine,
    compute_contingency,
    compute_line_base,
    compute_mobilization,
    compute_tax,
    compute_totals,
    resolve_flat_markup,
    resolve_tier_markup,
    take_snapshot,
)
from bidcalc.factory import create_default_engine
from bidcalc.models.enums import ContingencyOrder, LineItemKind, Unit
from bidcalc.models.pricing import (
    EstimateHeader,
    LineItem,
    MarkupTier,
    Mobilization,
    OrgSettings,
    PricingConfig,
    TaxScope,
    TotalsRequest,
)
from bidcalc.models.totals import BidSnapshot, TaxBuckets, TotalsBreakdown

__all__ = [
    "ENGINE_VERSION",
    "BidSnapshot",
    "ContingencyOrder",
    "EstimateHeader",
    "LineItem",
    "LineItemKind",
    "MarkupTier",
    "Mobilization",
    "OrgSettings",
    "PricingConfig",
    "TaxBuckets",
    "TaxScope",
    "TotalsBreakdown",
    "TotalsEngine",
    "TotalsRequest",
    "Unit",
    "compute_contingency",
    "compute_line_base",
    "compute_mobilization",
    "compute_tax",
    "compute_totals",
    "create_default_engine",
    "resolve_flat_markup",
    "resolve_tier_markup",
    "take_snapshot",
]
