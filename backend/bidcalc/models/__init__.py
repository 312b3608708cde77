"""Domain models for the bidcalc totals engine."""

from bidcalc.models.enums import ContingencyOrder, LineItemKind, Unit
from bidcalc.models.pricing import (
    EstimateHeader,
    EstimateRequest,
    LineItem,
    MarkupTier,
    Mobilization,
    OrgSettings,
    PricingConfig,
    SnapshotRequest,
    TaxScope,
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

__all__ = [
    "BidSnapshot",
    "ContingencyOrder",
    "ContingencyResult",
    "EstimateHeader",
    "EstimateRequest",
    "LineItem",
    "LineItemKind",
    "LineTotal",
    "MarkupResult",
    "MarkupTier",
    "Mobilization",
    "OrgSettings",
    "PricingConfig",
    "SnapshotRequest",
    "TaxBuckets",
    "TaxResult",
    "TaxScope",
    "TotalsBreakdown",
    "TotalsRequest",
    "Unit",
]
