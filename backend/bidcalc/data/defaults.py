"""Default pricing configuration and a demo estimate.

These are the values a new organization starts with: tiered markup on,
5% contingency after markup, one $3,850 mobilization, and no sales tax.
"""

from decimal import Decimal

from bidcalc.models.enums import ContingencyOrder, LineItemKind, Unit
from bidcalc.models.pricing import (
    EstimateHeader,
    LineItem,
    MarkupTier,
    OrgSettings,
    PricingConfig,
    TaxScope,
)

DEFAULT_ORG_SETTINGS = OrgSettings(
    use_markup_tiers=True,
    default_contingency_percent=Decimal(5),
    contingency_order=ContingencyOrder.AFTER_MARKUP,
    mobilization_price=Decimal(3850),
    mobilization_auto_per_crew_day=False,
    crew_hours_per_day=Decimal(8),
)

DEFAULT_TAX_SCOPE = TaxScope(rate=Decimal(0))

DEFAULT_MARKUP_TIERS: list[MarkupTier] = [
    MarkupTier(min_amount=Decimal(0), max_amount=Decimal(10_000), percent=Decimal(20), rank=1),
    MarkupTier(min_amount=Decimal(10_000), max_amount=Decimal(50_000), percent=Decimal(15), rank=2),
    MarkupTier(min_amount=Decimal(50_000), max_amount=None, percent=Decimal(10), rank=3),
]

DEFAULT_PRICING_CONFIG = PricingConfig(
    org_settings=DEFAULT_ORG_SETTINGS,
    tax_scope=DEFAULT_TAX_SCOPE,
    markup_tiers=DEFAULT_MARKUP_TIERS,
)

# --- Demo estimate: warehouse expansion, concrete package ---

DEMO_PROJECT_NAME = "Warehouse Expansion"

DEMO_HEADER = EstimateHeader(
    title="Base Bid",
    overhead_percent=Decimal(10),
    mobilization_count=1,
)

DEMO_LINE_ITEMS: list[LineItem] = [
    LineItem(
        description='6" slab on grade',
        kind=LineItemKind.SLAB,
        unit=Unit.SF,
        quantity=Decimal(20_000),
        unit_cost=Decimal("5.25"),
        markup_percent=Decimal(20),
        contingency_percent=Decimal(5),
        duration_hours=Decimal(160),
        is_material=True,
        is_labor=True,
        is_equipment=True,
    ),
    LineItem(
        description='Strip footing 24"x12"',
        kind=LineItemKind.FOOTING,
        unit=Unit.LF,
        quantity=Decimal(600),
        unit_cost=Decimal("18.50"),
        markup_percent=Decimal(15),
        contingency_percent=Decimal(5),
        duration_hours=Decimal(80),
        is_material=True,
        is_labor=True,
    ),
    LineItem(
        description='8" formed wall',
        kind=LineItemKind.WALL,
        unit=Unit.SF,
        quantity=Decimal(3_000),
        unit_cost=Decimal("15.00"),
        markup_percent=Decimal(12),
        contingency_percent=Decimal(5),
        duration_hours=Decimal(120),
        is_material=True,
        is_labor=True,
    ),
]
