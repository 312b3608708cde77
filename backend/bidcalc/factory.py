"""Factory functions for creating pre-configured TotalsEngine instances."""

from __future__ import annotations

from bidcalc.data.defaults import DEFAULT_PRICING_CONFIG
from bidcalc.engine import TotalsEngine


def create_default_engine() -> TotalsEngine:
    """Create a TotalsEngine wired up with the default pricing configuration.

    The defaults are what a new organization starts with: tiered markup
    (20% / 15% / 10% brackets), 5% contingency after markup, a $3,850
    mobilization and no sales tax.

    Example::

        from bidcalc import create_default_engine

        engine = create_default_engine()
        totals = engine.estimate(items, header)
    """
    return TotalsEngine(DEFAULT_PRICING_CONFIG)
