"""Dependency construction for FastAPI endpoints."""

from __future__ import annotations

import logging

from bidcalc.config import pricing_config_from_env
from bidcalc.engine import TotalsEngine

logger = logging.getLogger(__name__)


def create_engine() -> TotalsEngine:
    """Create a TotalsEngine from the environment's pricing configuration.

    Reads BIDCALC_PRICING_CONFIG; falls back to the built-in defaults when
    it is not set. Raises ConfigurationError if the named file is unusable.
    """
    config = pricing_config_from_env()
    logger.info(
        "Created totals engine (markup tiers %s, contingency %s)",
        "on" if config.org_settings.use_markup_tiers else "off",
        config.org_settings.contingency_order.value,
    )
    return TotalsEngine(config)
