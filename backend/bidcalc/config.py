"""Pricing configuration loading.

An organization's pricing configuration (settings, tax scope, markup tiers)
lives in a JSON file whose path is given by ``BIDCALC_PRICING_CONFIG``. The
file may use either snake_case or the data store's camelCase keys. When the
variable is unset the built-in defaults are used.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from pydantic import ValidationError

from bidcalc.data.defaults import DEFAULT_PRICING_CONFIG
from bidcalc.exceptions import ConfigurationError
from bidcalc.models.pricing import PricingConfig

logger = logging.getLogger(__name__)

PRICING_CONFIG_ENV = "BIDCALC_PRICING_CONFIG"
CORS_ORIGINS_ENV = "BIDCALC_CORS_ORIGINS"
DEFAULT_CORS_ORIGINS = "http://localhost:3000"


def load_pricing_config(path: str | Path) -> PricingConfig:
    """Read and validate a pricing configuration file.

    Raises:
        ConfigurationError: If the file cannot be read or does not describe
            a valid configuration.
    """
    config_path = Path(path)
    try:
        raw = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        msg = f"Cannot read pricing config {config_path}: {exc}"
        raise ConfigurationError(msg) from exc

    try:
        config = PricingConfig.model_validate_json(raw)
    except ValidationError as exc:
        msg = f"Invalid pricing config {config_path}: {exc}"
        raise ConfigurationError(msg) from exc

    logger.info(
        "Loaded pricing config from %s (%d markup tiers, tiers %s)",
        config_path,
        len(config.markup_tiers),
        "on" if config.org_settings.use_markup_tiers else "off",
    )
    return config


def pricing_config_from_env() -> PricingConfig:
    """Load the configuration named by BIDCALC_PRICING_CONFIG, or the defaults."""
    path = os.environ.get(PRICING_CONFIG_ENV, "").strip()
    if not path:
        logger.info("%s not set; using default pricing config", PRICING_CONFIG_ENV)
        return DEFAULT_PRICING_CONFIG
    return load_pricing_config(path)


def cors_origins_from_env() -> list[str]:
    """Allowed CORS origins from BIDCALC_CORS_ORIGINS (comma-separated)."""
    raw = os.environ.get(CORS_ORIGINS_ENV, DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]
