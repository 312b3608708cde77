"""Reference and default pricing data for bidcalc."""

from bidcalc.data.rebar import REBAR_POUNDS_PER_FOOT, rebar_weight_lb

__all__ = [
    "REBAR_POUNDS_PER_FOOT",
    "rebar_weight_lb",
]
