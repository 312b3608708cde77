"""Custom exception hierarchy for bidcalc."""

from __future__ import annotations


class BidcalcError(Exception):
    """Base exception for all bidcalc errors."""


class ConfigurationError(BidcalcError):
    """Raised when a pricing configuration cannot be loaded."""
