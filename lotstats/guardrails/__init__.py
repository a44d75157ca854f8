"""
LOTSTATS Guardrails Module.

Boundary validation ensuring the statistics engine only ever sees
finite, non-negative prices.
"""

from lotstats.guardrails.validators import (
    check_dates_alignment,
    validate_dates,
    validate_price,
    validate_prices,
)

__all__ = [
    "check_dates_alignment",
    "validate_dates",
    "validate_price",
    "validate_prices",
]
